"""Parsing helpers for free-text descriptors entered by curators."""

import re
import unicodedata


def parse_descriptor_list(raw) -> list[str]:
    """Split a comma-separated descriptor list into trimmed, unique entries.

    Accepts either a string ("S, M ,L") or an iterable of strings. Empty
    entries are dropped and the first occurrence of a duplicate wins, so
    the order the curator typed is preserved.
    """
    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else list(raw)

    seen = []
    for part in parts:
        value = str(part).strip()
        if value and value not in seen:
            seen.append(value)
    return seen


def slugify(value: str) -> str:
    """Lowercase, ASCII-folded, hyphen-separated slug."""
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug or "store"
