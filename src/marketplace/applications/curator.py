"""CuratorProfile aggregate: the storefront identity products and orders hang off."""

from protean.fields import Boolean, Identifier, String, Text

from marketplace.applications.events import CuratorProfileCreated
from marketplace.domain import marketplace
from marketplace.shared.text import slugify


@marketplace.aggregate
class CuratorProfile:
    user_id: Identifier(required=True)
    store_name: String(required=True, max_length=255)
    slug: String(required=True, max_length=255)
    bio: Text()
    is_public: Boolean(default=True)

    @classmethod
    def open_store(cls, user_id, store_name, slug, bio=None):
        profile = cls(user_id=user_id, store_name=store_name, slug=slug, bio=bio)
        profile.raise_(
            CuratorProfileCreated(
                curator_id=str(profile.id),
                user_id=str(user_id),
                store_name=store_name,
                slug=slug,
            )
        )
        return profile


def unique_slug(store_name: str, taken) -> str:
    """Slug for ``store_name`` that is not in ``taken``: base, base-2, base-3, ..."""
    base = slugify(store_name)
    taken = set(taken)
    if base not in taken:
        return base
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"


@marketplace.repository(part_of=CuratorProfile)
class CuratorProfileRepository:
    def for_user(self, user_id) -> CuratorProfile | None:
        found = self._dao.query.filter(user_id=str(user_id)).all().items
        return found[0] if found else None

    def taken_slugs(self) -> set[str]:
        return {profile.slug for profile in self._dao.query.all().items}
