"""Partition checkout lines into one bucket per owning curator."""

from dataclasses import dataclass, field
from decimal import Decimal

from marketplace.shared.money import quantize, to_decimal


@dataclass(frozen=True)
class PricedLine:
    """A requested line resolved against the live product."""

    product_id: str
    curator_id: str
    title: str
    unit_price: Decimal
    quantity: int
    size: str | None = None
    color: str | None = None

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class CuratorBucket:
    curator_id: str
    lines: list[PricedLine] = field(default_factory=list)

    @property
    def subtotal(self) -> Decimal:
        # Summed unrounded, rounded once
        return quantize(sum((line.line_total for line in self.lines), Decimal("0")))


def price_line(product, quantity, size=None, color=None) -> PricedLine:
    return PricedLine(
        product_id=str(product.id),
        curator_id=str(product.curator_id),
        title=product.title,
        unit_price=to_decimal(product.price),
        quantity=quantity,
        size=size,
        color=color,
    )


def split_by_curator(lines: list[PricedLine]) -> list[CuratorBucket]:
    """Group lines by curator, keeping first-seen order of curators and lines."""
    buckets: dict[str, CuratorBucket] = {}
    for line in lines:
        bucket = buckets.setdefault(line.curator_id, CuratorBucket(curator_id=line.curator_id))
        bucket.lines.append(line)
    return list(buckets.values())
