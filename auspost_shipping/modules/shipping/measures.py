"""
Cart totals in the store's primary units.
"""
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List, Tuple

if TYPE_CHECKING:
    from auspost_shipping.modules.shipping.carriers.base import ShipmentItem


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _shippable(items: Iterable["ShipmentItem"], ignore_free_shipped_items: bool) -> List["ShipmentItem"]:
    if not ignore_free_shipped_items:
        return list(items)
    return [item for item in items if not item.is_free_shipping]


def get_total_weight(items: Iterable["ShipmentItem"], ignore_free_shipped_items: bool = True) -> Decimal:
    """Sum of item weight times quantity."""
    return sum(
        (_to_decimal(item.weight) * item.quantity for item in _shippable(items, ignore_free_shipped_items)),
        Decimal("0"),
    )


def get_dimensions(
    items: Iterable["ShipmentItem"],
    ignore_free_shipped_items: bool = True,
) -> Tuple[Decimal, Decimal, Decimal]:
    """
    Overall (length, width, height) of the cart.

    A single item shipped once keeps its own dimensions. Anything else is
    packed as a cube of equal volume, with each side raised to the largest
    item side on that axis so long thin items (1x1x20) are not underquoted.
    """
    package_items = _shippable(items, ignore_free_shipped_items)
    if not package_items:
        return Decimal("0"), Decimal("0"), Decimal("0")

    if len(package_items) == 1 and package_items[0].quantity == 1:
        item = package_items[0]
        return _to_decimal(item.length), _to_decimal(item.width), _to_decimal(item.height)

    total_volume = sum(
        (_to_decimal(i.length) * _to_decimal(i.width) * _to_decimal(i.height) * i.quantity for i in package_items),
        Decimal("0"),
    )
    side = Decimal(str(float(total_volume) ** (1.0 / 3.0))) if total_volume > 0 else Decimal("0")

    length = max(side, max(_to_decimal(i.length) for i in package_items))
    width = max(side, max(_to_decimal(i.width) for i in package_items))
    height = max(side, max(_to_decimal(i.height) for i in package_items))
    return length, width, height
