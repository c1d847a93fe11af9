"""
Parcel normalization and package splitting for Australia Post.

All arithmetic is done in carrier base units (grams, millimetres) as
integers. Conversion to the units sent on the wire (kilograms, centimetres)
happens last, in to_carrier_parcel().

Splitting rules:
- Any side over MAX_LENGTH, or weight over the destination maximum, splits
  the shipment into N identical packages (N = worst of the two ratios)
- Per-package weight/dimensions are the integer share, re-clamped to minimums
- Girth outside [MIN_GIRTH, MAX_GIRTH] resets height and width
- N is never recomputed after re-clamping; the carrier bills per package
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CarrierServiceLimits:
    """Australia Post parcel limits, in grams and millimetres."""
    min_length: int = 50  # 5 cm
    max_length: int = 1050  # 105 cm
    min_weight: int = 500  # 500 g
    max_domestic_weight: int = 22000  # 22 kg
    max_international_weight: int = 20000  # 20 kg
    min_girth: int = 160  # 16 cm
    max_girth: int = 1400  # 140 cm
    one_kilo: int = 1000
    one_centimeter: int = 10

    def max_weight(self, domestic: bool) -> int:
        return self.max_domestic_weight if domestic else self.max_international_weight


DEFAULT_LIMITS = CarrierServiceLimits()


@dataclass(frozen=True)
class NormalizedParcel:
    """Per-package parcel in carrier base units."""
    weight: int  # grams
    length: int  # millimetres
    width: int  # millimetres
    height: int  # millimetres
    total_packages: int = 1


@dataclass(frozen=True)
class CarrierParcel:
    """Parcel exactly as described to the carrier."""
    length: int  # centimetres
    width: int  # centimetres
    height: int  # centimetres
    weight: Decimal  # kilograms, 2 decimal places
    total_packages: int = 1

    def weight_param(self) -> str:
        """Culture-invariant weight for the query string ("1.23")."""
        return f"{self.weight:.2f}"


def clamp_weight(grams: int, limits: CarrierServiceLimits = DEFAULT_LIMITS) -> int:
    return max(grams, limits.min_weight)


def clamp_length(millimetres: int, limits: CarrierServiceLimits = DEFAULT_LIMITS) -> int:
    return max(millimetres, limits.min_length)


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def count_packages(
    weight: int,
    length: int,
    width: int,
    height: int,
    domestic: bool,
    limits: CarrierServiceLimits = DEFAULT_LIMITS,
) -> int:
    """Number of packages needed to keep every package within carrier limits."""
    packages_by_dims = 1
    longest = max(length, width, height)
    if longest > limits.max_length:
        packages_by_dims = _ceil_div(longest, limits.max_length)

    packages_by_weight = 1
    max_weight = limits.max_weight(domestic)
    if weight > max_weight:
        packages_by_weight = _ceil_div(weight, max_weight)

    return max(packages_by_dims, packages_by_weight, 1)


def split_parcel(
    weight: int,
    length: int,
    width: int,
    height: int,
    domestic: bool,
    limits: CarrierServiceLimits = DEFAULT_LIMITS,
) -> NormalizedParcel:
    """
    Split a clamped shipment into identical packages.

    Args:
        weight: Total weight in grams (already clamped to min weight)
        length: Length in millimetres (already clamped to min length)
        width: Width in millimetres
        height: Height in millimetres
        domestic: Destination is the carrier's home country
        limits: Carrier limits

    Returns:
        NormalizedParcel describing one of the identical packages
    """
    total_packages = count_packages(weight, length, width, height, domestic, limits)

    if total_packages > 1:
        weight = clamp_weight(weight // total_packages, limits)
        length = clamp_length(length // total_packages, limits)
        width = clamp_length(width // total_packages, limits)
        height = clamp_length(height // total_packages, limits)
        logger.debug(
            f"Split into {total_packages} packages: {weight}g {length}x{width}x{height}mm each"
        )

    # Both checks compare against the girth before either reset
    girth = 2 * (height + width)
    if girth < limits.min_girth:
        height = limits.min_length
        width = limits.min_length
    if girth > limits.max_girth:
        height = limits.max_length // 4
        width = limits.max_length // 4

    return NormalizedParcel(
        weight=weight,
        length=length,
        width=width,
        height=height,
        total_packages=total_packages,
    )


def millimetres_to_centimetres(millimetres: int, limits: CarrierServiceLimits = DEFAULT_LIMITS) -> int:
    """Whole centimetres, rounding any remainder up (101mm -> 11cm)."""
    return millimetres // limits.one_centimeter + (1 if millimetres % limits.one_centimeter > 0 else 0)


def grams_to_kilograms(grams: int, limits: CarrierServiceLimits = DEFAULT_LIMITS) -> Decimal:
    """Kilograms to two decimals, ties to even (1234g -> 1.23kg)."""
    return (Decimal(grams) / Decimal(limits.one_kilo)).quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)


def to_carrier_parcel(parcel: NormalizedParcel, limits: CarrierServiceLimits = DEFAULT_LIMITS) -> CarrierParcel:
    return CarrierParcel(
        length=millimetres_to_centimetres(parcel.length, limits),
        width=millimetres_to_centimetres(parcel.width, limits),
        height=millimetres_to_centimetres(parcel.height, limits),
        weight=grams_to_kilograms(parcel.weight, limits),
        total_packages=parcel.total_packages,
    )
