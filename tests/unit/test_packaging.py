"""
Tests for parcel normalization and package splitting.
"""
from decimal import Decimal

import pytest

from auspost_shipping.modules.shipping.packaging import (
    DEFAULT_LIMITS,
    CarrierServiceLimits,
    NormalizedParcel,
    clamp_length,
    clamp_weight,
    count_packages,
    grams_to_kilograms,
    millimetres_to_centimetres,
    split_parcel,
    to_carrier_parcel,
)


class TestClamps:
    """Minimum weight and length clamps."""

    def test_weight_below_minimum_is_raised(self):
        assert clamp_weight(120) == 500
        assert clamp_weight(499) == 500

    def test_weight_at_or_above_minimum_is_kept(self):
        assert clamp_weight(500) == 500
        assert clamp_weight(1234) == 1234

    def test_length_below_minimum_is_raised(self):
        assert clamp_length(1) == 50
        assert clamp_length(49) == 50
        assert clamp_length(50) == 50
        assert clamp_length(300) == 300


class TestCountPackages:
    """Package count from dimension and weight limits."""

    def test_within_limits_is_one_package(self):
        assert count_packages(1000, 300, 200, 100, domestic=True) == 1

    def test_domestic_weight_split(self):
        # ceil(45000 / 22000) = 3
        assert count_packages(45000, 300, 200, 100, domestic=True) == 3

    def test_international_weight_limit_is_lower(self):
        assert count_packages(21000, 300, 200, 100, domestic=True) == 1
        assert count_packages(21000, 300, 200, 100, domestic=False) == 2

    def test_weight_exactly_at_maximum_is_not_split(self):
        assert count_packages(22000, 300, 200, 100, domestic=True) == 1

    def test_dimension_split_uses_longest_side(self):
        # ceil(2200 / 1050) = 3
        assert count_packages(1000, 300, 2200, 100, domestic=True) == 3

    def test_larger_of_the_two_counts_wins(self):
        # dims -> 2, weight -> 3
        assert count_packages(45000, 1500, 200, 100, domestic=True) == 3
        # dims -> 4, weight -> 2
        assert count_packages(30000, 4000, 200, 100, domestic=True) == 4

    @pytest.mark.parametrize("weight,length", [(0, 0), (500, 50), (1, 1)])
    def test_never_less_than_one(self, weight, length):
        assert count_packages(weight, length, length, length, domestic=False) >= 1


class TestSplitParcel:
    """Per-package parcel after splitting and girth checks."""

    def test_single_package_unchanged(self):
        parcel = split_parcel(1200, 300, 200, 100, domestic=True)
        assert parcel == NormalizedParcel(weight=1200, length=300, width=200, height=100, total_packages=1)

    def test_weight_split_divides_everything(self):
        parcel = split_parcel(45000, 600, 400, 300, domestic=True)
        assert parcel.total_packages == 3
        assert parcel.weight == 15000
        assert parcel.length == 200
        assert parcel.width == 133
        assert parcel.height == 100

    def test_split_reclamps_to_minimums(self):
        parcel = split_parcel(45000, 120, 90, 60, domestic=True)
        assert parcel.total_packages == 3
        assert parcel.length == 50
        assert parcel.width == 50
        assert parcel.height == 50

    def test_split_weight_reclamped_to_minimum(self):
        parcel = split_parcel(1000, 3200, 200, 100, domestic=True)
        assert parcel.total_packages == 4
        assert parcel.weight == 500

    def test_package_count_kept_after_reclamp(self):
        # 4 packages by length; per-package values no longer justify 4 but the count stays
        parcel = split_parcel(600, 4200, 60, 60, domestic=True)
        assert parcel.total_packages == 4
        assert parcel.length == 1050
        assert parcel.weight == 500

    def test_small_girth_resets_height_and_width(self):
        limits = CarrierServiceLimits(min_length=10)
        parcel = split_parcel(1000, 300, 20, 30, domestic=True, limits=limits)
        # girth = 2 * (30 + 20) = 100 < 160
        assert parcel.height == 10
        assert parcel.width == 10
        assert parcel.length == 300

    def test_girth_clamp_with_five_centimetre_sides(self):
        limits = CarrierServiceLimits(min_girth=250)
        parcel = split_parcel(1000, 300, 50, 50, domestic=True, limits=limits)
        # girth = 200 < 250
        assert parcel.height == DEFAULT_LIMITS.min_length
        assert parcel.width == DEFAULT_LIMITS.min_length

    def test_large_girth_resets_to_quarter_max_length(self):
        parcel = split_parcel(1000, 300, 400, 400, domestic=True)
        # girth = 1600 > 1400
        assert parcel.height == 262
        assert parcel.width == 262
        assert parcel.length == 300

    def test_girth_within_range_untouched(self):
        parcel = split_parcel(1000, 300, 300, 300, domestic=True)
        assert parcel.height == 300
        assert parcel.width == 300


class TestCarrierUnits:
    """Conversion to centimetres and kilograms."""

    def test_centimetres_round_up_remainder(self):
        assert millimetres_to_centimetres(101) == 11
        assert millimetres_to_centimetres(109) == 11

    def test_centimetres_exact(self):
        assert millimetres_to_centimetres(100) == 10
        assert millimetres_to_centimetres(50) == 5

    def test_kilograms_two_decimals(self):
        assert grams_to_kilograms(1234) == Decimal("1.23")
        assert grams_to_kilograms(500) == Decimal("0.50")
        assert grams_to_kilograms(22000) == Decimal("22.00")

    def test_kilograms_ties_round_to_even(self):
        assert grams_to_kilograms(1235) == Decimal("1.24")
        assert grams_to_kilograms(1245) == Decimal("1.24")

    def test_to_carrier_parcel(self):
        parcel = to_carrier_parcel(NormalizedParcel(weight=15000, length=200, width=133, height=101, total_packages=3))
        assert parcel.length == 20
        assert parcel.width == 14
        assert parcel.height == 11
        assert parcel.weight == Decimal("15.00")
        assert parcel.total_packages == 3
        assert parcel.weight_param() == "15.00"
