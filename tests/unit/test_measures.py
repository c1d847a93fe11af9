"""
Tests for cart totals and host collaborator implementations.
"""
from decimal import Decimal

import pytest

from auspost_shipping.modules.shipping.carriers.base import ShipmentItem
from auspost_shipping.modules.shipping.collaborators import (
    ExchangeRateCurrencyService,
    InMemoryLocalizationService,
    InMemorySettingsStore,
    MeasureService,
    StaticCountryService,
)
from auspost_shipping.modules.shipping.measures import get_dimensions, get_total_weight
from auspost_shipping.modules.shipping.settings import AustraliaPostSettings


class TestTotals:
    """Cart weight and dimension totals."""

    def test_total_weight_uses_quantity(self):
        items = [
            ShipmentItem(weight=Decimal("1.5"), quantity=2),
            ShipmentItem(weight=Decimal("0.25")),
        ]
        assert get_total_weight(items) == Decimal("3.25")

    def test_free_shipping_items_ignored(self):
        items = [
            ShipmentItem(weight=Decimal("1.5")),
            ShipmentItem(weight=Decimal("10"), is_free_shipping=True),
        ]
        assert get_total_weight(items) == Decimal("1.5")
        assert get_total_weight(items, ignore_free_shipped_items=False) == Decimal("11.5")

    def test_float_weights_accepted(self):
        assert get_total_weight([ShipmentItem(weight=0.1, quantity=3)]) == Decimal("0.3")

    def test_single_item_keeps_its_dimensions(self):
        item = ShipmentItem(weight=Decimal("1"), length=Decimal("30"), width=Decimal("20"), height=Decimal("10"))
        assert get_dimensions([item]) == (Decimal("30"), Decimal("20"), Decimal("10"))

    def test_cube_root_for_multiple_items(self):
        items = [
            ShipmentItem(weight=Decimal("1"), length=Decimal("4"), width=Decimal("4"), height=Decimal("4"), quantity=2),
            ShipmentItem(weight=Decimal("1"), length=Decimal("2"), width=Decimal("2"), height=Decimal("2"), quantity=2),
        ]
        # volume = 2*64 + 2*8 = 144 -> side ~5.24
        length, width, height = get_dimensions(items)
        assert Decimal("5.2") < length < Decimal("5.3")
        assert length == width == height

    def test_cube_root_preserves_longest_item_side(self):
        items = [
            ShipmentItem(weight=Decimal("1"), length=Decimal("1"), width=Decimal("1"), height=Decimal("20"), quantity=2),
        ]
        length, width, height = get_dimensions(items)
        assert height == Decimal("20")
        assert length < Decimal("4")

    def test_only_free_shipping_items(self):
        items = [ShipmentItem(weight=Decimal("1"), length=Decimal("5"), is_free_shipping=True)]
        assert get_dimensions(items) == (Decimal("0"), Decimal("0"), Decimal("0"))
        assert get_total_weight(items) == Decimal("0")


class TestMeasureService:
    """Ratio based unit conversion."""

    def test_satisfies_protocol(self, measure_service):
        assert isinstance(measure_service, MeasureService)

    def test_lookup_by_keyword(self, measure_service):
        grams = measure_service.get_measure_weight_by_system_keyword("grams")
        assert grams.ratio == Decimal("1000")
        assert measure_service.get_measure_dimension_by_system_keyword("MILLIMETRES").ratio == Decimal("10")
        assert measure_service.get_measure_weight_by_system_keyword("ounces") is None

    def test_convert_from_primary(self, measure_service):
        grams = measure_service.get_measure_weight_by_system_keyword("grams")
        millimetres = measure_service.get_measure_dimension_by_system_keyword("millimetres")
        assert measure_service.convert_from_primary_weight(Decimal("1.2345"), grams) == Decimal("1234.5000")
        assert measure_service.convert_from_primary_dimension(Decimal("10.1"), millimetres) == Decimal("101.0")

    def test_convert_to_undefined_measure_raises(self, measure_service):
        with pytest.raises(ValueError):
            measure_service.convert_from_primary_weight(Decimal("1"), None)


class TestCurrencyService:

    def test_primary_currency_passthrough(self):
        service = ExchangeRateCurrencyService("aud")
        assert service.primary_store_currency_code == "AUD"
        assert service.convert_to_primary_store_currency(Decimal("12.50"), "AUD") == Decimal("12.50")

    def test_converts_by_rate(self):
        service = ExchangeRateCurrencyService("USD", {"AUD": Decimal("1.5")})
        assert service.convert_to_primary_store_currency(Decimal("15"), "AUD") == Decimal("10")

    def test_unknown_currency_raises(self):
        service = ExchangeRateCurrencyService("USD")
        with pytest.raises(ValueError):
            service.convert_to_primary_store_currency(Decimal("15"), "AUD")


class TestCountryService:

    def test_lookup(self, country_service):
        assert country_service.get_country_by_id(1).two_letter_iso_code == "AU"
        assert country_service.get_country_by_id(99) is None
        assert country_service.get_country_by_id(None) is None
        assert country_service.get_country_by_id(0) is None

    def test_empty_service(self):
        assert StaticCountryService([]).get_country_by_id(1) is None


class TestInMemoryStores:

    @pytest.mark.asyncio
    async def test_settings_store_defaults_when_empty(self):
        store = InMemorySettingsStore()
        settings = await store.load_settings()
        assert settings == AustraliaPostSettings()
        assert not store.has_settings

    @pytest.mark.asyncio
    async def test_settings_store_round_trip(self):
        store = InMemorySettingsStore()
        saved = AustraliaPostSettings(api_key="abc", additional_handling_charge=Decimal("2.5"))
        await store.save_settings(saved)
        assert await store.load_settings() == saved

        await store.delete_settings()
        assert not store.has_settings

    @pytest.mark.asyncio
    async def test_localization_store(self):
        locales = InMemoryLocalizationService()
        await locales.add_or_update_locale_resource("a", "1")
        await locales.add_or_update_locale_resource("a", "2")
        assert locales.get_resource("a") == "2"

        await locales.delete_locale_resource("a")
        await locales.delete_locale_resource("missing")
        assert locales.resources == {}
