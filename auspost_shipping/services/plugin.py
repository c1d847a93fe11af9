"""
Australia Post Shipping Plugin

Host-facing entry point:
- Loads plugin settings from the host settings store once per rate request
- Delegates quoting to AustraliaPostCarrier
- Install / uninstall seed and remove settings and locale resources
- Saves the merchant configuration form

Usage:
    plugin = AustraliaPostPlugin(
        measure_service=measures,
        currency_service=currencies,
        country_service=countries,
        settings_store=store,
        localization_service=locales,
    )
    response = await plugin.get_shipping_options(request)
"""
import logging
from decimal import Decimal
from typing import Dict, Optional

import httpx

from auspost_shipping.core.utils import mask_secret
from auspost_shipping.models.carrier import CarrierCode
from auspost_shipping.modules.shipping.carriers import get_carrier
from auspost_shipping.modules.shipping.carriers.base import (
    BaseCarrier,
    ShipmentRequest,
    ShippingOptionResponse,
)
from auspost_shipping.modules.shipping.collaborators import (
    CountryService,
    CurrencyService,
    LocalizationService,
    MeasureService,
    SettingsStore,
)
from auspost_shipping.modules.shipping.settings import AustraliaPostSettings
from auspost_shipping.schemas.shipping import AustraliaPostConfigurationModel

logger = logging.getLogger(__name__)

CONFIGURATION_PATH = "Admin/ShippingAustraliaPost/Configure"

LOCALE_RESOURCES: Dict[str, str] = {
    "Plugins.Shipping.AustraliaPost.Fields.ApiKey": "Australia Post API Key",
    "Plugins.Shipping.AustraliaPost.Fields.ApiKey.Hint": "Specify Australia Post API Key.",
    "Plugins.Shipping.AustraliaPost.Fields.AdditionalHandlingCharge": "Additional handling charge",
    "Plugins.Shipping.AustraliaPost.Fields.AdditionalHandlingCharge.Hint": "Enter additional handling fee to charge your customers.",
}


class AustraliaPostPlugin:
    """
    Australia Post shipping rate computation plugin.
    """

    def __init__(
        self,
        measure_service: MeasureService,
        currency_service: CurrencyService,
        country_service: CountryService,
        settings_store: SettingsStore,
        localization_service: Optional[LocalizationService] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings_store = settings_store
        self._localization_service = localization_service
        self._carrier: BaseCarrier = get_carrier(
            CarrierCode.AUSTRALIA_POST,
            measure_service=measure_service,
            currency_service=currency_service,
            country_service=country_service,
            http_client=http_client,
        )

    @property
    def carrier(self) -> BaseCarrier:
        return self._carrier

    @property
    def shipment_tracker(self):
        """Australia Post tracking is not supported."""
        return self._carrier.shipment_tracker

    # ==================== Rating ====================

    async def get_shipping_options(self, request: ShipmentRequest) -> ShippingOptionResponse:
        """
        Get available shipping options.

        Settings are read once here and passed down unchanged.
        """
        if request is None:
            raise ValueError("request is required")

        settings = await self._settings_store.load_settings()
        return await self._carrier.get_shipping_options(request, settings)

    async def get_fixed_rate(self, request: ShipmentRequest) -> Optional[Decimal]:
        """Australia Post rates are always live-quoted; no fixed rate."""
        return await self._carrier.get_fixed_rate(request)

    # ==================== Configuration ====================

    @staticmethod
    def get_configuration_page_url(store_location: str) -> str:
        """Admin configuration page URL for the given store location."""
        return f"{store_location.rstrip('/')}/{CONFIGURATION_PATH}"

    async def get_configuration(self) -> AustraliaPostConfigurationModel:
        settings = await self._settings_store.load_settings()
        return AustraliaPostConfigurationModel(
            api_key=settings.api_key,
            additional_handling_charge=settings.additional_handling_charge,
        )

    async def configure(self, model: AustraliaPostConfigurationModel) -> AustraliaPostSettings:
        """Save the merchant configuration form."""
        current = await self._settings_store.load_settings()
        updated = current.with_configuration(
            api_key=model.api_key,
            additional_handling_charge=model.additional_handling_charge,
        )
        await self._settings_store.save_settings(updated)
        logger.info(
            f"Australia Post settings saved (key={mask_secret(updated.api_key)}, "
            f"handling={updated.additional_handling_charge})"
        )
        return updated

    # ==================== Install / Uninstall ====================

    async def install(self) -> None:
        """Save default settings and add locale resources."""
        await self._settings_store.save_settings(AustraliaPostSettings())

        if self._localization_service:
            for name, value in LOCALE_RESOURCES.items():
                await self._localization_service.add_or_update_locale_resource(name, value)

        logger.info("Australia Post shipping plugin installed")

    async def uninstall(self) -> None:
        """Delete settings and locale resources."""
        await self._settings_store.delete_settings()

        if self._localization_service:
            for name in LOCALE_RESOURCES:
                await self._localization_service.delete_locale_resource(name)

        logger.info("Australia Post shipping plugin uninstalled")
