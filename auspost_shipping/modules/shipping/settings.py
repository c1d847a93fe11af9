"""
Australia Post plugin settings value object.

Loaded once per rate request from the host settings store and passed
explicitly into the carrier; nothing in the engine reads global config.
"""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional

from auspost_shipping.core.config import (
    AUSPOST_DOMESTIC_URL,
    AUSPOST_INTERNATIONAL_URL,
    Settings,
)
from auspost_shipping.modules.shipping.packaging import CarrierServiceLimits, DEFAULT_LIMITS


@dataclass(frozen=True)
class AustraliaPostSettings:
    api_key: str = ""
    additional_handling_charge: Decimal = Decimal("0")
    domestic_country_code: str = "AU"
    domestic_url: str = AUSPOST_DOMESTIC_URL
    international_url: str = AUSPOST_INTERNATIONAL_URL
    request_timeout: float = 30.0
    source_currency_code: str = "AUD"
    limits: CarrierServiceLimits = field(default=DEFAULT_LIMITS)

    def __post_init__(self):
        # Store records may hold the charge as a float or string
        charge = self.additional_handling_charge
        if not isinstance(charge, Decimal):
            object.__setattr__(self, "additional_handling_charge", Decimal(str(charge)))

    def is_domestic(self, country_code: Optional[str]) -> bool:
        return bool(country_code) and country_code.upper() == self.domestic_country_code.upper()

    def with_configuration(self, api_key: str, additional_handling_charge: Decimal) -> "AustraliaPostSettings":
        """Copy with the two merchant-editable fields replaced."""
        return replace(self, api_key=api_key, additional_handling_charge=additional_handling_charge)

    @classmethod
    def from_settings(cls, config: Settings) -> "AustraliaPostSettings":
        """Build from environment-driven Settings."""
        return cls(
            api_key=config.AUSPOST_API_KEY,
            additional_handling_charge=config.AUSPOST_ADDITIONAL_HANDLING_CHARGE,
            domestic_country_code=config.AUSPOST_DOMESTIC_COUNTRY_CODE,
            domestic_url=config.AUSPOST_DOMESTIC_URL,
            international_url=config.AUSPOST_INTERNATIONAL_URL,
            request_timeout=config.AUSPOST_REQUEST_TIMEOUT,
            source_currency_code=config.AUSPOST_SOURCE_CURRENCY,
        )
