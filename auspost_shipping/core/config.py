"""
Plugin configuration

Environment-driven defaults for the Australia Post shipping plugin.
These only seed the settings store; the engine itself receives an explicit
AustraliaPostSettings value object per call and never reads this module.
"""
import logging
from decimal import Decimal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

AUSPOST_DOMESTIC_URL = "https://digitalapi.auspost.com.au/postage/parcel/domestic/service.json"
AUSPOST_INTERNATIONAL_URL = "https://digitalapi.auspost.com.au/postage/parcel/international/service.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Australia Post API credentials
    AUSPOST_API_KEY: str = ""

    # Flat markup added to every quoted option
    AUSPOST_ADDITIONAL_HANDLING_CHARGE: Decimal = Decimal("0")

    # Destination that routes to the domestic endpoint
    AUSPOST_DOMESTIC_COUNTRY_CODE: str = "AU"

    AUSPOST_DOMESTIC_URL: str = AUSPOST_DOMESTIC_URL
    AUSPOST_INTERNATIONAL_URL: str = AUSPOST_INTERNATIONAL_URL

    # Seconds; a timeout surfaces as "service unavailable"
    AUSPOST_REQUEST_TIMEOUT: float = 30.0

    # Currency the carrier quotes in
    AUSPOST_SOURCE_CURRENCY: str = "AUD"

    @field_validator("AUSPOST_DOMESTIC_COUNTRY_CODE", "AUSPOST_SOURCE_CURRENCY", mode="before")
    @classmethod
    def normalize_codes(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("AUSPOST_ADDITIONAL_HANDLING_CHARGE")
    @classmethod
    def validate_handling_charge(cls, v):
        if v < 0:
            raise ValueError("AUSPOST_ADDITIONAL_HANDLING_CHARGE cannot be negative")
        return v

    @field_validator("AUSPOST_REQUEST_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("AUSPOST_REQUEST_TIMEOUT must be positive")
        return v


settings = Settings()

if not settings.AUSPOST_API_KEY:
    logger.debug("AUSPOST_API_KEY is not set; configure it through the plugin settings store")
