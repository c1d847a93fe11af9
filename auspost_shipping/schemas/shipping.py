"""
Shipping Schemas for the Australia Post plugin

Pydantic models for the plugin configuration form and for handing rate
results back to the host checkout.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from auspost_shipping.modules.shipping.carriers.base import ShippingOptionResponse


# ==================== Configuration Schemas ====================


class AustraliaPostConfigurationModel(BaseModel):
    """Merchant-editable plugin settings."""
    api_key: str = Field("", max_length=100, description="Australia Post API Key")
    additional_handling_charge: Decimal = Field(
        Decimal("0"),
        ge=0,
        description="Additional handling fee to charge your customers",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v):
        return v.strip()


# ==================== Rate Schemas ====================


class ShippingOptionSchema(BaseModel):
    """Single shipping option."""
    name: str
    rate: Decimal
    currency: str
    service_code: Optional[str] = None
    description: Optional[str] = None
    delivery_time: Optional[str] = None
    rate_computation_method: Optional[str] = None


class ShippingOptionsResult(BaseModel):
    """Shipping options or errors for one rate request."""
    success: bool
    shipping_options: List[ShippingOptionSchema] = []
    errors: List[str] = []
    failure_code: Optional[str] = None

    @classmethod
    def from_response(cls, response: ShippingOptionResponse) -> "ShippingOptionsResult":
        return cls(
            success=response.success,
            shipping_options=[
                ShippingOptionSchema(**option.to_dict()) for option in response.shipping_options
            ],
            errors=list(response.errors),
            failure_code=response.failure_code,
        )
