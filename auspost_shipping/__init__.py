"""
Australia Post shipping rate plugin.

Quotes Australia Post parcel services for a cart, splitting oversized or
overweight shipments into multiple packages and adding a flat handling charge.
"""
from auspost_shipping.modules.shipping.carriers.base import (
    ShipmentItem,
    ShipmentRequest,
    ShippingAddress,
    ShippingOption,
    ShippingOptionResponse,
)
from auspost_shipping.modules.shipping.settings import AustraliaPostSettings
from auspost_shipping.services.plugin import AustraliaPostPlugin

__version__ = "1.0.0"

__all__ = [
    "AustraliaPostPlugin",
    "AustraliaPostSettings",
    "ShipmentItem",
    "ShipmentRequest",
    "ShippingAddress",
    "ShippingOption",
    "ShippingOptionResponse",
]
