from auspost_shipping.schemas.shipping import (
    AustraliaPostConfigurationModel,
    ShippingOptionSchema,
    ShippingOptionsResult,
)
