from auspost_shipping.models.carrier import CarrierCode

__all__ = ["CarrierCode"]
