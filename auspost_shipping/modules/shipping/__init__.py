"""
Shipping Module

- packaging: carrier limits, parcel normalization and package splitting
- measures: cart weight and dimension totals
- collaborators: host service protocols and in-process implementations
- settings: per-call plugin settings value object
- carriers: BaseCarrier interface, CarrierFactory and carrier implementations
"""
