"""
Carrier identifiers for the shipping plugin.
"""
import enum


class CarrierCode(str, enum.Enum):
    """
    Supported shipping carriers.

    Each code maps to one BaseCarrier implementation in the carrier registry.
    """
    AUSTRALIA_POST = "AUSTRALIA_POST"
