"""
Carrier Registry and Factory

- CarrierFactory creates carrier instances based on CarrierCode
- Carriers register themselves with @register_carrier on import
- Carrier dependencies (host collaborators, HTTP client) are passed through
"""
from typing import Any, Dict, List, Optional, Type
import logging

from auspost_shipping.models.carrier import CarrierCode
from auspost_shipping.modules.shipping.carriers.base import BaseCarrier

logger = logging.getLogger(__name__)

# Registry of carrier implementations
_CARRIER_REGISTRY: Dict[CarrierCode, Type[BaseCarrier]] = {}


def register_carrier(carrier_code: CarrierCode):
    """
    Decorator to register a carrier implementation.

    Usage:
        @register_carrier(CarrierCode.AUSTRALIA_POST)
        class AustraliaPostCarrier(BaseCarrier):
            ...
    """
    def decorator(cls: Type[BaseCarrier]):
        _CARRIER_REGISTRY[carrier_code] = cls
        logger.debug(f"Registered carrier: {carrier_code.value} -> {cls.__name__}")
        return cls
    return decorator


class CarrierFactory:
    """
    Factory for creating carrier instances.

    Returns None for carriers with no registered implementation.
    """

    @classmethod
    def get_carrier(cls, carrier_code: CarrierCode, **dependencies: Any) -> Optional[BaseCarrier]:
        """
        Get a carrier instance.

        Args:
            carrier_code: The carrier to get
            **dependencies: Constructor arguments for the carrier

        Returns:
            BaseCarrier instance or None if not registered
        """
        carrier_cls = _CARRIER_REGISTRY.get(carrier_code)
        if not carrier_cls:
            logger.warning(f"No implementation registered for carrier: {carrier_code.value}")
            return None

        return carrier_cls(**dependencies)

    @classmethod
    def get_registered_carriers(cls) -> List[CarrierCode]:
        """Get list of all registered carrier codes."""
        return list(_CARRIER_REGISTRY.keys())


def get_carrier(carrier_code: CarrierCode, **dependencies: Any) -> Optional[BaseCarrier]:
    """
    Convenience function to get a carrier.

    Equivalent to CarrierFactory.get_carrier().
    """
    return CarrierFactory.get_carrier(carrier_code, **dependencies)


# Import carriers to trigger registration
# These imports must be at the bottom to avoid circular imports
from auspost_shipping.modules.shipping.carriers.australia_post import AustraliaPostCarrier  # noqa: E402, F401
