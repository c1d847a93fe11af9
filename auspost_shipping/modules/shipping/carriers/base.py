"""
Base Carrier Interface

- All rate computation methods implement this interface
- Carrier-agnostic request/response data classes live here so the host
  checkout never depends on a specific carrier module
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Any, Dict

from auspost_shipping.models.carrier import CarrierCode


# =============================================================================
# Carrier-Agnostic Data Classes
# =============================================================================

@dataclass(frozen=True)
class ShipmentItem:
    """One cart line, measured in the store's primary units."""
    weight: Decimal
    length: Decimal = Decimal("0")
    width: Decimal = Decimal("0")
    height: Decimal = Decimal("0")
    quantity: int = 1
    is_free_shipping: bool = False
    sku: Optional[str] = None


@dataclass(frozen=True)
class ShippingAddress:
    """Destination address as stored by the host."""
    country_id: Optional[int] = None
    zip_postal_code: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    address1: Optional[str] = None


@dataclass(frozen=True)
class ShipmentRequest:
    """Request for shipping options for one cart."""
    items: Optional[List[ShipmentItem]]
    zip_postal_code_from: Optional[str]
    shipping_address: Optional[ShippingAddress]


@dataclass
class ShippingOption:
    """Priced shipping option offered at checkout."""
    name: str
    rate: Decimal
    currency: str
    service_code: Optional[str] = None
    description: Optional[str] = None
    delivery_time: Optional[str] = None
    rate_computation_method: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "rate": str(self.rate),
            "currency": self.currency,
            "service_code": self.service_code,
            "description": self.description,
            "delivery_time": self.delivery_time,
            "rate_computation_method": self.rate_computation_method,
        }


@dataclass
class ShippingOptionResponse:
    """Result of a rate request: either options or user-visible errors, never both."""
    shipping_options: List[ShippingOption] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    failure_code: Optional[str] = None

    @property
    def success(self) -> bool:
        return not self.errors

    def add_error(self, message: str, code: Optional[str] = None) -> None:
        self.errors.append(message)
        if code and not self.failure_code:
            self.failure_code = code


# =============================================================================
# Base Carrier Interface
# =============================================================================

class BaseCarrier(ABC):
    """
    Abstract base class for shipping rate computation methods.

    Carriers can share utility code but must provide their own API integration.
    """

    @property
    @abstractmethod
    def carrier_code(self) -> CarrierCode:
        """Return the carrier code enum value."""
        pass

    @property
    @abstractmethod
    def carrier_name(self) -> str:
        """Return the human-readable carrier name."""
        pass

    @property
    @abstractmethod
    def system_name(self) -> str:
        """Return the plugin system name stamped on every option."""
        pass

    @abstractmethod
    async def get_shipping_options(self, request: ShipmentRequest, settings: Any) -> ShippingOptionResponse:
        """
        Get shipping options from the carrier.

        Args:
            request: Cart items, origin zip and destination address
            settings: Carrier-specific settings value object

        Returns:
            ShippingOptionResponse with options or errors
        """
        pass

    async def get_fixed_rate(self, request: ShipmentRequest) -> Optional[Decimal]:
        """
        Fixed rate that can be shown before checkout, if the carrier has one.

        Live-quoted carriers return None.
        """
        return None

    @property
    def shipment_tracker(self) -> Optional[Any]:
        """Shipment tracker, or None when the carrier offers no tracking."""
        return None
