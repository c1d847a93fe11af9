"""
Australia Post Shipping Exception Hierarchy

Structured exception classes for the rate quote engine.
All exceptions include code, message, and details for logging and for the
error list returned to the host checkout.

Exception Hierarchy:
    ShippingBaseError
    └── ShippingError
        ├── ShippingValidationError
        ├── CarrierError
        ├── InvalidResponseError
        └── CarrierUnavailableError
"""
import enum
import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class ShippingBaseError(Exception):
    """
    Base exception for all shipping plugin errors.

    Attributes:
        message: Human-readable error description (safe to show to customers)
        code: Machine-readable error code for programmatic handling
        details: Additional context for debugging
        severity: P0-P3 severity level
    """

    default_code: str = "SHIPPING_PLUGIN_ERROR"
    default_severity: str = "P2"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[str] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.severity = severity or self.default_severity
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


# =============================================================================
# SHIPPING ERRORS
# =============================================================================

class ShippingError(ShippingBaseError):
    """Base exception for shipping rate errors."""
    default_code = "SHIPPING_ERROR"
    default_severity = "P1"


class ValidationErrorKind(str, enum.Enum):
    """Pre-flight request checks, in the order they are evaluated."""
    MISSING_ITEMS = "MissingItems"
    MISSING_ORIGIN_ZIP = "MissingOriginZip"
    MISSING_SHIPPING_ADDRESS = "MissingShippingAddress"
    MISSING_COUNTRY = "MissingCountry"
    MISSING_DESTINATION_ZIP = "MissingDestinationZip"


VALIDATION_MESSAGES = {
    ValidationErrorKind.MISSING_ITEMS: "No shipment items",
    ValidationErrorKind.MISSING_ORIGIN_ZIP: "Shipping origin zip is not set",
    ValidationErrorKind.MISSING_SHIPPING_ADDRESS: "Shipping address is not set",
    ValidationErrorKind.MISSING_COUNTRY: "Shipping country is not specified",
    ValidationErrorKind.MISSING_DESTINATION_ZIP: "Shipping zip (postal code) is not set",
}


class ShippingValidationError(ShippingError):
    """Shipment request is incomplete; raised before any carrier call."""
    default_code = "SHIPPING_VALIDATION_FAILED"
    default_severity = "P3"

    def __init__(self, kind: ValidationErrorKind, **kwargs):
        self.kind = kind
        details = kwargs.pop("details", {})
        details["kind"] = kind.value
        super().__init__(VALIDATION_MESSAGES[kind], details=details, **kwargs)


class CarrierError(ShippingError):
    """
    Carrier returned a structured error message.

    The message is the carrier's own text and is shown to the customer verbatim
    (e.g. "Please enter a valid To postcode.").
    """
    default_code = "CARRIER_ERROR"
    default_severity = "P3"


INVALID_RESPONSE_MESSAGE = "Australia Post response is not valid"
UNAVAILABLE_MESSAGE = "Australia Post Service is currently unavailable, try again later"


class InvalidResponseError(ShippingError):
    """Carrier response was empty or had an unrecognized shape."""
    default_code = "INVALID_RESPONSE"

    def __init__(self, message: str = INVALID_RESPONSE_MESSAGE, **kwargs):
        super().__init__(message, **kwargs)


class CarrierUnavailableError(ShippingError):
    """
    Network failure, timeout, or unexpected exception while quoting.

    Always carries the generic message; internal detail goes in `details`
    and the logs only.
    """
    default_code = "CARRIER_UNAVAILABLE"

    def __init__(self, message: str = UNAVAILABLE_MESSAGE, **kwargs):
        super().__init__(message, **kwargs)
