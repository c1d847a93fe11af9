"""
Australia Post Carrier Implementation

Rate quote engine for the Australia Post postage API:
- Validates the shipment request before any network call
- Converts store units to grams / millimetres (always rounding up)
- Splits oversized or overweight carts into identical packages
- Quotes one package and multiplies by the package count
- Adds the merchant's flat additional handling charge

Per-request flow:
    Validating -> Normalizing -> Splitting -> Requesting -> Parsing -> Finalizing -> Done
Any step may end in Failed(reason). There are no retries and no partial
results: a failure returns a response with one error and no options.
"""
import logging
from decimal import Decimal
from typing import List, Optional, Tuple

import httpx

from auspost_shipping.core.exceptions import (
    CarrierError,
    CarrierUnavailableError,
    InvalidResponseError,
    ShippingValidationError,
    ValidationErrorKind,
)
from auspost_shipping.core.utils import ceil_to_int
from auspost_shipping.models.carrier import CarrierCode
from auspost_shipping.modules.shipping.carriers import register_carrier
from auspost_shipping.modules.shipping.carriers.base import (
    BaseCarrier,
    ShipmentRequest,
    ShippingOption,
    ShippingOptionResponse,
)
from auspost_shipping.modules.shipping.collaborators import (
    Country,
    CountryService,
    CurrencyService,
    MeasureService,
)
from auspost_shipping.modules.shipping.measures import get_dimensions, get_total_weight
from auspost_shipping.modules.shipping.packaging import (
    CarrierParcel,
    CarrierServiceLimits,
    NormalizedParcel,
    clamp_length,
    clamp_weight,
    split_parcel,
    to_carrier_parcel,
)
from auspost_shipping.modules.shipping.settings import AustraliaPostSettings
from auspost_shipping.services.auspost_client import (
    AustraliaPostClient,
    CarrierService,
    ErrorResponse,
    ServicesResponse,
)

logger = logging.getLogger(__name__)

SYSTEM_NAME = "Shipping.AustraliaPost"

# Carrier base units, looked up in the host's measure tables
GATEWAY_WEIGHT_KEYWORD = "grams"
GATEWAY_DIMENSION_KEYWORD = "millimetres"


@register_carrier(CarrierCode.AUSTRALIA_POST)
class AustraliaPostCarrier(BaseCarrier):
    """
    Australia Post shipping rate computation method.

    Stateless between calls: settings arrive with each request and the
    collaborators are read-only, so one instance can serve concurrent
    checkouts.
    """

    def __init__(
        self,
        measure_service: MeasureService,
        currency_service: CurrencyService,
        country_service: CountryService,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._measure_service = measure_service
        self._currency_service = currency_service
        self._country_service = country_service
        self._http_client = http_client

    @property
    def carrier_code(self) -> CarrierCode:
        return CarrierCode.AUSTRALIA_POST

    @property
    def carrier_name(self) -> str:
        return "Australia Post"

    @property
    def system_name(self) -> str:
        return SYSTEM_NAME

    # ==================== Validating ====================

    def validate_request(self, request: ShipmentRequest) -> Country:
        """
        Check the request has everything the carrier needs.

        Returns:
            Destination country

        Raises:
            ShippingValidationError: first missing field, in check order
        """
        if not request.items:
            raise ShippingValidationError(ValidationErrorKind.MISSING_ITEMS)

        if not request.zip_postal_code_from:
            raise ShippingValidationError(ValidationErrorKind.MISSING_ORIGIN_ZIP)

        if request.shipping_address is None:
            raise ShippingValidationError(ValidationErrorKind.MISSING_SHIPPING_ADDRESS)

        country = self._country_service.get_country_by_id(request.shipping_address.country_id)
        if country is None or not country.two_letter_iso_code:
            raise ShippingValidationError(ValidationErrorKind.MISSING_COUNTRY)

        if not request.shipping_address.zip_postal_code:
            raise ShippingValidationError(ValidationErrorKind.MISSING_DESTINATION_ZIP)

        return country

    # ==================== Normalizing ====================

    def normalize(
        self,
        request: ShipmentRequest,
        limits: CarrierServiceLimits,
    ) -> Tuple[int, int, int, int]:
        """
        Cart weight and dimensions in grams / millimetres, clamped to minimums.

        Returns:
            Tuple of (weight, length, width, height)
        """
        grams = self._measure_service.get_measure_weight_by_system_keyword(GATEWAY_WEIGHT_KEYWORD)
        millimetres = self._measure_service.get_measure_dimension_by_system_keyword(GATEWAY_DIMENSION_KEYWORD)

        total_weight = get_total_weight(request.items, ignore_free_shipped_items=True)
        weight = clamp_weight(
            ceil_to_int(self._measure_service.convert_from_primary_weight(total_weight, grams)),
            limits,
        )

        raw_length, raw_width, raw_height = get_dimensions(request.items, ignore_free_shipped_items=True)
        length, width, height = (
            clamp_length(ceil_to_int(self._measure_service.convert_from_primary_dimension(value, millimetres)), limits)
            for value in (raw_length, raw_width, raw_height)
        )

        return weight, length, width, height

    # ==================== Requesting / Parsing ====================

    def _to_shipping_option(self, service: CarrierService, settings: AustraliaPostSettings, total_packages: int) -> ShippingOption:
        rate = self._currency_service.convert_to_primary_store_currency(
            service.price, settings.source_currency_code
        )
        return ShippingOption(
            name=service.name,
            rate=rate * total_packages,
            currency=self._currency_service.primary_store_currency_code,
            service_code=service.code,
            delivery_time=service.delivery_time,
            rate_computation_method=self.system_name,
        )

    async def request_shipping_options(
        self,
        settings: AustraliaPostSettings,
        country_code: str,
        from_postcode: str,
        to_postcode: str,
        parcel: CarrierParcel,
    ) -> List[ShippingOption]:
        """
        Quote one parcel and price every returned service for all packages.

        Raises:
            CarrierError: carrier returned errorMessage
            InvalidResponseError: empty or unrecognized response
            CarrierUnavailableError: network failure or timeout
        """
        async with AustraliaPostClient(settings, http_client=self._http_client) as client:
            parsed = await client.get_services(country_code, from_postcode, to_postcode, parcel)

        logger.debug(f"Australia Post parsing {type(parsed).__name__}")

        if isinstance(parsed, ServicesResponse):
            return [
                self._to_shipping_option(service, settings, parcel.total_packages)
                for service in parsed.services
            ]

        if isinstance(parsed, ErrorResponse):
            raise CarrierError(parsed.message, details={"country_code": country_code})

        raise InvalidResponseError(details={"reason": parsed.reason})

    # ==================== Finalizing ====================

    @staticmethod
    def apply_handling_charge(options: List[ShippingOption], charge: Decimal) -> List[ShippingOption]:
        """Add the flat handling charge to every option, exactly once."""
        for option in options:
            option.rate += charge
        return options

    # ==================== Entry point ====================

    async def get_shipping_options(
        self,
        request: ShipmentRequest,
        settings: AustraliaPostSettings,
    ) -> ShippingOptionResponse:
        """
        Get priced Australia Post shipping options for a cart.

        Args:
            request: Cart items, origin postcode and destination address
            settings: Plugin settings loaded for this call

        Returns:
            ShippingOptionResponse with options, or a single error
        """
        if request is None:
            raise ValueError("request is required")

        response = ShippingOptionResponse()

        logger.debug("Australia Post quote: Validating")
        try:
            country = self.validate_request(request)
        except ShippingValidationError as e:
            logger.info(f"Australia Post quote rejected: {e.kind.value}")
            response.add_error(e.message, e.code)
            return response

        try:
            logger.debug("Australia Post quote: Normalizing")
            weight, length, width, height = self.normalize(request, settings.limits)

            logger.debug("Australia Post quote: Splitting")
            domestic = settings.is_domestic(country.two_letter_iso_code)
            normalized: NormalizedParcel = split_parcel(
                weight, length, width, height, domestic, settings.limits
            )
            parcel = to_carrier_parcel(normalized, settings.limits)
            logger.info(
                f"Australia Post parcel to {country.two_letter_iso_code}: "
                f"{parcel.length}x{parcel.width}x{parcel.height}cm {parcel.weight}kg "
                f"x{parcel.total_packages}"
            )

            logger.debug("Australia Post quote: Requesting")
            options = await self.request_shipping_options(
                settings,
                country.two_letter_iso_code,
                request.zip_postal_code_from,
                request.shipping_address.zip_postal_code,
                parcel,
            )

            logger.debug("Australia Post quote: Finalizing")
            response.shipping_options.extend(
                self.apply_handling_charge(options, settings.additional_handling_charge)
            )
        except CarrierError as e:
            logger.warning(f"Australia Post returned error: {e.message}")
            response.add_error(e.message, e.code)
            return response
        except (InvalidResponseError, CarrierUnavailableError) as e:
            logger.error(f"Australia Post quote failed: {e.code} {e.details}")
            response.add_error(e.message, e.code)
            return response
        except Exception:
            logger.exception("Unexpected error while quoting Australia Post")
            unavailable = CarrierUnavailableError()
            response.add_error(unavailable.message, unavailable.code)
            return response

        logger.debug(f"Australia Post quote: Done ({len(response.shipping_options)} options)")
        return response
