"""
Australia Post Postage API Client

Implements the parcel service list endpoints used for rate quotes:
- Domestic:      GET /postage/parcel/domestic/service.json
- International: GET /postage/parcel/international/service.json

Authentication is a single API key in the AUTH-KEY header.
Australia Post returns structured JSON error bodies on 4xx/5xx, so the body
is always read and parsed regardless of status code.

Responses are decoded once into a ParsedResponse variant:
    ServicesResponse | ErrorResponse | MalformedResponse
Callers branch on the variant type; no exceptions are used to tell the
shapes apart.
"""
import json
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple, Union

import httpx

from auspost_shipping.core.exceptions import CarrierUnavailableError
from auspost_shipping.core.utils import mask_secret
from auspost_shipping.modules.shipping.packaging import CarrierParcel
from auspost_shipping.modules.shipping.settings import AustraliaPostSettings

logger = logging.getLogger(__name__)

AUTH_HEADER = "AUTH-KEY"
RESP_SNIPPET_LEN = 500


# =============================================================================
# Parsed response variant
# =============================================================================

@dataclass(frozen=True)
class CarrierService:
    """One postage service quoted by Australia Post."""
    name: str
    price: Decimal
    code: Optional[str] = None
    delivery_time: Optional[str] = None


@dataclass(frozen=True)
class ServicesResponse:
    services: List[CarrierService]


@dataclass(frozen=True)
class ErrorResponse:
    message: str


@dataclass(frozen=True)
class MalformedResponse:
    reason: str


ParsedResponse = Union[ServicesResponse, ErrorResponse, MalformedResponse]


def _parse_price(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        return None
    if not price.is_finite():
        return None
    return price


def _parse_service(entry: Any) -> Optional[CarrierService]:
    if not isinstance(entry, dict):
        return None

    name = entry.get("name")
    price = _parse_price(entry.get("price"))
    if not isinstance(name, str) or not name or price is None:
        return None

    code = entry.get("code")
    delivery_time = entry.get("delivery_time")
    return CarrierService(
        name=name,
        price=price,
        code=str(code) if code is not None else None,
        delivery_time=str(delivery_time) if delivery_time is not None else None,
    )


def parse_rate_response(body: Optional[str]) -> ParsedResponse:
    """
    Decode a service list response body.

    Shapes:
        {"services": {"service": [{...}, {...}]}}   -> ServicesResponse
        {"services": {"service": {...}}}            -> ServicesResponse (one)
        {"services": {}}                            -> ServicesResponse (none)
        {"error": {"errorMessage": "..."}}          -> ErrorResponse
        anything else, including empty body        -> MalformedResponse

    A single unparseable service entry makes the whole response malformed.
    """
    if not body or not body.strip():
        return MalformedResponse("empty response body")

    try:
        data = json.loads(body)
    except ValueError:
        return MalformedResponse("response body is not JSON")

    if not isinstance(data, dict):
        return MalformedResponse("response body is not a JSON object")

    services = data.get("services")
    if isinstance(services, dict):
        entries = services.get("service")
        if entries is None:
            return ServicesResponse([])
        if isinstance(entries, dict):
            entries = [entries]
        if not isinstance(entries, list):
            return MalformedResponse("services.service is neither an object nor an array")

        parsed = []
        for index, entry in enumerate(entries):
            service = _parse_service(entry)
            if service is None:
                return MalformedResponse(f"service entry {index} is missing name or price")
            parsed.append(service)
        return ServicesResponse(parsed)

    error = data.get("error")
    if isinstance(error, dict):
        message = error.get("errorMessage")
        if message is not None and str(message).strip():
            return ErrorResponse(str(message))

    return MalformedResponse("neither services.service nor error.errorMessage present")


# =============================================================================
# HTTP client
# =============================================================================

class AustraliaPostClient:
    """
    Australia Post postage API client.

    One GET per rate request, no retries. Network failures and timeouts are
    raised as CarrierUnavailableError; every response body (any status) is
    returned as a ParsedResponse.
    """

    def __init__(self, settings: AustraliaPostSettings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._http_client = http_client
        self._owns_client = http_client is None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.settings.request_timeout)
            self._owns_client = True
        return self._http_client

    async def close(self):
        """Close HTTP client if this instance created it."""
        if self._http_client and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "AustraliaPostClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def build_request(
        self,
        country_code: str,
        from_postcode: str,
        to_postcode: str,
        parcel: CarrierParcel,
    ) -> Tuple[str, Dict[str, str]]:
        """
        Choose the endpoint and query parameters for a parcel.

        Returns:
            Tuple of (url, params)
        """
        if self.settings.is_domestic(country_code):
            return self.settings.domestic_url, {
                "from_postcode": from_postcode,
                "to_postcode": to_postcode,
                "length": str(parcel.length),
                "width": str(parcel.width),
                "height": str(parcel.height),
                "weight": parcel.weight_param(),
            }

        return self.settings.international_url, {
            "country_code": country_code.upper(),
            "weight": parcel.weight_param(),
        }

    async def get_services(
        self,
        country_code: str,
        from_postcode: str,
        to_postcode: str,
        parcel: CarrierParcel,
    ) -> ParsedResponse:
        """
        Request the available postage services for one parcel.

        Args:
            country_code: Destination ISO-2 country code
            from_postcode: Origin postcode
            to_postcode: Destination postcode (domestic only)
            parcel: Per-package parcel in cm / kg

        Returns:
            ParsedResponse variant
        """
        url, params = self.build_request(country_code, from_postcode, to_postcode, parcel)
        client = await self._get_http_client()

        logger.debug(
            f"Australia Post GET {url} params={params} key={mask_secret(self.settings.api_key)}"
        )

        try:
            response = await client.get(
                url,
                params=params,
                headers={AUTH_HEADER: self.settings.api_key, "Accept": "application/json"},
                timeout=self.settings.request_timeout,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Australia Post request timed out after {self.settings.request_timeout}s: {e}")
            raise CarrierUnavailableError(details={"reason": "timeout", "url": url})
        except httpx.RequestError as e:
            logger.error(f"Australia Post request failed: {e}")
            raise CarrierUnavailableError(details={"reason": "network", "url": url})

        body = response.text
        if response.status_code >= 400:
            logger.warning(
                f"Australia Post API {response.status_code}: {body[:RESP_SNIPPET_LEN]}"
            )
        else:
            logger.debug(f"Australia Post API {response.status_code} ({len(body)} bytes)")

        return parse_rate_response(body)
