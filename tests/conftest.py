"""
Pytest configuration and fixtures for the Australia Post shipping plugin.
"""
import json
import os
from decimal import Decimal
from typing import Callable, List

import httpx
import pytest

# Keep a developer's .env from leaking into tests
os.environ.setdefault("AUSPOST_API_KEY", "")

from auspost_shipping.modules.shipping.carriers.base import (
    ShipmentItem,
    ShipmentRequest,
    ShippingAddress,
)
from auspost_shipping.modules.shipping.collaborators import (
    Country,
    ExchangeRateCurrencyService,
    MeasureDimension,
    MeasureWeight,
    RatioMeasureService,
    StaticCountryService,
)
from auspost_shipping.modules.shipping.settings import AustraliaPostSettings

AU_ID = 1
NZ_ID = 2
US_ID = 3

_DEFAULT_ITEMS = object()


@pytest.fixture
def measure_service() -> RatioMeasureService:
    """Store primary units are kilograms and centimetres."""
    return RatioMeasureService(
        weights=[
            MeasureWeight("kg", "kilogram(s)", Decimal("1")),
            MeasureWeight("grams", "gram(s)", Decimal("1000")),
        ],
        dimensions=[
            MeasureDimension("centimetres", "centimetre(s)", Decimal("1")),
            MeasureDimension("millimetres", "millimetre(s)", Decimal("10")),
        ],
    )


@pytest.fixture
def currency_service() -> ExchangeRateCurrencyService:
    """Primary store currency is AUD."""
    return ExchangeRateCurrencyService("AUD", {"USD": Decimal("0.5")})


@pytest.fixture
def country_service() -> StaticCountryService:
    return StaticCountryService([
        Country(AU_ID, "Australia", "AU"),
        Country(NZ_ID, "New Zealand", "NZ"),
        Country(US_ID, "United States", "US"),
    ])


@pytest.fixture
def auspost_settings() -> AustraliaPostSettings:
    return AustraliaPostSettings(
        api_key="test-api-key",
        additional_handling_charge=Decimal("0"),
    )


@pytest.fixture
def make_request() -> Callable[..., ShipmentRequest]:
    """Build a ShipmentRequest with sensible domestic defaults."""

    def _make(
        items=_DEFAULT_ITEMS,
        zip_from: str = "3000",
        country_id: int = AU_ID,
        zip_to: str = "2000",
    ) -> ShipmentRequest:
        if items is _DEFAULT_ITEMS:
            items = [ShipmentItem(weight=Decimal("1.2"), length=Decimal("30"), width=Decimal("20"), height=Decimal("10"))]
        return ShipmentRequest(
            items=items,
            zip_postal_code_from=zip_from,
            shipping_address=ShippingAddress(country_id=country_id, zip_postal_code=zip_to),
        )

    return _make


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code: int = 200, body=None, raw: str = None, exc: Exception = None):
        self.status_code = status_code
        self.body = body
        self.raw = raw
        self.exc = exc
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw is not None:
            return httpx.Response(self.status_code, text=self.raw)
        return httpx.Response(self.status_code, text=json.dumps(self.body))

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def mock_http() -> Callable[..., tuple]:
    """Create (handler, AsyncClient) pairs backed by httpx.MockTransport."""

    def _make(**kwargs):
        handler = RecordingHandler(**kwargs)
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return handler, client

    return _make

