"""
Host collaborator interfaces.

The host platform owns measures, currencies, countries, settings storage
and localization. The plugin only talks to them through these protocols.
Simple in-process implementations are provided for hosts that keep this
data in memory and for tests.
"""
import copy
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, Optional, Protocol, runtime_checkable

from auspost_shipping.core.config import Settings, settings as env_settings
from auspost_shipping.modules.shipping.settings import AustraliaPostSettings

logger = logging.getLogger(__name__)


# =============================================================================
# Reference data
# =============================================================================

@dataclass(frozen=True)
class MeasureWeight:
    """Weight unit; ratio is how many of this unit make one primary unit."""
    system_keyword: str
    name: str
    ratio: Decimal


@dataclass(frozen=True)
class MeasureDimension:
    """Dimension unit; ratio is how many of this unit make one primary unit."""
    system_keyword: str
    name: str
    ratio: Decimal


@dataclass(frozen=True)
class Country:
    id: int
    name: str
    two_letter_iso_code: str


# =============================================================================
# Protocols
# =============================================================================

@runtime_checkable
class MeasureService(Protocol):
    def get_measure_weight_by_system_keyword(self, system_keyword: str) -> Optional[MeasureWeight]: ...

    def get_measure_dimension_by_system_keyword(self, system_keyword: str) -> Optional[MeasureDimension]: ...

    def convert_from_primary_weight(self, value: Decimal, target: MeasureWeight) -> Decimal: ...

    def convert_from_primary_dimension(self, value: Decimal, target: MeasureDimension) -> Decimal: ...


@runtime_checkable
class CurrencyService(Protocol):
    @property
    def primary_store_currency_code(self) -> str: ...

    def convert_to_primary_store_currency(self, amount: Decimal, currency_code: str) -> Decimal: ...


@runtime_checkable
class CountryService(Protocol):
    def get_country_by_id(self, country_id: Optional[int]) -> Optional[Country]: ...


@runtime_checkable
class SettingsStore(Protocol):
    async def load_settings(self) -> AustraliaPostSettings: ...

    async def save_settings(self, settings: AustraliaPostSettings) -> None: ...

    async def delete_settings(self) -> None: ...


@runtime_checkable
class LocalizationService(Protocol):
    async def add_or_update_locale_resource(self, name: str, value: str) -> None: ...

    async def delete_locale_resource(self, name: str) -> None: ...


# =============================================================================
# In-process implementations
# =============================================================================

class RatioMeasureService:
    """
    Measure conversion by ratio against the store's primary units.

    Example (primary weight is kilograms):
        grams = MeasureWeight("grams", "gram(s)", Decimal("1000"))
        service.convert_from_primary_weight(Decimal("1.5"), grams) -> 1500
    """

    def __init__(self, weights: Iterable[MeasureWeight], dimensions: Iterable[MeasureDimension]):
        self._weights: Dict[str, MeasureWeight] = {w.system_keyword.lower(): w for w in weights}
        self._dimensions: Dict[str, MeasureDimension] = {d.system_keyword.lower(): d for d in dimensions}

    def get_measure_weight_by_system_keyword(self, system_keyword: str) -> Optional[MeasureWeight]:
        return self._weights.get(system_keyword.lower())

    def get_measure_dimension_by_system_keyword(self, system_keyword: str) -> Optional[MeasureDimension]:
        return self._dimensions.get(system_keyword.lower())

    def convert_from_primary_weight(self, value: Decimal, target: MeasureWeight) -> Decimal:
        if target is None:
            raise ValueError("Target weight measure is not defined")
        return Decimal(value) * target.ratio

    def convert_from_primary_dimension(self, value: Decimal, target: MeasureDimension) -> Decimal:
        if target is None:
            raise ValueError("Target dimension measure is not defined")
        return Decimal(value) * target.ratio


class ExchangeRateCurrencyService:
    """
    Currency conversion by fixed exchange rates.

    `rates` maps a currency code to how many units of it equal one unit of
    the primary store currency.
    """

    def __init__(self, primary_currency_code: str, rates: Optional[Dict[str, Decimal]] = None):
        self._primary = primary_currency_code.upper()
        self._rates = {code.upper(): Decimal(rate) for code, rate in (rates or {}).items()}

    @property
    def primary_store_currency_code(self) -> str:
        return self._primary

    def convert_to_primary_store_currency(self, amount: Decimal, currency_code: str) -> Decimal:
        code = currency_code.upper()
        if code == self._primary:
            return Decimal(amount)

        rate = self._rates.get(code)
        if not rate:
            raise ValueError(f"No exchange rate for currency {code}")
        return Decimal(amount) / rate


class StaticCountryService:
    """Country lookup over a fixed list."""

    def __init__(self, countries: Iterable[Country]):
        self._countries: Dict[int, Country] = {c.id: c for c in countries}

    def get_country_by_id(self, country_id: Optional[int]) -> Optional[Country]:
        if not country_id:
            return None
        return self._countries.get(country_id)


class InMemorySettingsStore:
    """Settings store that keeps the plugin settings record in memory."""

    def __init__(self, initial: Optional[AustraliaPostSettings] = None):
        self._settings = initial

    @classmethod
    def from_env(cls, config: Optional[Settings] = None) -> "InMemorySettingsStore":
        """Seed the store from AUSPOST_* environment settings."""
        return cls(AustraliaPostSettings.from_settings(config or env_settings))

    async def load_settings(self) -> AustraliaPostSettings:
        if self._settings is None:
            return AustraliaPostSettings()
        return self._settings

    async def save_settings(self, settings: AustraliaPostSettings) -> None:
        self._settings = settings

    async def delete_settings(self) -> None:
        self._settings = None

    @property
    def has_settings(self) -> bool:
        return self._settings is not None


class InMemoryLocalizationService:
    """Locale resource store for a single language."""

    def __init__(self):
        self._resources: Dict[str, str] = {}

    async def add_or_update_locale_resource(self, name: str, value: str) -> None:
        self._resources[name] = value

    async def delete_locale_resource(self, name: str) -> None:
        self._resources.pop(name, None)

    def get_resource(self, name: str) -> Optional[str]:
        return self._resources.get(name)

    @property
    def resources(self) -> Dict[str, str]:
        return copy.copy(self._resources)
