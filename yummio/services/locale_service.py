import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

import requests

from yummio.core.logging_config import get_logger
from yummio.core.settings import AppSettings, DEFAULT_GEOLOCATION_URL
from yummio.core.units import IMPERIAL_COUNTRIES
from yummio.models import MeasurementSystem

logger = get_logger(__name__)


def classify_country(country_code: Optional[str]) -> MeasurementSystem:
    """Map an ISO country code to the measurement system used there."""
    if country_code and country_code.strip().upper() in IMPERIAL_COUNTRIES:
        return MeasurementSystem.IMPERIAL
    return MeasurementSystem.METRIC


class LocaleSource(ABC):
    name: str = "Unknown"

    @abstractmethod
    def get_country_code(self) -> Optional[str]:
        """
        Return the user's ISO 3166 alpha-2 country code, or None if unknown.
        Implementations must not raise.
        """
        pass


class StaticLocaleSource(LocaleSource):
    name = "Static"

    def __init__(self, country_code: Optional[str]):
        self.country_code = country_code

    def get_country_code(self) -> Optional[str]:
        return self.country_code


class IpGeolocationSource(LocaleSource):
    name = "IpGeolocation"

    def __init__(self, url: str = DEFAULT_GEOLOCATION_URL, timeout: float = 5.0):
        self.url = url
        self.timeout = timeout

    def get_country_code(self) -> Optional[str]:
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning(f"Could not determine location, defaulting to metric: {exc}")
            return None

        if not isinstance(payload, dict):
            return None
        country_code = payload.get("country_code")
        if not country_code:
            logger.warning("Geolocation response had no country_code")
            return None
        return str(country_code)


def build_locale_source(settings: AppSettings) -> Optional[LocaleSource]:
    if settings.country_code:
        return StaticLocaleSource(settings.country_code)
    if settings.geolocation_enabled:
        return IpGeolocationSource(settings.geolocation_url, settings.geolocation_timeout_seconds)
    return None


class MeasurementPreference:
    """The active measurement system for one user or device.

    Detection runs at most once; a manual override always wins over it.
    """

    def __init__(
        self,
        locale_source: Optional[LocaleSource] = None,
        default: MeasurementSystem = MeasurementSystem.METRIC
    ):
        self.locale_source = locale_source
        self.default = MeasurementSystem(default)
        self._detected: Optional[MeasurementSystem] = None
        self._override: Optional[MeasurementSystem] = None
        self._resolved = False
        self._lock = threading.Lock()

    def resolve(self) -> MeasurementSystem:
        # Callers arriving while the lookup is in flight wait for its result.
        with self._lock:
            if not self._resolved:
                self._detect()
                self._resolved = True
        return self._detected or self.default

    def _detect(self) -> None:
        if self.locale_source is None:
            return
        country_code = self.locale_source.get_country_code()
        if country_code:
            self._detected = classify_country(country_code)
            logger.info(
                f"Detected country {country_code} via {self.locale_source.name}, "
                f"using {self._detected.value}"
            )

    @property
    def system(self) -> MeasurementSystem:
        if self._override is not None:
            return self._override
        return self.resolve()

    @property
    def source(self) -> str:
        if self._override is not None:
            return "override"
        self.resolve()
        return "detected" if self._detected is not None else "default"

    def set(self, system: MeasurementSystem) -> None:
        self._override = MeasurementSystem(system)

    def reset(self) -> None:
        self._override = None


class PreferenceStore:
    """Per-client overrides on top of one shared detected preference.

    The server's location is detected once for everyone; a client that picks
    a system keeps it under its own id without affecting other clients.
    """

    def __init__(self, base: MeasurementPreference):
        self.base = base
        self._overrides: Dict[str, MeasurementSystem] = {}

    def system_for(self, client_id: Optional[str]) -> MeasurementSystem:
        if client_id and client_id in self._overrides:
            return self._overrides[client_id]
        return self.base.system

    def source_for(self, client_id: Optional[str]) -> str:
        if client_id and client_id in self._overrides:
            return "override"
        return self.base.source

    def set(self, client_id: str, system: MeasurementSystem) -> None:
        self._overrides[client_id] = MeasurementSystem(system)

    def reset(self, client_id: str) -> None:
        self._overrides.pop(client_id, None)

    def clear(self) -> None:
        self._overrides.clear()
