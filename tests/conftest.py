import os

import pytest

# Keep the app from calling the geolocation service during tests.
os.environ["YUMMIO_GEOLOCATION_ENABLED"] = "false"
os.environ.pop("YUMMIO_COUNTRY_CODE", None)
os.environ.pop("YUMMIO_MEASUREMENT_SYSTEM", None)

from yummio.models import Measurement
from yummio.services.auth_service import AuthService, InMemoryUserRepository


@pytest.fixture
def auth_service():
    """Fixture for an AuthService with a fresh demo user store."""
    return AuthService(InMemoryUserRepository())


@pytest.fixture
def make_measurement():
    """Build a Measurement whose original fields mirror the converted ones."""
    def _make(value, unit):
        return Measurement(value=value, unit=unit, original_value=value, original_unit=unit)
    return _make
