import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from yummio.core.logging_config import get_logger

logger = get_logger(__name__)

SYSTEMS = {"metric", "imperial"}
DEFAULT_GEOLOCATION_URL = "https://ipapi.co/json/"


@dataclass(frozen=True)
class AppSettings:
    default_measurement_system: str = "metric"
    geolocation_enabled: bool = True
    geolocation_url: str = DEFAULT_GEOLOCATION_URL
    geolocation_timeout_seconds: float = 5.0
    country_code: Optional[str] = None


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return default


def _as_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


def _as_system(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip().lower() in SYSTEMS:
        return value.strip().lower()
    return default


def _as_country(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip().upper()
    return None


def _config_path() -> Path:
    return Path(__file__).resolve().parents[2] / "config" / "app_config.json"


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        logger.warning(f"Invalid app config JSON at {config_path}: {exc}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"App config at {config_path} is not an object, ignoring it")
        return {}
    return data


def load_settings(path: Optional[Path] = None) -> AppSettings:
    """Load settings from the JSON config file, then apply environment overrides.

    Environment variables (also read from a local .env file) win over the file:
    YUMMIO_MEASUREMENT_SYSTEM, YUMMIO_GEOLOCATION_ENABLED, YUMMIO_GEOLOCATION_URL,
    YUMMIO_GEOLOCATION_TIMEOUT and YUMMIO_COUNTRY_CODE.
    """
    load_dotenv(".env")
    data = _read_config_file(path or _config_path())

    env_overrides = {
        "default_measurement_system": os.getenv("YUMMIO_MEASUREMENT_SYSTEM"),
        "geolocation_enabled": os.getenv("YUMMIO_GEOLOCATION_ENABLED"),
        "geolocation_url": os.getenv("YUMMIO_GEOLOCATION_URL"),
        "geolocation_timeout_seconds": os.getenv("YUMMIO_GEOLOCATION_TIMEOUT"),
        "country_code": os.getenv("YUMMIO_COUNTRY_CODE"),
    }
    data.update({key: value for key, value in env_overrides.items() if value is not None})

    defaults = AppSettings()
    return AppSettings(
        default_measurement_system=_as_system(
            data.get("default_measurement_system"), defaults.default_measurement_system
        ),
        geolocation_enabled=_as_bool(data.get("geolocation_enabled"), defaults.geolocation_enabled),
        geolocation_url=str(data.get("geolocation_url") or defaults.geolocation_url),
        geolocation_timeout_seconds=_as_float(
            data.get("geolocation_timeout_seconds"), defaults.geolocation_timeout_seconds
        ),
        country_code=_as_country(data.get("country_code")),
    )
