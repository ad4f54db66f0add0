import math
import re
from decimal import Decimal, ROUND_HALF_UP

from yummio.core.units import COMMON_FRACTIONS, IMPERIAL_UNITS
from yummio.models import Measurement


def format_measurement(measurement: Measurement) -> str:
    """Render a measurement for display, e.g. "1/2 cup" or "1.5 l"."""
    value = measurement.value
    unit = measurement.unit

    if unit in IMPERIAL_UNITS and not _is_whole(value):
        fraction = to_fraction(value)
        if fraction is not None:
            return f"{fraction} {unit}"

    return f"{format_decimal(value)} {unit}"


def to_fraction(value: float):
    """Look up the kitchen fraction for a value, rounded to the nearest quarter."""
    scaled = value * 4 + 0.5
    if not math.isfinite(scaled):
        return None
    return COMMON_FRACTIONS.get(math.floor(scaled) / 4)


def format_decimal(value: float) -> str:
    """Up to two decimals, without trailing zeros or a dangling point."""
    if not math.isfinite(value):
        return str(value)
    if _is_whole(value):
        return str(int(value))
    fixed = str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    return re.sub(r"\.?0+$", "", fixed, count=1)


def _is_whole(value: float) -> bool:
    return math.isfinite(value) and value % 1 == 0
