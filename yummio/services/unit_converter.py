"""
Unit conversion between metric and imperial kitchen measurements.

Quantities are converted to a base unit (milliliters, grams or degrees
Celsius) and then re-expressed in the natural unit of the target system for
their magnitude: "1000 ml" becomes "1 l", "48 tsp" becomes cups, and so on.
"""
import math
from typing import Optional, Union

from yummio.core.units import (
    KILOGRAM_THRESHOLD_G,
    LITER_THRESHOLD_ML,
    OUNCE_BAND_LIMIT,
    PREFERRED_UNITS,
    TABLESPOON_BAND_LIMIT,
    TEASPOON_BAND_LIMIT,
    TEMPERATURE_TO_C,
    VOLUME_TO_ML,
    WEIGHT_TO_G,
)
from yummio.models import Measurement, MeasurementSystem

SystemLike = Union[MeasurementSystem, str]


def classify_unit(unit: str) -> Optional[str]:
    """Return "volume", "weight", "temperature" or None for an unknown unit.

    Tables are checked in that order, so a unit listed in several tables
    resolves to the earliest one.
    """
    key = unit.lower()
    if key in VOLUME_TO_ML:
        return "volume"
    if key in WEIGHT_TO_G:
        return "weight"
    if key in TEMPERATURE_TO_C:
        return "temperature"
    return None


def convert_measurement(amount: float, from_unit: str, to_system: SystemLike) -> Measurement:
    """Convert a quantity into the natural unit of the target system.

    Unknown units pass through unchanged. The caller's amount and unit are
    always kept in original_value / original_unit.
    """
    system = MeasurementSystem(to_system)
    key = from_unit.lower()
    category = classify_unit(key)

    if category is None:
        return _package(amount, from_unit, amount, from_unit)

    if category == "temperature":
        celsius = TEMPERATURE_TO_C[key](amount)
        if system is MeasurementSystem.IMPERIAL:
            value = _round_half_up(celsius * 9 / 5 + 32, 1)
        else:
            value = _round_half_up(celsius, 1)
        return _package(value, PREFERRED_UNITS[system.value]["temperature"], amount, from_unit)

    if category == "volume":
        base_value = amount * VOLUME_TO_ML[key]
        if system is MeasurementSystem.METRIC:
            value, unit = _metric_volume(base_value)
        else:
            value, unit = _imperial_volume(base_value)
    else:
        base_value = amount * WEIGHT_TO_G[key]
        if system is MeasurementSystem.METRIC:
            value, unit = _metric_weight(base_value)
        else:
            value, unit = _imperial_weight(base_value)

    return _package(value, unit, amount, from_unit)


def _metric_volume(milliliters: float):
    units = PREFERRED_UNITS["metric"]["volume"]
    if milliliters >= LITER_THRESHOLD_ML:
        return _round_half_up(milliliters / 1000, 2), units["large"]
    # Small and medium both render as ml.
    unit = units["small"] if milliliters < 100 else units["medium"]
    return _round_half_up(milliliters), unit


def _imperial_volume(milliliters: float):
    units = PREFERRED_UNITS["imperial"]["volume"]
    tsp_value = milliliters / VOLUME_TO_ML["tsp"]
    tbsp_value = milliliters / VOLUME_TO_ML["tbsp"]
    cup_value = milliliters / VOLUME_TO_ML["cup"]

    if tsp_value < TEASPOON_BAND_LIMIT:
        return _round_to_quarter(tsp_value), units["small"]
    if tbsp_value < TABLESPOON_BAND_LIMIT:
        return _round_to_quarter(tbsp_value), units["medium"]
    return _round_to_quarter(cup_value), "cup" if cup_value == 1 else "cups"


def _metric_weight(grams: float):
    units = PREFERRED_UNITS["metric"]["weight"]
    if grams >= KILOGRAM_THRESHOLD_G:
        return _round_half_up(grams / 1000, 2), units["large"]
    return _round_half_up(grams), units["small"]


def _imperial_weight(grams: float):
    units = PREFERRED_UNITS["imperial"]["weight"]
    oz_value = grams / WEIGHT_TO_G["oz"]
    lb_value = grams / WEIGHT_TO_G["lb"]

    if oz_value < OUNCE_BAND_LIMIT:
        return _round_to_quarter(oz_value), units["small"]
    return _round_to_quarter(lb_value), "lb" if lb_value == 1 else "lbs"


def _round_half_up(value: float, places: int = 0) -> float:
    """Round with ties going up, the way kitchen scales and cookbooks do."""
    factor = 10 ** places
    scaled = value * factor + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / factor


def _round_to_quarter(value: float) -> float:
    scaled = value * 4 + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 4


def _package(value: float, unit: str, original_value: float, original_unit: str) -> Measurement:
    return Measurement(
        value=value,
        unit=unit,
        original_value=original_value,
        original_unit=original_unit,
    )
