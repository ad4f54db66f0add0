from typing import Callable, Dict, FrozenSet, Tuple

# --- Base Unit Factors ---
# Volume units map to milliliters. Singular and plural spellings are separate keys.
VOLUME_TO_ML: Dict[str, float] = {
    "ml": 1,
    "l": 1000,
    "cup": 236.588,
    "cups": 236.588,
    "tbsp": 14.787,
    "tablespoon": 14.787,
    "tablespoons": 14.787,
    "tsp": 4.929,
    "teaspoon": 4.929,
    "teaspoons": 4.929,
    "fl oz": 29.574,
    "fluid ounce": 29.574,
    "fluid ounces": 29.574,
    "pint": 473.176,
    "pints": 473.176,
    "quart": 946.353,
    "quarts": 946.353,
    "gallon": 3785.41,
    "gallons": 3785.41,
}

# Weight units map to grams.
WEIGHT_TO_G: Dict[str, float] = {
    "g": 1,
    "gram": 1,
    "grams": 1,
    "kg": 1000,
    "kilogram": 1000,
    "kilograms": 1000,
    "oz": 28.3495,
    "ounce": 28.3495,
    "ounces": 28.3495,
    "lb": 453.592,
    "pound": 453.592,
    "pounds": 453.592,
}


def _fahrenheit_to_celsius(temp: float) -> float:
    return (temp - 32) * 5 / 9


# Temperature units map to a function returning degrees Celsius.
TEMPERATURE_TO_C: Dict[str, Callable[[float], float]] = {
    "c": lambda temp: temp,
    "celsius": lambda temp: temp,
    "f": _fahrenheit_to_celsius,
    "fahrenheit": _fahrenheit_to_celsius,
}

# Lookup order when a unit could belong to more than one category.
CATEGORY_PRIORITY: Tuple[str, ...] = ("volume", "weight", "temperature")

# --- Preferred Units ---
# Metric always renders "ml" below the liter threshold; small/medium are kept for symmetry.
PREFERRED_UNITS: Dict[str, Dict[str, object]] = {
    "metric": {
        "volume": {"small": "ml", "medium": "ml", "large": "l"},
        "weight": {"small": "g", "large": "kg"},
        "temperature": "°C",
    },
    "imperial": {
        "volume": {"small": "tsp", "medium": "tbsp", "large": "cup"},
        "weight": {"small": "oz", "large": "lb"},
        "temperature": "°F",
    },
}

# --- Magnitude Bands ---
LITER_THRESHOLD_ML = 1000
KILOGRAM_THRESHOLD_G = 1000
TEASPOON_BAND_LIMIT = 3     # below 3 tsp stay in teaspoons
TABLESPOON_BAND_LIMIT = 16  # below 16 tbsp stay in tablespoons
OUNCE_BAND_LIMIT = 16       # below 16 oz stay in ounces

# --- Formatting ---
# Units whose values are shown as kitchen fractions.
IMPERIAL_UNITS: FrozenSet[str] = frozenset({"tsp", "tbsp", "cup", "cups", "oz", "lb", "lbs"})

# Keyed by quarter-rounded value; whole numbers are rendered directly.
COMMON_FRACTIONS: Dict[float, str] = {
    0.25: "1/4",
    0.5: "1/2",
    0.75: "3/4",
    1.25: "1 1/4",
    1.5: "1 1/2",
    1.75: "1 3/4",
    2.25: "2 1/4",
    2.5: "2 1/2",
    2.75: "2 3/4",
}

# --- Locale ---
# United States, Liberia, Myanmar
IMPERIAL_COUNTRIES: FrozenSet[str] = frozenset({"US", "LR", "MM"})
