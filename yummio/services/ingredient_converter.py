from typing import Iterable, List

from yummio.core.logging_config import get_logger
from yummio.services.unit_converter import SystemLike, convert_measurement
from yummio.utils.ingredient_parser import parse_ingredient
from yummio.utils.measurement_formatter import format_measurement

logger = get_logger(__name__)


def convert_ingredient(line: str, target_system: SystemLike) -> str:
    """Convert the measurement at the start of one ingredient line.

    Lines without both an amount and a unit are returned verbatim.
    """
    parsed = parse_ingredient(line)
    if not parsed.amount or not parsed.unit:
        return line

    converted = convert_measurement(parsed.amount, parsed.unit, target_system)
    result = f"{format_measurement(converted)} {parsed.ingredient}"
    logger.debug(f"Converted '{line}' -> '{result}'")
    return result


def convert_ingredient_list(ingredients: Iterable[str], target_system: SystemLike) -> List[str]:
    """Convert every line for display, keeping order and length."""
    return [convert_ingredient(line, target_system) for line in ingredients]
