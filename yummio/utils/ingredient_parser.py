import math
import re
from typing import Optional

from yummio.models import ParsedIngredient

# Decimal, simple fraction, or mixed number. Alternation order matters: the
# regex engine backtracks into the later branches when the earlier ones cannot
# complete the match (e.g. "1 1/2 cups flour").
_AMOUNT = r"([0-9]+(?:\.[0-9]+)?|[0-9]+/[0-9]+|[0-9]+\s+[0-9]+/[0-9]+)"

# Tried in order; the first pattern matching the whole line wins.
INGREDIENT_PATTERNS = (
    re.compile(_AMOUNT + r"\s*([a-zA-Z]+)\s+(.+)"),
    re.compile(_AMOUNT + r"\s*([a-zA-Z]+)?\s*(.+)"),
)


def parse_ingredient(text: str) -> ParsedIngredient:
    """Split an ingredient line into amount, unit and description.

    "1 1/2 cups flour" -> amount 1.5, unit "cups", ingredient "flour".
    Lines without a leading number come back as a bare description.

    Lines such as "3 eggs" have no unit word, and the fallback pattern still
    captures one ("egg", leaving "s" as the description). Callers should not
    treat the unit as meaningful unless it converts.
    """
    for pattern in INGREDIENT_PATTERNS:
        match = pattern.fullmatch(text)
        if not match:
            continue

        amount_text, unit, description = match.groups()
        amount = _parse_amount(amount_text)
        if amount is None:
            break

        return ParsedIngredient(
            amount=amount,
            unit=unit.lower() if unit else None,
            ingredient=description.strip(),
        )

    return ParsedIngredient(ingredient=text.strip())


def _parse_amount(raw: str) -> Optional[float]:
    if "/" not in raw:
        amount = float(raw)
    else:
        parts = raw.split()
        whole = float(parts[0]) if len(parts) == 2 else 0.0
        numerator, denominator = parts[-1].split("/", 1)
        if float(denominator) == 0:
            return None
        amount = whole + float(numerator) / float(denominator)
    # Digit runs too long for a float overflow to inf, and inf/inf is nan.
    return amount if math.isfinite(amount) else None
