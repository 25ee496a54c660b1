"""Portion scaling and nutrition aggregation.

Every function here is pure: callers pass the current ingredient rows and
scale explicitly. User-entered text that does not parse as a number is
treated as absent rather than rejected, so a row that is mid-edit never
breaks the calculation.
"""
import math
import re
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, Optional, Union

from portion_calculator.data_layer.models import (
    Ingredient,
    MacroBreakdown,
    NUTRIENT_FIELDS,
)
from portion_calculator.data_layer.exceptions import (
    InvalidPortionsError,
    UnknownIngredientFieldError,
)


# Stored macro values are per 100 units of the ingredient's quantity
STANDARD_SERVING = 100.0

# Atwater factors (kcal per gram)
CALORIES_PER_GRAM_PROTEIN = 4
CALORIES_PER_GRAM_CARBS = 4
CALORIES_PER_GRAM_FAT = 9

QUANTITY_DECIMALS = 2
NUTRITION_DECIMALS = 1

# Leading numeric prefix: "12g" -> 12, "1.5 cups" -> 1.5, ".5" -> 0.5, "2e3" -> 2000
_NUMBER_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse the leading number of a user-entered string.

    Args:
        text: Raw field text

    Returns:
        The parsed value, or None if the text is empty, does not start with a
        number, or is not finite
    """
    if not text:
        return None
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def number_to_text(value: Union[int, float]) -> str:
    """Render a number the way it is stored in a text field (100.0 -> "100")."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _round_half_up(value: float, decimals: int) -> Decimal:
    # Shortest round-tripping decimal of the float, ties away from zero
    with localcontext() as ctx:
        ctx.prec = 400
        return Decimal(repr(value)).quantize(
            Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP
        )


def _non_finite_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def format_decimal(value: float, decimals: int, grouping: bool = False) -> str:
    """Format a number with at most `decimals` fractional digits.

    Trailing zeros (and a bare decimal point) are trimmed, never padded.
    Rounding works on the shortest decimal that round-trips to the float,
    so 1.005 -> "1.01" even though its binary value is slightly below
    1.005. Results that overflowed are shown as "Infinity", "-Infinity"
    or "NaN".

    Args:
        value: Number to format
        decimals: Maximum number of fractional digits
        grouping: Insert thousands separators

    Returns:
        Formatted string, e.g. 41.25 -> "41.3" with one decimal
    """
    if not math.isfinite(value):
        return _non_finite_text(value)
    rounded = _round_half_up(value, decimals)
    text = format(rounded, ",f" if grouping else "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_nutrition_value(value: float) -> str:
    """Format a nutrition total for display (1 decimal, grouped)."""
    return format_decimal(value, NUTRITION_DECIMALS, grouping=True)


def scale_quantity(quantity_text: str, scale_ratio: float) -> str:
    """Scale an ingredient quantity by the portion ratio.

    Args:
        quantity_text: Raw quantity string from the ingredient row
        scale_ratio: desired_portions / original_portions

    Returns:
        Empty string for empty input, the input unchanged if it does not
        parse as a number, otherwise the scaled value with at most two
        decimals and no trailing zeros
    """
    if not quantity_text:
        return ""
    quantity = parse_number(quantity_text)
    if quantity is None:
        return quantity_text
    return format_decimal(quantity * scale_ratio, QUANTITY_DECIMALS)


def aggregate_nutrient(
    ingredients: Iterable[Ingredient],
    nutrient: str,
    apply_scale: bool = False,
    scale_ratio: float = 1.0,
) -> float:
    """Sum one nutrient across all ingredient rows.

    Each row contributes (value * quantity / 100), multiplied by the scale
    ratio when `apply_scale` is set. Rows where either the nutrient or the
    quantity is empty or unparseable contribute nothing.

    Args:
        ingredients: Ingredient rows, in list order
        nutrient: One of "calories", "protein", "carbs", "fat"
        apply_scale: Whether to scale to the desired portions
        scale_ratio: desired_portions / original_portions

    Returns:
        Total amount (0.0 for an empty list)

    Raises:
        UnknownIngredientFieldError: If `nutrient` is not a nutrient field
    """
    if nutrient not in NUTRIENT_FIELDS:
        raise UnknownIngredientFieldError(nutrient)

    ratio = scale_ratio if apply_scale else 1
    total = 0.0
    for ingredient in ingredients:
        raw_value = getattr(ingredient, nutrient)
        if not raw_value or not ingredient.quantity:
            continue

        value = parse_number(raw_value)
        quantity = parse_number(ingredient.quantity)
        if value is None or quantity is None:
            continue

        total += ((value * quantity) / STANDARD_SERVING) * ratio

    return total


def per_serving(total: float, portions: float) -> float:
    """Divide a recipe total by its number of portions.

    Raises:
        InvalidPortionsError: If `portions` is zero or negative
    """
    if portions <= 0:
        raise InvalidPortionsError(portions)
    return total / portions


def _js_round(value: float) -> int:
    # Halves round toward positive infinity
    return math.floor(value + 0.5)


def macro_percentages(
    protein_total: float,
    carbs_total: float,
    fat_total: float,
    calorie_total: float,
) -> Optional[MacroBreakdown]:
    """Split the recorded calories into macronutrient percentages.

    Uses Atwater factors (4/4/9 kcal per gram). Each percentage is computed
    against `calorie_total` on its own and rounded to a whole number; the
    three are not renormalised to sum to 100.

    Returns:
        MacroBreakdown, or None when `calorie_total` is not positive or any
        percentage is not finite (totals that overflowed)
    """
    if calorie_total <= 0:
        return None

    shares = [
        protein_total * CALORIES_PER_GRAM_PROTEIN / calorie_total * 100,
        carbs_total * CALORIES_PER_GRAM_CARBS / calorie_total * 100,
        fat_total * CALORIES_PER_GRAM_FAT / calorie_total * 100,
    ]
    if not all(math.isfinite(share) for share in shares):
        return None

    protein_pct, carbs_pct, fat_pct = (_js_round(share) for share in shares)
    return MacroBreakdown(
        protein_pct=protein_pct, carbs_pct=carbs_pct, fat_pct=fat_pct
    )
