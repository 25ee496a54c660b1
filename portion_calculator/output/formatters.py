"""Formatters for calculation results (JSON and Markdown)."""

import json
import math
from typing import Any, Dict, List, Optional

from portion_calculator.data_layer.models import (
    AdjustedIngredient,
    CalculationResult,
    MacroBreakdown,
    NutritionCandidate,
    NutritionProfile,
)
from portion_calculator.nutrition.calculator import (
    format_decimal,
    format_nutrition_value,
    number_to_text,
)

NO_INGREDIENTS_MESSAGE = "Enter ingredients with quantities above to see calculations"
NO_MACROS_MESSAGE = (
    "Add ingredients with nutritional data to see macronutrient distribution"
)
SHORT_QUERY_MESSAGE = "Type at least {min_length} characters to search"
NO_RESULTS_MESSAGE = "No ingredients found. Try a different search term."


def format_quantity_string(quantity: str, unit: str) -> str:
    """Format a quantity with its unit (e.g., "200 g"; no unit -> "200")."""
    if unit:
        return f"{quantity} {unit}"
    return quantity


def format_macro_badges(macros: MacroBreakdown) -> str:
    """Format macro percentages as "Protein: 75% | Carbs: 0% | Fat: 20%"."""
    return (
        f"Protein: {macros.protein_pct}% | "
        f"Carbs: {macros.carbs_pct}% | "
        f"Fat: {macros.fat_pct}%"
    )


def format_nutrition_table(totals: NutritionProfile, per_serving: NutritionProfile) -> str:
    """Format totals and per-serving values as a Markdown table.

    Args:
        totals: Whole-recipe nutrition
        per_serving: Nutrition per portion

    Returns:
        Markdown table with one row per nutrient
    """
    rows = [
        ("Calories", totals.calories, per_serving.calories, ""),
        ("Protein", totals.protein_g, per_serving.protein_g, "g"),
        ("Carbs", totals.carbs_g, per_serving.carbs_g, "g"),
        ("Fat", totals.fat_g, per_serving.fat_g, "g"),
    ]
    lines = [
        "| Nutrient | Total | Per Serving |",
        "|---|---:|---:|",
    ]
    for label, total, serving, suffix in rows:
        lines.append(
            f"| {label} | {format_nutrition_value(total)}{suffix} "
            f"| {format_nutrition_value(serving)}{suffix} |"
        )
    return "\n".join(lines)


def _format_ingredient_table(rows: List[AdjustedIngredient]) -> str:
    lines = [
        "| Ingredient | Original | Adjusted |",
        "|---|---:|---:|",
    ]
    for row in rows:
        lines.append(
            f"| {row.name} "
            f"| {format_quantity_string(row.quantity, row.unit)} "
            f"| {format_quantity_string(row.adjusted_quantity, row.unit)} |"
        )
    return "\n".join(lines)


def format_result_markdown(result: CalculationResult) -> str:
    """Format a CalculationResult as Markdown.

    Args:
        result: Result from PortionCalculator.calculate

    Returns:
        Formatted Markdown string
    """
    lines = ["# Portion Calculator\n"]
    lines.append(
        f"**Original Recipe Yields:** {result.original_portions} servings  "
    )
    lines.append(f"**Desired Portions:** {result.desired_portions}  ")
    lines.append(f"**Scale:** x{format_decimal(result.scale_ratio, 2)}")
    lines.append("")

    lines.append("## Adjusted Ingredients")
    if result.adjusted_ingredients:
        lines.append(_format_ingredient_table(result.adjusted_ingredients))
    else:
        lines.append(NO_INGREDIENTS_MESSAGE)
    lines.append("")

    lines.append("## Nutrition Facts")
    lines.append("### Original Recipe")
    lines.append(
        format_nutrition_table(result.original_totals, result.original_per_serving)
    )
    lines.append("")
    lines.append("### Adjusted Recipe")
    lines.append(
        format_nutrition_table(result.adjusted_totals, result.adjusted_per_serving)
    )
    lines.append("")

    lines.append("### Macronutrient Distribution")
    if result.macros is not None:
        lines.append(format_macro_badges(result.macros))
    else:
        lines.append(NO_MACROS_MESSAGE)
    lines.append("")

    return "\n".join(lines)


def _json_number(value: float) -> Optional[float]:
    # JSON has no Infinity/NaN; overflowed totals are null, see "display"
    return value if math.isfinite(value) else None


def _nutrition_json(nutrition: NutritionProfile) -> Dict[str, Any]:
    return {
        "calories": _json_number(nutrition.calories),
        "protein_g": _json_number(nutrition.protein_g),
        "carbs_g": _json_number(nutrition.carbs_g),
        "fat_g": _json_number(nutrition.fat_g),
        "display": {
            "calories": format_nutrition_value(nutrition.calories),
            "protein_g": format_nutrition_value(nutrition.protein_g),
            "carbs_g": format_nutrition_value(nutrition.carbs_g),
            "fat_g": format_nutrition_value(nutrition.fat_g),
        },
    }


def format_result_json(result: CalculationResult) -> Dict[str, Any]:
    """Format a CalculationResult as JSON (for API usage).

    Raw numbers are kept alongside their display strings so clients can
    re-format without re-deriving.

    Args:
        result: Result from PortionCalculator.calculate

    Returns:
        Dictionary ready for JSON serialization
    """
    macros = None
    if result.macros is not None:
        macros = {
            "protein_pct": result.macros.protein_pct,
            "carbs_pct": result.macros.carbs_pct,
            "fat_pct": result.macros.fat_pct,
        }

    return {
        "original_portions": result.original_portions,
        "desired_portions": result.desired_portions,
        "scale_ratio": result.scale_ratio,
        "adjusted_ingredients": [
            {
                "name": row.name,
                "quantity": row.quantity,
                "unit": row.unit,
                "adjusted_quantity": row.adjusted_quantity,
            }
            for row in result.adjusted_ingredients
        ],
        "original": {
            "totals": _nutrition_json(result.original_totals),
            "per_serving": _nutrition_json(result.original_per_serving),
        },
        "adjusted": {
            "totals": _nutrition_json(result.adjusted_totals),
            "per_serving": _nutrition_json(result.adjusted_per_serving),
        },
        "macros": macros,
    }


def format_result_json_string(result: CalculationResult, indent: int = 2) -> str:
    """Format a CalculationResult as a JSON string.

    Args:
        result: Result from PortionCalculator.calculate
        indent: JSON indentation (default: 2)

    Returns:
        JSON string
    """
    return json.dumps(format_result_json(result), indent=indent)


def format_candidate_json(candidate: NutritionCandidate) -> Dict[str, Any]:
    return {
        "name": candidate.name,
        "calories": candidate.calories,
        "protein": candidate.protein,
        "carbs": candidate.carbs,
        "fat": candidate.fat,
        "serving_size": candidate.serving_size,
        "serving_unit": candidate.serving_unit,
    }


def format_candidates_markdown(candidates: List[NutritionCandidate]) -> str:
    """Format search results as a Markdown table (macros as protein/carbs/fat)."""
    lines = [
        "| Ingredient | Calories | P/C/F |",
        "|---|---:|---|",
    ]
    for candidate in candidates:
        lines.append(
            f"| {candidate.name} | {number_to_text(candidate.calories)} "
            f"| {number_to_text(candidate.protein)}g/"
            f"{number_to_text(candidate.carbs)}g/"
            f"{number_to_text(candidate.fat)}g |"
        )
    return "\n".join(lines)
