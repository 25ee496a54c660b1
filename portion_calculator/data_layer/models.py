"""Data models for the portion calculator."""
from dataclasses import dataclass
from typing import List, Optional


# Text fields of an ingredient row, in display order
INGREDIENT_FIELDS = ("name", "quantity", "unit", "calories", "protein", "carbs", "fat")

# Fields holding nutrition values per 100 units of quantity
NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat")


@dataclass
class Ingredient:
    """One row of user input.

    Every field is kept as entered; numeric fields are parsed on demand so a
    row can hold half-typed values without breaking the calculation.
    """

    name: str = ""  # Free-form, may be empty
    quantity: str = ""  # Amount in the original recipe, per `unit`
    unit: str = ""  # Free-form label (e.g., "g", "cup"), never converted
    calories: str = ""  # Per 100 units of quantity
    protein: str = ""
    carbs: str = ""
    fat: str = ""


@dataclass
class NutritionCandidate:
    """Result of an ingredient lookup (values for one standard serving)."""

    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    serving_size: float  # e.g., 100.0
    serving_unit: str  # e.g., "g"


@dataclass
class NutritionProfile:
    """Represents nutrition information (macros and calories)."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass
class MacroBreakdown:
    """Share of calories from each macronutrient, in whole percent.

    Computed independently against the recorded calorie total, so the three
    values are not guaranteed to sum to 100.
    """

    protein_pct: int
    carbs_pct: int
    fat_pct: int


@dataclass
class AdjustedIngredient:
    """An ingredient row as shown in the adjusted ingredients table."""

    name: str
    quantity: str  # Original quantity text
    unit: str
    adjusted_quantity: str  # Scaled quantity text


@dataclass
class CalculationResult:
    """Everything derived from the current form state."""

    original_portions: int
    desired_portions: int
    scale_ratio: float
    adjusted_ingredients: List[AdjustedIngredient]
    original_totals: NutritionProfile
    original_per_serving: NutritionProfile
    adjusted_totals: NutritionProfile
    adjusted_per_serving: NutritionProfile
    macros: Optional[MacroBreakdown] = None  # None when adjusted calories <= 0
