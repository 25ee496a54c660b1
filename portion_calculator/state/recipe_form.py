"""In-memory state of the recipe form.

Holds the ingredient rows and the two portion controls. Derived values are
never cached: `calculate()` re-derives everything from the current state.
"""
from dataclasses import replace
from typing import List, Optional

from portion_calculator.data_layer.exceptions import UnknownIngredientFieldError
from portion_calculator.data_layer.models import (
    CalculationResult,
    Ingredient,
    INGREDIENT_FIELDS,
    NutritionCandidate,
)
from portion_calculator.data_layer.settings import CalculatorSettings
from portion_calculator.nutrition.aggregator import PortionCalculator
from portion_calculator.nutrition.calculator import number_to_text
from portion_calculator.nutrition.portions import (
    PortionInput,
    RecipeScale,
    clamp_desired_portions,
    clamp_original_portions,
)


class RecipeForm:
    """Ingredient rows plus original/desired portion counts.

    There is always at least one row; a fresh form has a single empty one.
    """

    def __init__(self, settings: Optional[CalculatorSettings] = None):
        self.settings = settings or CalculatorSettings()
        self._ingredients: List[Ingredient] = [Ingredient()]
        self._scale = RecipeScale(
            original_portions=clamp_original_portions(
                self.settings.default_original_portions
            ),
            desired_portions=clamp_desired_portions(
                self.settings.default_desired_portions,
                self.settings.max_desired_portions,
            ),
        )

    @property
    def ingredients(self) -> List[Ingredient]:
        """Copy of the current rows, in display order."""
        return list(self._ingredients)

    @property
    def scale(self) -> RecipeScale:
        return self._scale

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._ingredients):
            raise IndexError(
                f"Ingredient row {index} out of range (0..{len(self._ingredients) - 1})"
            )

    def add_ingredient(self) -> int:
        """Append an empty row and return its index."""
        self._ingredients.append(Ingredient())
        return len(self._ingredients) - 1

    def replace_ingredients(self, ingredients: List[Ingredient]) -> None:
        """Replace all rows; an empty list leaves a single empty row."""
        self._ingredients = list(ingredients) or [Ingredient()]

    def remove_ingredient(self, index: int) -> bool:
        """Remove a row. Removing the only remaining row does nothing.

        Returns:
            True if a row was removed

        Raises:
            IndexError: If `index` is out of range
        """
        self._check_index(index)
        if len(self._ingredients) == 1:
            return False
        del self._ingredients[index]
        return True

    def update_ingredient(self, index: int, field_name: str, value: str) -> Ingredient:
        """Set one text field of a row.

        Raises:
            IndexError: If `index` is out of range
            UnknownIngredientFieldError: If `field_name` is not an ingredient field
        """
        self._check_index(index)
        if field_name not in INGREDIENT_FIELDS:
            raise UnknownIngredientFieldError(field_name)

        updated = replace(self._ingredients[index], **{field_name: value})
        self._ingredients[index] = updated
        return updated

    def apply_candidate(self, index: int, candidate: NutritionCandidate) -> Ingredient:
        """Overwrite a row with a search result.

        The quantity becomes the candidate's serving size, which puts the
        macro values on the per-100-units basis the totals expect.
        """
        self._check_index(index)
        ingredient = Ingredient(
            name=candidate.name,
            quantity=number_to_text(candidate.serving_size),
            unit=candidate.serving_unit,
            calories=number_to_text(candidate.calories),
            protein=number_to_text(candidate.protein),
            carbs=number_to_text(candidate.carbs),
            fat=number_to_text(candidate.fat),
        )
        self._ingredients[index] = ingredient
        return ingredient

    def set_original_portions(self, value: PortionInput) -> int:
        """Set the original yield; returns the clamped value actually stored."""
        portions = clamp_original_portions(value)
        self._scale = replace(self._scale, original_portions=portions)
        return portions

    def set_desired_portions(self, value: PortionInput) -> int:
        """Set the desired portions; returns the clamped value actually stored."""
        portions = clamp_desired_portions(value, self.settings.max_desired_portions)
        self._scale = replace(self._scale, desired_portions=portions)
        return portions

    def calculate(self) -> CalculationResult:
        return PortionCalculator.calculate(self._ingredients, self._scale)
