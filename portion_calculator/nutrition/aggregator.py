"""Recipe summary built from the pure calculator functions."""
from typing import List, Sequence

from portion_calculator.data_layer.models import (
    AdjustedIngredient,
    CalculationResult,
    Ingredient,
    NutritionProfile,
)
from portion_calculator.nutrition.calculator import (
    aggregate_nutrient,
    macro_percentages,
    per_serving,
    scale_quantity,
)
from portion_calculator.nutrition.portions import RecipeScale


class PortionCalculator:
    """Derives every displayed value from ingredient rows and a scale."""

    @staticmethod
    def adjust_ingredients(
        ingredients: Sequence[Ingredient], scale: RecipeScale
    ) -> List[AdjustedIngredient]:
        """Scale each row that has both a name and a quantity.

        Args:
            ingredients: Ingredient rows in display order
            scale: Current portion scale

        Returns:
            Adjusted rows, in the same order, skipping incomplete rows
        """
        adjusted = []
        for ingredient in ingredients:
            if not ingredient.name or not ingredient.quantity:
                continue
            adjusted.append(
                AdjustedIngredient(
                    name=ingredient.name,
                    quantity=ingredient.quantity,
                    unit=ingredient.unit,
                    adjusted_quantity=scale_quantity(
                        ingredient.quantity, scale.scale_ratio
                    ),
                )
            )
        return adjusted

    @staticmethod
    def totals(
        ingredients: Sequence[Ingredient],
        scale: RecipeScale,
        adjusted: bool = False,
    ) -> NutritionProfile:
        """Sum all four nutrients for the original or adjusted recipe."""

        def total(nutrient: str) -> float:
            return aggregate_nutrient(
                ingredients, nutrient, apply_scale=adjusted, scale_ratio=scale.scale_ratio
            )

        return NutritionProfile(
            calories=total("calories"),
            protein_g=total("protein"),
            carbs_g=total("carbs"),
            fat_g=total("fat"),
        )

    @staticmethod
    def per_serving_profile(totals: NutritionProfile, portions: int) -> NutritionProfile:
        """Divide each total by the number of portions."""
        return NutritionProfile(
            calories=per_serving(totals.calories, portions),
            protein_g=per_serving(totals.protein_g, portions),
            carbs_g=per_serving(totals.carbs_g, portions),
            fat_g=per_serving(totals.fat_g, portions),
        )

    @classmethod
    def calculate(
        cls, ingredients: Sequence[Ingredient], scale: RecipeScale
    ) -> CalculationResult:
        """Compute the full result for the current rows and scale.

        The macro breakdown is taken from the adjusted totals and is left
        as None when the adjusted recipe has no calories.
        """
        original_totals = cls.totals(ingredients, scale)
        adjusted_totals = cls.totals(ingredients, scale, adjusted=True)

        return CalculationResult(
            original_portions=scale.original_portions,
            desired_portions=scale.desired_portions,
            scale_ratio=scale.scale_ratio,
            adjusted_ingredients=cls.adjust_ingredients(ingredients, scale),
            original_totals=original_totals,
            original_per_serving=cls.per_serving_profile(
                original_totals, scale.original_portions
            ),
            adjusted_totals=adjusted_totals,
            adjusted_per_serving=cls.per_serving_profile(
                adjusted_totals, scale.desired_portions
            ),
            macros=macro_percentages(
                adjusted_totals.protein_g,
                adjusted_totals.carbs_g,
                adjusted_totals.fat_g,
                adjusted_totals.calories,
            ),
        )
