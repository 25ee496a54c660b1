"""Tests for RecipeForm state management."""
import pytest

from portion_calculator.data_layer.exceptions import UnknownIngredientFieldError
from portion_calculator.data_layer.models import Ingredient, NutritionCandidate
from portion_calculator.data_layer.settings import CalculatorSettings
from portion_calculator.state.recipe_form import RecipeForm


class TestRecipeForm:
    """Tests for RecipeForm."""

    @pytest.fixture
    def form(self):
        return RecipeForm()

    def test_starts_with_one_empty_row(self, form):
        """Test the initial state."""
        assert form.ingredients == [Ingredient()]
        assert form.scale.original_portions == 4
        assert form.scale.desired_portions == 4

    def test_defaults_from_settings(self):
        """Test that default portions come from settings."""
        settings = CalculatorSettings(default_original_portions=2, default_desired_portions=6)
        form = RecipeForm(settings)
        assert form.scale.original_portions == 2
        assert form.scale.desired_portions == 6

    def test_add_ingredient(self, form):
        """Test appending rows."""
        index = form.add_ingredient()
        assert index == 1
        assert len(form.ingredients) == 2

    def test_remove_last_row_is_noop(self, form):
        """Test that the only row cannot be removed."""
        assert form.remove_ingredient(0) is False
        assert len(form.ingredients) == 1

    def test_remove_row(self, form):
        """Test removing one of several rows keeps the others in order."""
        form.update_ingredient(0, "name", "first")
        form.add_ingredient()
        form.update_ingredient(1, "name", "second")
        form.add_ingredient()
        form.update_ingredient(2, "name", "third")

        assert form.remove_ingredient(1) is True
        assert [ing.name for ing in form.ingredients] == ["first", "third"]

    def test_remove_out_of_range(self, form):
        """Test that an invalid index raises IndexError."""
        form.add_ingredient()
        with pytest.raises(IndexError):
            form.remove_ingredient(5)

    def test_update_ingredient(self, form):
        """Test setting individual text fields."""
        form.update_ingredient(0, "quantity", "12.")
        form.update_ingredient(0, "unit", "oz")
        ingredient = form.ingredients[0]
        assert ingredient.quantity == "12."
        assert ingredient.unit == "oz"

    def test_update_unknown_field(self, form):
        """Test that unknown field names are rejected."""
        with pytest.raises(UnknownIngredientFieldError):
            form.update_ingredient(0, "sodium", "10")

    def test_ingredients_property_is_a_copy(self, form):
        """Test that callers cannot mutate the row list directly."""
        form.ingredients.append(Ingredient(name="sneaky"))
        assert len(form.ingredients) == 1

    def test_apply_candidate(self, form):
        """Test that a search result overwrites the whole row."""
        form.update_ingredient(0, "name", "old")
        form.update_ingredient(0, "quantity", "3")
        candidate = NutritionCandidate(
            name="chicken - Chicken Breast",
            calories=165.0,
            protein=31.0,
            carbs=0.0,
            fat=3.6,
            serving_size=100.0,
            serving_unit="g",
        )
        form.apply_candidate(0, candidate)

        assert form.ingredients[0] == Ingredient(
            name="chicken - Chicken Breast",
            quantity="100",
            unit="g",
            calories="165",
            protein="31",
            carbs="0",
            fat="3.6",
        )

    def test_set_portions_clamps(self, form):
        """Test that portion setters store and return clamped values."""
        assert form.set_original_portions("0") == 1
        assert form.set_desired_portions("25") == 20
        assert form.set_desired_portions("5") == 5
        assert form.scale.original_portions == 1
        assert form.scale.desired_portions == 5

    def test_replace_ingredients(self, form):
        """Test replacing rows, with an empty list leaving one empty row."""
        form.replace_ingredients([Ingredient(name="a"), Ingredient(name="b")])
        assert len(form.ingredients) == 2
        form.replace_ingredients([])
        assert form.ingredients == [Ingredient()]

    def test_calculate_recomputes_from_state(self, form):
        """Test end-to-end recalculation after edits."""
        form.update_ingredient(0, "name", "chicken breast")
        form.update_ingredient(0, "quantity", "100")
        form.update_ingredient(0, "calories", "165")

        form.set_desired_portions(8)
        result = form.calculate()
        assert result.adjusted_ingredients[0].adjusted_quantity == "200"
        assert result.adjusted_totals.calories == pytest.approx(330.0)

        form.set_desired_portions(2)
        result = form.calculate()
        assert result.adjusted_ingredients[0].adjusted_quantity == "50"
        assert result.adjusted_totals.calories == pytest.approx(82.5)
