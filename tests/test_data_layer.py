"""Tests for data layer components."""
import json
import os
from tempfile import NamedTemporaryFile

import pytest
import yaml

from portion_calculator.data_layer.models import Ingredient
from portion_calculator.data_layer.recipe_file import RecipeFileLoader
from portion_calculator.data_layer.settings import CalculatorSettings, SettingsLoader


def _write_temp(content: str, suffix: str) -> str:
    with NamedTemporaryFile(mode="w", suffix=suffix, delete=False) as f:
        f.write(content)
        return f.name


class TestSettingsLoader:
    """Tests for SettingsLoader."""

    def test_load_settings_from_yaml(self):
        """Test loading every setting from YAML."""
        data = {
            "portions": {"default_original": 6, "default_desired": 2, "max_desired": 12},
            "search": {"debounce_ms": 300, "min_query_length": 4, "mock_delay_ms": 0},
        }
        temp_path = _write_temp(yaml.dump(data), ".yaml")
        try:
            settings = SettingsLoader(temp_path).load()
            assert settings.default_original_portions == 6
            assert settings.default_desired_portions == 2
            assert settings.max_desired_portions == 12
            assert settings.debounce_ms == 300
            assert settings.debounce_seconds == pytest.approx(0.3)
            assert settings.min_query_length == 4
            assert settings.mock_delay_seconds == 0.0
        finally:
            os.unlink(temp_path)

    def test_missing_keys_use_defaults(self):
        """Test that a partial file keeps defaults for the rest."""
        temp_path = _write_temp("search:\n  debounce_ms: 100\n", ".yaml")
        try:
            settings = SettingsLoader(temp_path).load()
            assert settings.debounce_ms == 100
            assert settings.default_original_portions == 4
            assert settings.max_desired_portions == 20
        finally:
            os.unlink(temp_path)

    def test_empty_file_is_all_defaults(self):
        temp_path = _write_temp("", ".yaml")
        try:
            assert SettingsLoader(temp_path).load() == CalculatorSettings()
        finally:
            os.unlink(temp_path)

    def test_default_desired_out_of_range(self):
        """Test that an inconsistent default is rejected."""
        temp_path = _write_temp(
            "portions:\n  default_desired: 30\n  max_desired: 20\n", ".yaml"
        )
        try:
            with pytest.raises(ValueError, match="default_desired"):
                SettingsLoader(temp_path).load()
        finally:
            os.unlink(temp_path)

    def test_missing_file(self):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            SettingsLoader("/nonexistent/calculator.yaml").load()

    def test_project_config_matches_defaults(self):
        """Test the shipped config file loads to the built-in defaults."""
        config_path = os.path.join(
            os.path.dirname(__file__), os.pardir, "config", "calculator.yaml"
        )
        assert SettingsLoader(config_path).load() == CalculatorSettings()


class TestRecipeFileLoader:
    """Tests for RecipeFileLoader."""

    def test_load_yaml_recipe(self):
        """Test loading a YAML recipe, converting numbers to text."""
        content = (
            "original_portions: 4\n"
            "desired_portions: 8\n"
            "ingredients:\n"
            "  - name: chicken breast\n"
            "    quantity: 100\n"
            "    unit: g\n"
            "    calories: 165\n"
            "    protein: 31\n"
            "    carbs: 0\n"
            "    fat: 3.6\n"
        )
        temp_path = _write_temp(content, ".yaml")
        try:
            recipe = RecipeFileLoader(temp_path).load()
            assert recipe.original_portions == 4
            assert recipe.desired_portions == 8
            assert recipe.ingredients == [
                Ingredient(
                    name="chicken breast",
                    quantity="100",
                    unit="g",
                    calories="165",
                    protein="31",
                    carbs="0",
                    fat="3.6",
                )
            ]
        finally:
            os.unlink(temp_path)

    def test_load_json_recipe_with_missing_fields(self):
        """Test JSON input where absent fields become empty text."""
        data = {"ingredients": [{"name": "salt", "quantity": "a pinch"}]}
        temp_path = _write_temp(json.dumps(data), ".json")
        try:
            recipe = RecipeFileLoader(temp_path).load()
            assert recipe.original_portions is None
            assert recipe.ingredients == [Ingredient(name="salt", quantity="a pinch")]
        finally:
            os.unlink(temp_path)

    def test_ingredients_must_be_list(self):
        temp_path = _write_temp("ingredients: chicken\n", ".yaml")
        try:
            with pytest.raises(ValueError, match="must be a list"):
                RecipeFileLoader(temp_path).load()
        finally:
            os.unlink(temp_path)

    def test_top_level_must_be_mapping(self):
        temp_path = _write_temp("- chicken\n- rice\n", ".yml")
        try:
            with pytest.raises(ValueError, match="mapping"):
                RecipeFileLoader(temp_path).load()
        finally:
            os.unlink(temp_path)
