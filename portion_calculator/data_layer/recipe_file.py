"""Recipe file loader for reading ingredient rows from YAML or JSON."""
import json
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from portion_calculator.data_layer.models import Ingredient, INGREDIENT_FIELDS
from portion_calculator.nutrition.calculator import number_to_text


@dataclass
class RecipeInput:
    """Contents of a recipe file, exactly as the form would hold them."""

    ingredients: List[Ingredient] = field(default_factory=list)
    original_portions: Optional[Any] = None  # Raw, clamped by the caller
    desired_portions: Optional[Any] = None


class RecipeFileLoader:
    """Loader for a single recipe from a YAML or JSON file.

    Expected shape::

        original_portions: 4
        desired_portions: 8        # optional
        ingredients:
          - name: chicken breast
            quantity: 100
            unit: g
            calories: 165
            protein: 31
            carbs: 0
            fat: 3.6
    """

    def __init__(self, path: str):
        """Initialize recipe loader.

        Args:
            path: Path to a .json, .yaml or .yml file
        """
        self.path = Path(path)

    def load(self) -> RecipeInput:
        """Load the recipe file.

        Returns:
            RecipeInput with one Ingredient per listed row

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not a mapping or `ingredients` is not a list
        """
        with open(self.path, "r") as f:
            if self.path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Recipe file {self.path} must contain a mapping")

        rows = data.get("ingredients") or []
        if not isinstance(rows, list):
            raise ValueError(f"'ingredients' in {self.path} must be a list")

        return RecipeInput(
            ingredients=[self._parse_ingredient(row) for row in rows],
            original_portions=data.get("original_portions"),
            desired_portions=data.get("desired_portions"),
        )

    def _parse_ingredient(self, row: dict) -> Ingredient:
        """Parse one ingredient row, converting every value to text.

        Args:
            row: Dictionary containing ingredient fields

        Returns:
            Ingredient object (missing fields are empty)
        """
        if not isinstance(row, dict):
            raise ValueError(f"Ingredient rows in {self.path} must be mappings")

        values = {}
        for name in INGREDIENT_FIELDS:
            value = row.get(name)
            if value is None:
                values[name] = ""
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                values[name] = number_to_text(value)
            else:
                values[name] = str(value)
        return Ingredient(**values)
