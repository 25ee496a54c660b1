"""Mock ingredient provider returning canned nutrition data.

Stands in for a real food database: every query yields the same three
foods, named after the query, after a simulated network delay.
"""

import asyncio
import logging
from typing import List

from portion_calculator.data_layer.models import NutritionCandidate
from portion_calculator.providers.ingredient_provider import IngredientSearchProvider

logger = logging.getLogger(__name__)

# (label, calories, protein, carbs, fat) per 100 g
MOCK_FOODS = [
    ("Chicken Breast", 165.0, 31.0, 0.0, 3.6),
    ("Brown Rice", 112.0, 2.6, 23.5, 0.9),
    ("Avocado", 160.0, 2.0, 8.5, 14.7),
]


class MockIngredientProvider(IngredientSearchProvider):
    """Provider with fixed results and a configurable delay."""

    def __init__(self, delay_seconds: float = 1.0) -> None:
        self.delay_seconds = delay_seconds
        self.calls: List[str] = []

    async def search(self, query: str) -> List[NutritionCandidate]:
        """Return the three mock foods after ``delay_seconds``."""
        self.calls.append(query)
        logger.debug("Mock search for %r (delay %.3fs)", query, self.delay_seconds)
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        return [
            NutritionCandidate(
                name=f"{query} - {label}",
                calories=calories,
                protein=protein,
                carbs=carbs,
                fat=fat,
                serving_size=100.0,
                serving_unit="g",
            )
            for label, calories, protein, carbs, fat in MOCK_FOODS
        ]
