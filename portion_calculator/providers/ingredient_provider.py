"""Abstract base class for ingredient search providers.

The search controller and the HTTP server depend ONLY on this interface.
Concrete implementations may return canned data or query a real food
database without changing downstream logic.
"""

from abc import ABC, abstractmethod
from typing import List

from portion_calculator.data_layer.models import NutritionCandidate


class IngredientSearchError(Exception):
    """Raised by a provider when a lookup cannot be completed.

    Callers treat it as "no results"; any other exception is a bug.
    """

    def __init__(self, query: str, message: str):
        self.query = query
        self.message = message
        super().__init__(f"Ingredient search for '{query}' failed: {message}")


class IngredientSearchProvider(ABC):
    """Abstraction for ingredient nutrition lookup.

    Implementations return candidates with absolute values for one standard
    serving::

        NutritionCandidate(
            name="Chicken Breast",
            calories=165, protein=31, carbs=0, fat=3.6,
            serving_size=100, serving_unit="g",
        )
    """

    @abstractmethod
    async def search(self, query: str) -> List[NutritionCandidate]:
        """Return candidates matching *query*.

        Args:
            query: Free-text search string (already trimmed).

        Returns:
            Candidate list, possibly empty.

        Raises:
            IngredientSearchError: If the data source fails.
        """
        ...
