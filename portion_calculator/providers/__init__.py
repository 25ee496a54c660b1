"""Provider abstraction layer for ingredient search.

This package decouples the search controller and HTTP server from
concrete data sources (canned mock data vs. a real food database).
"""

from portion_calculator.providers.ingredient_provider import (
    IngredientSearchError,
    IngredientSearchProvider,
)
from portion_calculator.providers.mock_provider import MockIngredientProvider

__all__ = [
    "IngredientSearchError",
    "IngredientSearchProvider",
    "MockIngredientProvider",
]
