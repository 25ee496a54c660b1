"""FastAPI server for the portion calculator."""

import logging
from typing import Any, Dict, List, Optional, Union

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from portion_calculator.data_layer.models import Ingredient
from portion_calculator.data_layer.settings import CalculatorSettings
from portion_calculator.nutrition.aggregator import PortionCalculator
from portion_calculator.nutrition.portions import RecipeScale
from portion_calculator.output.formatters import format_candidate_json, format_result_json
from portion_calculator.providers.ingredient_provider import (
    IngredientSearchError,
    IngredientSearchProvider,
)
from portion_calculator.providers.mock_provider import MockIngredientProvider

logger = logging.getLogger(__name__)


class IngredientRow(BaseModel):
    name: str = ""
    quantity: str = ""
    unit: str = ""
    calories: str = ""
    protein: str = ""
    carbs: str = ""
    fat: str = ""


class CalculateRequest(BaseModel):
    ingredients: List[IngredientRow] = Field(default_factory=list)
    # Raw control values; clamped, never rejected
    original_portions: Optional[Union[int, float, str]] = None
    desired_portions: Optional[Union[int, float, str]] = None


def create_app(
    provider: Optional[IngredientSearchProvider] = None,
    settings: Optional[CalculatorSettings] = None,
) -> FastAPI:
    """Build the application around an ingredient provider.

    Args:
        provider: Search data source (defaults to the mock provider)
        settings: Calculator settings (defaults to built-in values)

    Returns:
        Configured FastAPI app
    """
    settings = settings or CalculatorSettings()
    if provider is None:
        provider = MockIngredientProvider(delay_seconds=settings.mock_delay_seconds)

    app = FastAPI(title="Portion Calculator API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Local development
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/api/calculate")
    def calculate(request: CalculateRequest) -> Dict[str, Any]:
        original = request.original_portions
        desired = request.desired_portions
        scale = RecipeScale.from_inputs(
            original if original is not None else settings.default_original_portions,
            desired if desired is not None else settings.default_desired_portions,
            settings.max_desired_portions,
        )
        ingredients = [Ingredient(**row.model_dump()) for row in request.ingredients]
        try:
            result = PortionCalculator.calculate(ingredients, scale)
        except Exception as exc:
            logger.exception("Calculation failed")
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return format_result_json(result)

    @app.get("/api/ingredients/search")
    async def search_ingredients(q: str = Query("")) -> List[Dict[str, Any]]:
        query = q.strip()
        if len(query) < settings.min_query_length:
            return []
        try:
            candidates = await provider.search(query)
        except IngredientSearchError as exc:
            logger.warning("%s", exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return [format_candidate_json(candidate) for candidate in candidates]

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
