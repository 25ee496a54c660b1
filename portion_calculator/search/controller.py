"""Debounced ingredient search with last-write-wins ordering.

Typing schedules a lookup after a quiet period; typing again before it
fires cancels the pending dispatch. Lookups already in flight are never
cancelled, so each dispatched lookup is stamped with a sequence number and
only the completion carrying the latest number is applied. This keeps the
result set correct even if the provider completes requests out of order.
"""

import asyncio
import logging
from typing import List, Optional, Set

from portion_calculator.data_layer.models import Ingredient, NutritionCandidate
from portion_calculator.data_layer.settings import CalculatorSettings
from portion_calculator.providers.ingredient_provider import (
    IngredientSearchError,
    IngredientSearchProvider,
)
from portion_calculator.state.recipe_form import RecipeForm

logger = logging.getLogger(__name__)


class IngredientSearchController:
    """Search state for the ingredient search dialog.

    Usage::

        controller = IngredientSearchController(MockIngredientProvider())
        controller.open(0)
        controller.set_query("chicken")      # inside a running event loop
        await controller.wait_idle()
        controller.select(controller.results[0], form)
    """

    def __init__(
        self,
        provider: IngredientSearchProvider,
        debounce_seconds: float = 0.5,
        min_query_length: int = 3,
    ) -> None:
        self.provider = provider
        self.debounce_seconds = debounce_seconds
        self.min_query_length = min_query_length

        self.query = ""
        self.results: List[NutritionCandidate] = []
        self.is_searching = False
        self.last_error: Optional[IngredientSearchError] = None
        self.target_index: Optional[int] = None

        # Number of the latest dispatched lookup; bumped again to invalidate it
        self._sequence = 0
        self._debounce_task: Optional[asyncio.Task] = None
        self._lookups: Set[asyncio.Task] = set()

    @classmethod
    def from_settings(
        cls, provider: IngredientSearchProvider, settings: CalculatorSettings
    ) -> "IngredientSearchController":
        return cls(
            provider,
            debounce_seconds=settings.debounce_seconds,
            min_query_length=settings.min_query_length,
        )

    @property
    def is_open(self) -> bool:
        return self.target_index is not None

    def is_searchable(self, query: str) -> bool:
        """Whether *query* is long enough (after trimming) to be looked up."""
        return len(query.strip()) >= self.min_query_length

    def open(self, index: int) -> None:
        """Start a search whose selection will replace row *index*."""
        self.target_index = index

    def close(self) -> None:
        """Close the search, discarding the query and any pending results."""
        self.target_index = None
        self.set_query("")

    def set_query(self, query: str) -> None:
        """Record new input and (re)schedule the debounced lookup.

        Short queries clear the results immediately and invalidate any lookup
        still in flight. Scheduling a lookup requires a running event loop.
        """
        self.query = query
        self._cancel_pending()

        if not self.is_searchable(query):
            self._sequence += 1
            self.results = []
            self.is_searching = False
            return

        loop = asyncio.get_running_loop()
        self._debounce_task = loop.create_task(self._dispatch_after_quiet(query.strip()))

    def select(self, candidate: NutritionCandidate, form: RecipeForm) -> Ingredient:
        """Apply *candidate* to the target row and close the search.

        Raises:
            RuntimeError: If no target row was chosen with :meth:`open`
        """
        if self.target_index is None:
            raise RuntimeError("No ingredient row selected for search")

        ingredient = form.apply_candidate(self.target_index, candidate)
        self.close()
        return ingredient

    async def wait_idle(self) -> None:
        """Wait until no lookup is pending or in flight.

        Re-raises the first unexpected provider exception, if any.
        """
        while True:
            for task in list(self._lookups):
                if task.done():
                    self._lookups.discard(task)
                    if not task.cancelled() and task.exception() is not None:
                        raise task.exception()

            pending = list(self._lookups)
            if self._debounce_task is not None and not self._debounce_task.done():
                pending.append(self._debounce_task)
            if not pending:
                return

            await asyncio.wait(pending)

    def _cancel_pending(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    async def _dispatch_after_quiet(self, query: str) -> None:
        await asyncio.sleep(self.debounce_seconds)

        self._sequence += 1
        sequence = self._sequence
        self.is_searching = True
        logger.info("Dispatching ingredient search #%d for %r", sequence, query)

        task = asyncio.get_running_loop().create_task(self._lookup(sequence, query))
        self._lookups.add(task)
        task.add_done_callback(self._forget_lookup)

    def _forget_lookup(self, task: asyncio.Task) -> None:
        # Failed lookups are kept so wait_idle() can re-raise them
        if task.cancelled() or task.exception() is None:
            self._lookups.discard(task)

    async def _lookup(self, sequence: int, query: str) -> None:
        error: Optional[IngredientSearchError] = None
        try:
            results = await self.provider.search(query)
        except IngredientSearchError as exc:
            logger.warning("%s", exc)
            error = exc
            results = []
        except Exception:
            if sequence == self._sequence:
                self.is_searching = False
            raise

        if sequence != self._sequence:
            logger.debug(
                "Discarding stale search #%d for %r (latest is #%d)",
                sequence,
                query,
                self._sequence,
            )
            return

        self.results = list(results)
        self.last_error = error
        self.is_searching = False
