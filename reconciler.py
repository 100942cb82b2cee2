"""Keeps search results, the selection and the displayed list consistent.

All methods are meant to be called from a single event loop. Searches are
debounced with a generation counter: every call to :meth:`SelectionReconciler.search`
or :meth:`SelectionReconciler.reset` bumps it, and a pending search only
applies its results if its captured generation is still current.
"""
import asyncio
import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from config import Config
from errors import map_service_error
from models import Artist, ModeAffordances, SearchOutcome, ViewMode
from services import SelectionStore, ServiceError
from view_mode import ViewModeController

logger = logging.getLogger(__name__)


class SelectionReconciler:
    def __init__(self, transport, store: SelectionStore, config: Config,
                 view_mode: Optional[ViewModeController] = None):
        self.transport = transport
        self.store = store
        self.config = config
        self.view_mode = view_mode or ViewModeController()
        self.results: List[Artist] = []
        self._generation = 0

    # --- Projections ---
    @property
    def mode(self) -> ViewMode:
        return self.view_mode.mode

    @property
    def selected(self) -> List[Artist]:
        return self.store.list()

    @property
    def displayed(self) -> List[Artist]:
        """The list the UI should render for the current view mode."""
        if self.mode is ViewMode.RESULTS:
            return list(self.results)
        return self.selected

    @property
    def affordances(self) -> ModeAffordances:
        return self.view_mode.affordances(len(self.results), len(self.store))

    @property
    def is_reset_enabled(self) -> bool:
        return len(self.store) > 0

    def is_valid_query(self, query: str) -> bool:
        return len(query.strip()) >= self.config.MIN_QUERY_LENGTH

    # --- Operations ---
    async def search(self, query: str) -> SearchOutcome:
        """Debounces, fetches and reconciles the results for a query.

        Returns exactly one outcome per call. A call overtaken by a newer
        search (or a reset) completes as superseded and changes nothing.
        A failed fetch leaves the previous results in place.
        """
        self._generation += 1
        generation = self._generation

        if self.mode is ViewMode.SELECTED:
            self.view_mode.reset()

        if not self.is_valid_query(query):
            self.results = []
            return SearchOutcome(query)

        await asyncio.sleep(self.config.DEBOUNCE_SECONDS)
        if generation != self._generation:
            logger.debug("Dropping superseded search for %r before fetching", query)
            return SearchOutcome(query, superseded=True)

        try:
            raw_artists = await asyncio.to_thread(self.transport.fetch, query)
        except ServiceError as e:
            if generation != self._generation:
                return SearchOutcome(query, superseded=True)
            logger.warning("Search for %r failed: %s", query, e)
            return SearchOutcome(query, error=map_service_error(e))

        if generation != self._generation:
            logger.debug("Discarding stale response for %r", query)
            return SearchOutcome(query, superseded=True)

        self.results = self._reconcile(Artist(id=r.id, title=r.title) for r in raw_artists)
        logger.info("Search for %r returned %d artists", query, len(self.results))
        return SearchOutcome(query)

    def update_select_status(self, artist_id: int, is_selected: bool) -> Optional[Artist]:
        """Selects or deselects an artist from the list currently on screen.

        Returns the updated artist, or None when the id is not in that list.
        """
        mode = self.mode
        active = self.results if mode is ViewMode.RESULTS else self.store.list()
        index = next((i for i, a in enumerate(active) if a.id == artist_id), None)
        if index is None:
            logger.warning("No artist with id %s in the %s list; ignoring", artist_id, mode.value)
            return None

        updated = replace(active[index], selected=is_selected)
        if is_selected:
            self.store.save(updated)
        else:
            self.store.remove(artist_id)
        active[index] = updated

        # Same artist may be visible in the other list; the store is the truth.
        self.results = self._reconcile(self.results)

        if mode is ViewMode.SELECTED and not self.is_reset_enabled:
            self.view_mode.reset()
        return updated

    def switch_mode(self) -> ViewMode:
        return self.view_mode.switch()

    def reset(self) -> None:
        """Drops the selection, the results and any pending search."""
        self._generation += 1
        self.store.clear()
        self.results = []
        self.view_mode.reset()

    def _reconcile(self, artists: Iterable[Artist]) -> List[Artist]:
        selected_ids = self.store.list_ids()
        return [replace(a, selected=a.id in selected_ids) for a in artists]
