"""
Screen state for the category listing and the plant detail page.

``ListPipeline`` and ``DetailPipeline`` each own one ``ScreenView``.
A load enters ``loading``, awaits the paced remote fetch and then
settles in ``ready`` or ``failed``; fetch errors never escape a
pipeline.  Every load is tagged with an increasing request token and a
result whose token is no longer the latest is dropped, so a slow stale
response can never overwrite the state of a newer request.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Union

from .normalize import normalize_plant, summarize_plant
from .pacing import DEFAULT_MINIMUM_MS, with_minimum_duration
from .perenual_service import (
    DETAIL_ERROR_MESSAGE,
    LIST_ERROR_MESSAGE,
    FetchError,
    PerenualClient,
)
from .schemas import (
    FetchStatus,
    PageState,
    PlantDetailScreen,
    PlantListScreen,
    PlantSummary,
)


logger = logging.getLogger(__name__)

Pacer = Callable[..., Awaitable[Any]]


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class _Pipeline:
    def __init__(
        self,
        source: PerenualClient,
        minimum_ms: int = DEFAULT_MINIMUM_MS,
        pacer: Pacer = with_minimum_duration,
    ):
        self._source = source
        self._minimum_ms = minimum_ms
        self._pacer = pacer
        self._token = 0

    def _issue_token(self) -> int:
        self._token += 1
        return self._token

    def _is_stale(self, token: int) -> bool:
        if token != self._token:
            logger.info("Discarding stale response for request %s (latest %s)", token, self._token)
            return True
        return False


class ListPipeline(_Pipeline):
    """One page of a category listing plus pagination controls."""

    def __init__(self, source: PerenualClient, **kwargs):
        super().__init__(source, **kwargs)
        self.category_filter = ""
        self.current_page = 1
        self.view: PlantListScreen = PlantListScreen.loading()

    @property
    def items(self) -> List[PlantSummary]:
        return self.view.data or []

    @property
    def page_state(self) -> Optional[PageState]:
        return self.view.page_state

    async def load_page(self, category_filter: str, page: int) -> PlantListScreen:
        token = self._issue_token()
        self.category_filter = category_filter
        self.current_page = page
        self.view = PlantListScreen.loading()
        logger.info("Loading page %s for filter %r", page, category_filter)
        try:
            raw = await self._pacer(
                self._source.fetch_page(category_filter, page), self._minimum_ms
            )
        except FetchError as exc:
            if not self._is_stale(token):
                self.view = PlantListScreen.failed(exc.message)
            return self.view
        if self._is_stale(token):
            return self.view
        try:
            self.view = self._ready_view(raw, page)
        except (TypeError, ValueError) as exc:
            logger.error("Unexpected species-list payload for page %s: %s", page, exc)
            self.view = PlantListScreen.failed(LIST_ERROR_MESSAGE)
        return self.view

    def _ready_view(self, raw: Mapping[str, Any], page: int) -> PlantListScreen:
        entries = raw.get("data")
        if not isinstance(entries, list):
            entries = []
        items = [summarize_plant(entry) for entry in entries if isinstance(entry, dict)]
        last_page = _as_int(raw.get("last_page")) or 1
        delivered, total = _as_int(raw.get("to")), _as_int(raw.get("total"))
        has_more = delivered is not None and total is not None and delivered < total
        page_state = PageState(
            current_page=page,
            # A page past the reported end still satisfies current <= total
            total_pages=max(last_page, page, 1),
            has_more=has_more,
        )
        return PlantListScreen.ready(items, page_state=page_state)

    async def next_page(self) -> bool:
        """Load the following page; returns ``False`` when there is none."""
        state = self.page_state
        if self.view.state != FetchStatus.READY or state is None:
            return False
        if not (state.has_more and state.current_page < state.total_pages):
            return False
        await self.load_page(self.category_filter, state.current_page + 1)
        return True

    async def prev_page(self) -> bool:
        """Load the preceding page; returns ``False`` on the first page."""
        if self.current_page <= 1:
            return False
        await self.load_page(self.category_filter, self.current_page - 1)
        return True


class DetailPipeline(_Pipeline):
    """The normalized detail of a single plant."""

    def __init__(self, source: PerenualClient, **kwargs):
        super().__init__(source, **kwargs)
        self.plant_id: Union[int, str, None] = None
        self.view: PlantDetailScreen = PlantDetailScreen.loading()

    async def load_detail(self, plant_id: Union[int, str]) -> PlantDetailScreen:
        token = self._issue_token()
        self.plant_id = plant_id
        self.view = PlantDetailScreen.loading()
        logger.info("Loading detail of plant %s", plant_id)
        try:
            raw = await self._pacer(self._source.fetch_detail(plant_id), self._minimum_ms)
        except FetchError as exc:
            if not self._is_stale(token):
                self.view = PlantDetailScreen.failed(exc.message)
            return self.view
        if self._is_stale(token):
            return self.view
        try:
            self.view = PlantDetailScreen.ready(normalize_plant(raw))
        except (TypeError, ValueError) as exc:
            logger.error("Unexpected species record for plant %s: %s", plant_id, exc)
            self.view = PlantDetailScreen.failed(DETAIL_ERROR_MESSAGE)
            return self.view
        if self.view.not_found:
            logger.info("Plant %s returned an empty record", plant_id)
        return self.view
