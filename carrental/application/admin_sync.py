"""Admin list views kept in sync with change notifications from the store."""

import asyncio
import logging
import math
from typing import Any

from carrental.application.interfaces.persistence import PersistenceService, Subscription
from carrental.application.queries.admin_lists import ListSpec, Loader, Row
from carrental.domain.constants import ALL_EVENTS
from carrental.domain.errors import TransientStoreError

logger = logging.getLogger(__name__)

ALL_TAB = "all"


class AdminListView:
    """
    Client-side cache of one admin list.

    Every change notification triggers a full reload; rows are never patched
    in place. The active tab and search text are ANDed (tab first) and
    pagination is a plain slice of the filtered, sorted rows.
    """

    def __init__(
        self,
        persistence: PersistenceService,
        loader: Loader,
        spec: ListSpec,
        page_size: int = 10,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self._persistence = persistence
        self._loader = loader
        self._spec = spec
        self._page_size = page_size

        self._rows: list[Row] = []
        self._tab = ALL_TAB
        self._search = ""
        self._visible_pages = 1

        self._lock = asyncio.Lock()
        self._subscriptions: list[Subscription] = []
        self._consumers: list[asyncio.Task] = []
        self.last_error: str | None = None
        self.reload_count = 0

    @property
    def spec(self) -> ListSpec:
        return self._spec

    @property
    def tab(self) -> str:
        return self._tab

    @property
    def search(self) -> str:
        return self._search

    @property
    def rows(self) -> list[Row]:
        """Unfiltered rows from the last reload."""
        return list(self._rows)

    @property
    def is_running(self) -> bool:
        return bool(self._consumers)

    # === Ciclo de vida ===

    async def start(self) -> None:
        """Loads the list and subscribes to every watched collection."""
        if self._consumers:
            return
        await self.refresh()
        for collection in self._spec.collections:
            subscription = await self._persistence.subscribe(collection, ALL_EVENTS)
            self._subscriptions.append(subscription)
            self._consumers.append(asyncio.create_task(self._consume(subscription)))
        logger.debug(
            "Admin view started",
            extra={"view": self._spec.name, "collections": list(self._spec.collections)},
        )

    async def stop(self) -> None:
        """Unsubscribes and stops the consumer tasks."""
        for subscription in self._subscriptions:
            await subscription.close()
        for task in self._consumers:
            task.cancel()
        await asyncio.gather(*self._consumers, return_exceptions=True)
        self._subscriptions.clear()
        self._consumers.clear()

    async def refresh(self) -> None:
        """
        Full reload from the store.

        Raises:
            TransientStoreError: if the loader fails. The previous rows are kept.
        """
        async with self._lock:
            try:
                rows = await self._loader(self._persistence)
            except TransientStoreError as exc:
                self.last_error = exc.message
                raise
            self._rows = sorted(rows, key=self._spec.sort_key, reverse=self._spec.descending)
            self.last_error = None
            self.reload_count += 1

    async def _consume(self, subscription: Subscription) -> None:
        async for event in subscription:
            try:
                await self.refresh()
            except TransientStoreError as exc:
                logger.warning(
                    "Admin view reload failed",
                    extra={
                        "view": self._spec.name,
                        "collection": event.collection,
                        "event_type": event.event_type,
                        "error": exc.message,
                    },
                )

    # === Filtros ===

    def set_tab(self, tab: str) -> None:
        if tab not in self._spec.tabs:
            raise ValueError(f"Unknown tab '{tab}' for {self._spec.name}")
        self._tab = tab
        self._visible_pages = 1

    def set_search(self, text: str | None) -> None:
        self._search = text or ""
        self._visible_pages = 1

    # === Lectura ===

    def items(self) -> list[Row]:
        """Rows passing the tab filter and then the search filter, in sort order."""
        return [
            row
            for row in self._rows
            if self._spec.matches_tab(row, self._tab)
            and self._spec.matches_search(row, self._search)
        ]

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(len(self.items()) / self._page_size))

    def page(self, number: int) -> list[Row]:
        """1-based page of the filtered rows; out of range returns an empty list."""
        if number < 1:
            return []
        start = (number - 1) * self._page_size
        return self.items()[start : start + self._page_size]

    def load_more(self) -> list[Row]:
        """Grows the visible window by one page."""
        if self._visible_pages < self.total_pages:
            self._visible_pages += 1
        return self.visible()

    def visible(self) -> list[Row]:
        return self.items()[: self._visible_pages * self._page_size]

    @property
    def has_more(self) -> bool:
        return len(self.items()) > self._visible_pages * self._page_size

    def snapshot(self) -> dict[str, Any]:
        return {
            "tab": self._tab,
            "search": self._search,
            "total": len(self.items()),
            "total_pages": self.total_pages,
        }
