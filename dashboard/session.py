"""
dashboard/session.py

Per-user dashboard state.

A session owns exactly one cached dataset, generated when the session
starts. Views subscribe with a recompute callback; ``refresh`` re-derives
every view from the cached dataset without regenerating it. Only
``restart`` builds a new dataset.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from app.domain.sales import SalesDataset
from app.logging_utils import log_event
from app.services.data_generator import generate

logger = logging.getLogger(__name__)

ViewCallback = Callable[[SalesDataset], Any]


class DashboardSession:
    """
    Cached dataset plus its registered view callbacks.

    Parameters
    ----------
    seed:
        Seed passed to the generator at session start.
    generator:
        Dataset factory, ``generate`` by default.
    """

    def __init__(
        self,
        seed: int = 123,
        generator: Callable[[int], SalesDataset] = generate,
    ) -> None:
        self._generator = generator
        self._seed = seed
        self._subscribers: dict[str, ViewCallback] = {}
        self._views: dict[str, Any] = {}
        self._generation_count = 0
        self._dataset = self._build(seed)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def dataset(self) -> SalesDataset:
        return self._dataset

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def generation_count(self) -> int:
        """How many datasets this session has generated (1 after start)."""
        return self._generation_count

    @property
    def views(self) -> dict[str, Any]:
        """Most recently computed views, by name."""
        return dict(self._views)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, name: str, callback: ViewCallback) -> None:
        """Register (or replace) the recompute callback for view *name*."""
        self._subscribers[name] = callback

    def unsubscribe(self, name: str) -> None:
        self._subscribers.pop(name, None)
        self._views.pop(name, None)

    # ------------------------------------------------------------------
    # Recompute
    # ------------------------------------------------------------------

    def refresh(self) -> dict[str, Any]:
        """
        Recompute every subscribed view from the cached dataset.

        Callbacks run synchronously in subscription order.
        """
        self._views = {
            name: callback(self._dataset)
            for name, callback in self._subscribers.items()
        }
        return dict(self._views)

    def invalidate(self) -> dict[str, Any]:
        """Notify subscribers that derived views are stale."""
        log_event(logger, logging.DEBUG, "session_invalidated", views=list(self._subscribers))
        return self.refresh()

    def restart(self, seed: int | None = None) -> dict[str, Any]:
        """
        Regenerate the dataset, optionally with a new *seed*, and recompute
        every view.
        """
        if seed is not None:
            self._seed = seed
        self._dataset = self._build(self._seed)
        return self.refresh()

    def _build(self, seed: int) -> SalesDataset:
        dataset = self._generator(seed)
        self._generation_count += 1
        log_event(
            logger,
            logging.INFO,
            "session_dataset_generated",
            seed=seed,
            records=len(dataset),
            generation=self._generation_count,
        )
        return dataset
