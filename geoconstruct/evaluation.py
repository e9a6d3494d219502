"""Evaluation context shared by every entity of one construction."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class EvaluationContext:
    """Generation counter and clock driving lazy point resolution.

    A point caches its resolved vector together with the generation it was
    computed in. Advancing the generation once per tick therefore invalidates
    every cache belonging to this context at once.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.monotonic
        self._start = self._clock()
        self._generation = 0
        self._pinned_ms: Optional[float] = None

    @property
    def generation(self) -> int:
        return self._generation

    def millis(self) -> float:
        """Milliseconds for the current tick.

        The value pinned by the last :meth:`advance` wins; otherwise the time
        elapsed since the context was created.
        """

        if self._pinned_ms is not None:
            return self._pinned_ms
        return (self._clock() - self._start) * 1000.0

    def advance(self, time_ms: Optional[float] = None) -> int:
        self._generation += 1
        self._pinned_ms = None if time_ms is None else float(time_ms)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Advanced to generation %d (time_ms=%s)", self._generation, time_ms)
        return self._generation
