"""Fetch coordinator: per-key in-flight guard plus the shared last error.

Each key moves ``Idle -> Loading -> Idle`` around one provider call.  The
loading flag is checked and set in the same synchronous step, before the
first ``await``, so any number of concurrent :meth:`FetchCoordinator.run`
calls for one key on one event loop produce a single provider call.

The error field is shared by every key: the last failure wins and any new
fetch clears it.  Failures are recorded, logged and swallowed; nothing is
retried here.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Hashable
from typing import TypeVar

import structlog

from openshelf.utils.logging import get_logger

T = TypeVar("T")


class FetchCoordinator:
    def __init__(self) -> None:
        self._loading: dict[Hashable, bool] = {}
        self._error: str | None = None
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def error(self) -> str | None:
        return self._error

    def is_loading(self, key: Hashable) -> bool:
        return self._loading.get(key, False)

    def loading(self) -> dict[Hashable, bool]:
        return dict(self._loading)

    async def run(
        self,
        key: Hashable,
        call: Callable[[], Awaitable[T]],
        on_success: Callable[[T], None],
        failure_message: str,
    ) -> bool:
        """Run *call* for *key* unless a fetch for *key* is already in flight.

        Parameters
        ----------
        key:
            Partition key the guard applies to.
        call:
            Zero-argument coroutine factory; awaited exactly once.
        on_success:
            Synchronous callback applying the result to the caches.  It runs
            before the loading flag is cleared, in the same step.
        failure_message:
            Generic message stored in :attr:`error` when *call* raises.

        Returns
        -------
        bool
            ``True`` when the result was applied, ``False`` when the call was
            skipped because of the guard or failed.
        """
        if self._loading.get(key):
            self._logger.debug("fetch_skipped_in_flight", key=str(key))
            return False

        self._loading[key] = True
        self._error = None
        self._logger.debug("fetch_started", key=str(key))

        try:
            result = await call()
        except Exception as exc:
            self._loading[key] = False
            self._error = failure_message
            self._logger.warning(
                "fetch_failed",
                key=str(key),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return False

        try:
            on_success(result)
        finally:
            self._loading[key] = False
        self._logger.debug("fetch_completed", key=str(key))
        return True
