"""Snapshot ownership shared by every page view"""

import logging
from typing import Generic, Optional, TypeVar

from fraud_insight.domain.exceptions import DomainException
from fraud_insight.infrastructure.observability.logging import log_fetch_failure
from fraud_insight.infrastructure.observability.metrics import fetch_failures_counter, stale_responses_counter

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SnapshotView(Generic[T]):
    """
    Holds the latest snapshot for one page plus its loading/error state.

    Each fetch takes a monotonically increasing sequence number. A completion
    (success or failure) whose number is not newer than the last applied one
    is discarded, so a slow early fetch never overwrites a fresher result.
    A failed fetch keeps the previous snapshot but marks the view with an
    error. Snapshots are replaced wholesale, never merged.
    """

    name = "view"

    def __init__(self) -> None:
        self._snapshot: Optional[T] = None
        self._issued = 0
        self._floor = 0
        self.loading = False
        self.error: Optional[str] = None

    @property
    def snapshot(self) -> Optional[T]:
        return self._snapshot

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    async def _fetch(self) -> T:
        raise NotImplementedError

    async def refresh(self) -> bool:
        """
        Fetch a new snapshot.

        Returns True when the result was applied, False when it was discarded
        as stale.

        Raises:
            DomainException: When the fetch fails and is still the latest one;
                the message is also kept in `error` for display and retry.
        """
        self._issued += 1
        sequence = self._issued
        self.loading = True

        try:
            snapshot = await self._fetch()
        except DomainException as e:
            if sequence <= self._floor:
                stale_responses_counter.labels(view=self.name).inc()
                return False
            self._floor = sequence
            self._finish(sequence)
            self.error = str(e)
            fetch_failures_counter.labels(view=self.name).inc()
            log_fetch_failure(self.name, e, sequence)
            raise

        if sequence <= self._floor:
            stale_responses_counter.labels(view=self.name).inc()
            logger.info("Discarded stale snapshot", extra={"view": self.name, "sequence": sequence})
            return False

        self._floor = sequence
        self._snapshot = snapshot
        self.error = None
        self._finish(sequence)
        return True

    async def ensure_loaded(self) -> None:
        """Fetch once if nothing has been loaded yet"""
        if self._snapshot is None:
            await self.refresh()

    def reset(self) -> None:
        """Drop state; any fetch still in flight is discarded on completion"""
        self._snapshot = None
        self.error = None
        self.loading = False
        self._floor = self._issued

    def _finish(self, sequence: int) -> None:
        if sequence == self._issued:
            self.loading = False
