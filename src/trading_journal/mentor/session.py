"""Mentor session — request/clear state around the mentor client.

Mirrors what an interactive front end needs:

* fewer than ``min_trades`` logged trades → no request, advisory text;
* a new ``request()`` cancels any in-flight one;
* ``clear()`` drops the current analysis and invalidates in-flight work;
* only the latest request (by generation number) may publish a result,
  so a stale response never overwrites a cleared or newer analysis.

Usage::

    session = MentorSession(MentorClient(settings.mentor))
    result = await session.request(ledger.trades, ledger.current_balance())
    print(result.text)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from trading_journal.core.enums import MentorOutcome
from trading_journal.core.errors import MentorConfigurationError, MentorServiceError
from trading_journal.journal.record import Trade

from .client import IMentorClient

logger = logging.getLogger(__name__)

DEFAULT_MIN_TRADES = 3

ADVISORY_TEXT = "Please log at least {n} trades to get a meaningful analysis."
API_KEY_MISSING_TEXT = "API Key is missing. Please configure your environment."
SERVICE_ERROR_TEXT = (
    "An error occurred while analyzing your trades. Please try again later."
)


@dataclass(frozen=True)
class MentorResult:
    outcome: MentorOutcome
    text: str

    @property
    def ok(self) -> bool:
        return self.outcome == MentorOutcome.ANALYSIS


class MentorSession:
    """Holds the latest mentor analysis and guards against stale replies."""

    def __init__(
        self,
        client: IMentorClient,
        *,
        min_trades: int = DEFAULT_MIN_TRADES,
    ) -> None:
        self._client = client
        self._min_trades = min_trades
        self._generation = 0
        self._task: asyncio.Task[MentorResult] | None = None
        self._analysis: MentorResult | None = None

    @property
    def analysis(self) -> MentorResult | None:
        return self._analysis

    @property
    def loading(self) -> bool:
        return self._task is not None and not self._task.done()

    async def request(
        self,
        trades: Sequence[Trade],
        balance: float,
    ) -> MentorResult | None:
        """Request a fresh analysis.

        Returns the published result, or ``None`` if this request was
        superseded by a newer ``request()`` or a ``clear()`` before it
        finished.
        """
        self._cancel_inflight()
        self._generation += 1
        generation = self._generation
        sample = tuple(trades)

        if len(sample) < self._min_trades:
            result = MentorResult(
                MentorOutcome.ADVISORY, ADVISORY_TEXT.format(n=self._min_trades),
            )
            self._analysis = result
            return result

        task = asyncio.ensure_future(self._run(sample, balance))
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("Mentor request %d superseded", generation)
                return None
            raise
        finally:
            if self._task is task:
                self._task = None

        if generation != self._generation:
            logger.debug("Discarding stale mentor result %d", generation)
            return None
        self._analysis = result
        return result

    def clear(self) -> None:
        """Forget the current analysis and invalidate in-flight requests."""
        self._cancel_inflight()
        self._generation += 1
        self._analysis = None

    # ------------------------------------------------------------------ #
    # Internals                                                            #
    # ------------------------------------------------------------------ #

    def _cancel_inflight(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self, trades: tuple[Trade, ...], balance: float) -> MentorResult:
        try:
            text = await self._client.analyze(trades, balance)
        except MentorConfigurationError as exc:
            logger.warning("Mentor not configured: %s", exc)
            return MentorResult(MentorOutcome.CONFIGURATION_ERROR, API_KEY_MISSING_TEXT)
        except MentorServiceError as exc:
            logger.warning("Mentor analysis failed: %s", exc, exc_info=True)
            return MentorResult(MentorOutcome.SERVICE_ERROR, SERVICE_ERROR_TEXT)
        return MentorResult(MentorOutcome.ANALYSIS, text)
