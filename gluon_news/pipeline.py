"""Fetch cycle: fetch -> parse -> aggregate, plus refresh handling."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import httpx

from .core import now_utc
from .models import NormalizedEntry
from .S1_fetch import create_client, fetch_all
from .S2_parse import BaseParser, normalize_all
from .S3_aggregate import aggregate
from .settings import DEFAULT_USER_AGENT, Settings

logger = logging.getLogger(__name__)

STATE_LOADING = "loading"
STATE_READY = "ready"
STATE_UNAVAILABLE = "unavailable"


@dataclass
class CycleResult:
    """Outcome of one fetch cycle."""
    cycle: int
    entries: Optional[list[NormalizedEntry]]
    requested: int = 0
    fetched: int = 0
    parsed: int = 0
    started_at: datetime = field(default_factory=now_utc)
    finished_at: datetime = field(default_factory=now_utc)

    @property
    def available(self) -> bool:
        return self.entries is not None

    def stats(self) -> dict:
        return {
            "requested": self.requested,
            "fetched": self.fetched,
            "parsed": self.parsed,
            "entries": len(self.entries) if self.entries else 0,
        }


async def run_cycle(
    urls: list[str],
    *,
    client: httpx.AsyncClient,
    cycle: int = 1,
    user_agent: str = DEFAULT_USER_AGENT,
    parser: Optional[BaseParser] = None,
) -> CycleResult:
    """
    Run one complete fetch cycle.

    Nothing is raised for failed sources; a cycle with no usable entries
    comes back with entries=None.
    """
    started_at = now_utc()
    logger.info(f"Cycle {cycle}: fetching {len(urls)} feeds")

    bodies = await fetch_all(urls, client=client, user_agent=user_agent)
    entries, stats = normalize_all(bodies, parser)
    merged = aggregate(entries)

    result = CycleResult(
        cycle=cycle,
        entries=merged,
        requested=len(urls),
        fetched=len(bodies),
        parsed=stats.parsed,
        started_at=started_at,
        finished_at=now_utc(),
    )
    logger.info(
        f"Cycle {cycle}: {result.fetched}/{result.requested} fetched, "
        f"{result.parsed} parsed, {len(merged) if merged else 0} entries"
    )
    return result


async def fetch_news(
    urls: list[str],
    *,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> Optional[list[NormalizedEntry]]:
    """
    One-shot helper: fetch, parse and merge the given feeds.

    Returns:
        Newest-first entries, or None if no feed produced any
    """
    settings = settings or Settings()
    if client is not None:
        result = await run_cycle(urls, client=client, user_agent=settings.user_agent)
        return result.entries

    async with create_client(settings) as own_client:
        result = await run_cycle(urls, client=own_client, user_agent=settings.user_agent)
    return result.entries


class NewsFeed:
    """
    Long-lived owner of the HTTP client and the latest cycle result.

    Each refresh() starts a new cycle. A newer cycle supersedes an older one
    still in flight: the older task is cancelled and its result is never
    published.
    """

    def __init__(self, settings: Optional[Settings] = None, *, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings or Settings()
        self._owns_client = client is None
        self._client = client or create_client(self.settings)
        self._cycle = 0
        self._task: Optional[asyncio.Task] = None
        self.result: Optional[CycleResult] = None

    @property
    def cycle(self) -> int:
        """Number of the most recently started cycle (0 before the first)."""
        return self._cycle

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def state(self) -> str:
        if self.in_flight or self.result is None:
            return STATE_LOADING
        return STATE_READY if self.result.available else STATE_UNAVAILABLE

    def start(self) -> asyncio.Task:
        """
        Start a new cycle in the background (must be called from a running loop).

        Returns:
            Task resolving to the published CycleResult, or None if superseded
        """
        self._cycle += 1
        cycle = self._cycle

        previous = self._task
        if previous is not None and not previous.done():
            logger.info(f"Cycle {cycle} supersedes cycle {cycle - 1}")
            previous.cancel()

        task = asyncio.create_task(self._run(cycle))
        task.add_done_callback(self._log_failure)
        self._task = task
        return task

    async def _run(self, cycle: int) -> Optional[CycleResult]:
        result = await run_cycle(
            list(self.settings.feeds),
            client=self._client,
            cycle=cycle,
            user_agent=self.settings.user_agent,
        )
        if cycle != self._cycle:
            logger.info(f"Cycle {cycle} finished after being superseded, result dropped")
            return None

        self.result = result
        return result

    @staticmethod
    def _log_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            logger.info("Cycle cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Cycle failed: {exc!r}")

    async def refresh(self) -> Optional[CycleResult]:
        """
        Run a new cycle and wait for it.

        Returns:
            The published CycleResult, or None if a newer refresh started
            before this one finished
        """
        task = self.start()
        try:
            return await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if task.cancelled() and not (current and current.cancelling()):
                return None
            raise

    async def aclose(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "NewsFeed":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
