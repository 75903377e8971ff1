"""Concurrent feed download over a shared httpx.AsyncClient."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from ..models import FetchedBody
from ..settings import DEFAULT_USER_AGENT, Settings

logger = logging.getLogger(__name__)

# Failures that mean "the network call produced no response"
TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL)

# Failures while turning a received body into text
DECODE_ERRORS = (UnicodeDecodeError, LookupError)


def create_client(settings: Optional[Settings] = None) -> httpx.AsyncClient:
    """
    Build the client shared by every request of a cycle.

    httpx.AsyncClient pools connections and is safe to use from many
    concurrent tasks.
    """
    settings = settings or Settings()
    return httpx.AsyncClient(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.timeout_s,
        follow_redirects=True,
    )


async def _send(client: httpx.AsyncClient, url: str, user_agent: str) -> httpx.Response:
    """Send one GET and return as soon as headers arrive; body stays unread."""
    request = client.build_request("GET", url, headers={"User-Agent": user_agent})
    return await client.send(request, stream=True)


async def _read_body(url: str, response: httpx.Response) -> FetchedBody:
    """Read and decode one streamed body, always releasing the connection."""
    try:
        await response.aread()
        return FetchedBody(url=url, status_code=response.status_code, text=response.text)
    finally:
        await response.aclose()


def _responses(urls: list[str], outcomes: list) -> list[tuple[str, httpx.Response]]:
    """Pair URLs with their responses, logging and dropping transport failures."""
    responded: list[tuple[str, httpx.Response]] = []
    for url, outcome in zip(urls, outcomes):
        if isinstance(outcome, TRANSPORT_ERRORS):
            logger.warning(f"[{url}] Fetch error: {outcome!r}")
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        logger.debug(f"[{url}] HTTP {outcome.status_code}")
        responded.append((url, outcome))
    return responded


async def _close_responses(sends: list[asyncio.Future]) -> None:
    for send in sends:
        if send.done() and not send.cancelled() and send.exception() is None:
            await send.result().aclose()


async def fetch_all(
    urls: list[str],
    *,
    client: httpx.AsyncClient,
    user_agent: str = DEFAULT_USER_AGENT,
) -> list[FetchedBody]:
    """
    Fetch every URL concurrently and return the bodies that arrived.

    Requests that fail at the transport level are logged and dropped. HTTP
    status is not inspected: an error page counts as a response.

    Args:
        urls: Feed URLs, duplicates allowed
        client: Shared async client
        user_agent: Identifying header sent with each request

    Returns:
        Decoded bodies of the surviving responses, in input order
    """
    if not urls:
        return []

    sends = [asyncio.ensure_future(_send(client, url, user_agent)) for url in urls]
    try:
        outcomes = await asyncio.gather(*sends, return_exceptions=True)
        responded = _responses(urls, outcomes)
        bodies = await asyncio.gather(
            *(_read_body(url, response) for url, response in responded),
            return_exceptions=True,
        )
    except BaseException:
        # streamed responses hold a pool connection until closed
        await _close_responses(sends)
        raise

    results: list[FetchedBody] = []
    for (url, _), body in zip(responded, bodies):
        if isinstance(body, TRANSPORT_ERRORS + DECODE_ERRORS):
            logger.warning(f"[{url}] Body error: {body!r}")
            continue
        if isinstance(body, BaseException):
            raise body
        results.append(body)

    logger.info(f"Fetched {len(results)}/{len(urls)} feeds")
    return results
