"""Gluon News API - browser view and JSON access to the merged news."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel

from gluon_news.models import NormalizedEntry
from gluon_news.pipeline import STATE_LOADING, NewsFeed
from gluon_news.S4_deliver import to_html
from gluon_news.settings import load_settings

# ─────────────────────────────────────────────────────────────
# Logging
# ─────────────────────────────────────────────────────────────

def setup_api_logging():
    """Configure logging for API process."""
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    log_file = log_dir / "api.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(file_handler)

    return log_file


logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# Response models
# ─────────────────────────────────────────────────────────────

class NewsResponse(BaseModel):
    """Current state of the news list."""
    state: str
    cycle: int
    requested: int = 0
    fetched: int = 0
    parsed: int = 0
    finished_at: Optional[datetime] = None
    entries: Optional[list[NormalizedEntry]] = None


class RefreshResponse(BaseModel):
    """Acknowledgement of a started cycle."""
    cycle: int
    state: str


# ─────────────────────────────────────────────────────────────
# App
# ─────────────────────────────────────────────────────────────

def create_app(feed: Optional[NewsFeed] = None) -> FastAPI:
    """
    Build the API around a NewsFeed.

    Args:
        feed: Injected feed (tests); by default one is built from settings.json
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        news = feed or NewsFeed(load_settings())
        app.state.feed = news
        news.start()
        logger.info(f"API started with {len(news.settings.feeds)} feeds")
        try:
            yield
        finally:
            await news.aclose()

    app = FastAPI(
        title="Gluon News API",
        description="Concurrent feed reader",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health_check():
        """Health check."""
        return {
            "service": "Gluon News API",
            "version": "0.1.0",
            "status": "ok",
        }

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        """Rendered news page: loading indicator, entries, or the failure message."""
        news: NewsFeed = request.app.state.feed
        result = news.result
        loading = news.state == STATE_LOADING

        return HTMLResponse(to_html(
            None if loading else result.entries,
            None if loading else result.stats(),
            loading=loading,
            refresh_url="/refresh",
            maximized=news.settings.maximized,
        ))

    @app.post("/refresh")
    async def refresh_page(request: Request):
        """Form target of the Refresh button."""
        request.app.state.feed.start()
        return RedirectResponse("/", status_code=303)

    @app.get("/api/news", response_model=NewsResponse)
    async def get_news(request: Request):
        """Entries of the last published cycle, newest first."""
        news: NewsFeed = request.app.state.feed
        state = news.state
        result = news.result

        if state == STATE_LOADING or result is None:
            return NewsResponse(state=state, cycle=news.cycle)

        return NewsResponse(
            state=state,
            cycle=result.cycle,
            requested=result.requested,
            fetched=result.fetched,
            parsed=result.parsed,
            finished_at=result.finished_at,
            entries=result.entries,
        )

    @app.post("/api/refresh", response_model=RefreshResponse)
    async def refresh(request: Request):
        """Start a new fetch cycle; poll /api/news for the result."""
        news: NewsFeed = request.app.state.feed
        news.start()
        return RefreshResponse(cycle=news.cycle, state=news.state)

    return app


app = create_app()


# ─────────────────────────────────────────────────────────────
# Startup
# ─────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn
    setup_api_logging()
    uvicorn.run(app, host="0.0.0.0", port=8080)
