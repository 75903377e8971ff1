"""Data models for Gluon News."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .core.dates import EPOCH

NOT_AVAILABLE = "N/A"
MAX_SOURCE_TITLE_LENGTH = 100


class FetchedBody(BaseModel):
    """Decoded body of one response that made it through the transport."""

    url: str
    status_code: int
    text: str


class NormalizedEntry(BaseModel):
    """
    One feed entry flattened to the shape the aggregator sorts and the
    delivery layer renders. Missing fields are already substituted.
    """

    model_config = ConfigDict(frozen=True)

    # === Source ===
    source_title: str = Field(default=NOT_AVAILABLE, max_length=MAX_SOURCE_TITLE_LENGTH)

    # === Content ===
    title: str = NOT_AVAILABLE
    summary: str = NOT_AVAILABLE    # raw markup, "href" already stripped
    link: str = NOT_AVAILABLE       # first link of the entry

    # === Timestamp ===
    published: datetime = EPOCH
