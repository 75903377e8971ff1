"""Step 1: Fetch all configured feeds concurrently."""

from .http import TRANSPORT_ERRORS, create_client, fetch_all

__all__ = ["fetch_all", "create_client", "TRANSPORT_ERRORS"]
