"""
Page navigation helpers shared by the capture loop and the iframe navigator.
"""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from playwright.sync_api import Page

from .targets import is_http_url


# Load states waited for, in order, after every navigation
WAIT_STATES = ('load', 'networkidle')


def to_navigable_url(target: str) -> str:
    """HTTP(S) URLs are used verbatim; local paths become file:// URLs."""
    if is_http_url(target):
        return target
    return Path(target).resolve().as_uri()


def navigate(page: "Page", url: str, timeout_ms: int) -> None:
    """Go to url and wait for the load event, then network idle."""
    page.goto(url, wait_until=WAIT_STATES[0], timeout=timeout_ms)
    for state in WAIT_STATES[1:]:
        page.wait_for_load_state(state, timeout=timeout_ms)
