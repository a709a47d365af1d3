"""Utility functions for tests."""

from __future__ import annotations

import html
import re
from datetime import datetime, timedelta
from urllib.parse import ParseResult, urlparse

from safir.datetime import current_datetime

__all__ = ["assert_is_now", "get_app_redirect"]


def assert_is_now(date: datetime) -> None:
    """Assert that a datetime is reasonably close to the current time."""
    now = current_datetime()
    assert now - timedelta(seconds=5) <= date <= now


def get_app_redirect(body: str) -> ParseResult:
    """Extract the application redirect from a callback page.

    Parameters
    ----------
    body
        HTML body of the response from ``/auth/callback``.

    Returns
    -------
    urllib.parse.ParseResult
        Parsed form of the URL to which the page sends the user.
    """
    match = re.search(r'<a href="([^"]+)">', body)
    assert match, f"No redirect link in page: {body}"
    return urlparse(html.unescape(match.group(1)))
