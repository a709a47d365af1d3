"""Tests for the ``/auth/login`` route."""

from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest
from httpx import AsyncClient

from ..support.constants import TEST_HOSTNAME
from ..support.logging import parse_log


@pytest.mark.asyncio
async def test_login(
    client: AsyncClient, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.clear()
    r = await client.get("/auth/login")
    assert r.status_code == 307
    assert r.headers["Cache-Control"] == "no-cache, no-store"

    url = urlparse(r.headers["Location"])
    assert url.scheme == "https"
    assert url.netloc == "steamcommunity.com"
    assert url.path == "/openid/login"
    query = parse_qs(url.query)
    assert query["openid.mode"] == ["checkid_setup"]
    assert query["openid.return_to"] == [
        f"https://{TEST_HOSTNAME}/auth/callback"
    ]
    assert query["openid.realm"] == [f"https://{TEST_HOSTNAME}/"]

    assert parse_log(caplog) == [
        {
            "event": "Redirecting user to Steam for authentication",
            "severity": "info",
        }
    ]
