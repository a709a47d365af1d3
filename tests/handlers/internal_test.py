"""Tests for the internal routes."""

from __future__ import annotations

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_get_index(client: AsyncClient) -> None:
    r = await client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert data["name"] == "steambridge"
    assert isinstance(data["version"], str)
    assert isinstance(data["description"], str)


@pytest.mark.asyncio
async def test_openapi(client: AsyncClient) -> None:
    r = await client.get("/auth/openapi.json")
    assert r.status_code == 200
    schema = r.json()
    assert list(schema["paths"]["/auth/callback"].keys()) == ["get"]
    assert "/auth/login" in schema["paths"]
