"""Tests for issuing session tokens."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
import structlog
from pydantic import SecretStr

from steambridge.config import Config
from steambridge.exceptions import NotConfiguredError
from steambridge.factory import Factory
from steambridge.issuer import SessionIssuer

from .support.constants import TEST_SESSION_SECRET, TEST_STEAM_ID
from .support.util import assert_is_now


@pytest.mark.asyncio
async def test_issue(config: Config, factory: Factory) -> None:
    issuer = factory.create_session_issuer()
    token = issuer.issue(TEST_STEAM_ID)

    assert token.steam_id == TEST_STEAM_ID
    assert_is_now(token.issued)
    assert token.expires - token.issued == config.token_lifetime

    payload = jwt.decode(
        token.encoded,
        TEST_SESSION_SECRET,
        algorithms=["HS256"],
        issuer=config.token_issuer,
    )
    assert payload == {
        "iss": config.token_issuer,
        "sub": TEST_STEAM_ID,
        "iat": int(token.issued.timestamp()),
        "exp": int(token.expires.timestamp()),
    }
    assert payload["exp"] > payload["iat"]
    header = jwt.get_unverified_header(token.encoded)
    assert header["alg"] == "HS256"


@pytest.mark.asyncio
async def test_wrong_secret(factory: Factory) -> None:
    token = factory.create_session_issuer().issue(TEST_STEAM_ID)
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(
            token.encoded,
            "some-other-secret-that-is-long-enough",
            algorithms=["HS256"],
        )


@pytest.mark.asyncio
async def test_unique(factory: Factory) -> None:
    issuer = factory.create_session_issuer()
    first = issuer.issue(TEST_STEAM_ID)
    second = issuer.issue("76561198000000001")
    assert first.encoded != second.encoded


def test_not_configured() -> None:
    logger = structlog.get_logger("steambridge")
    issuer = SessionIssuer(
        secret=SecretStr(""),
        issuer="steambridge",
        lifetime=timedelta(hours=1),
        logger=logger,
    )
    with pytest.raises(NotConfiguredError):
        issuer.issue(TEST_STEAM_ID)

    issuer = SessionIssuer(
        secret=SecretStr(TEST_SESSION_SECRET),
        issuer="steambridge",
        lifetime=timedelta(seconds=0),
        logger=logger,
    )
    with pytest.raises(NotConfiguredError):
        issuer.issue(TEST_STEAM_ID)
