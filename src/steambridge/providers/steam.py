"""Steam OpenID 2.0 authentication provider.

Steam still uses legacy OpenID 2.0 rather than OpenID Connect. Steam does not
release any user information through OpenID beyond the claimed identifier,
which contains the user's 64-bit Steam ID.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import urlencode, urlsplit

from httpx import AsyncClient, HTTPError
from structlog.stdlib import BoundLogger

from ..config import SteamConfig
from ..constants import (
    CHECK_AUTHENTICATION_MODE,
    HTTP_TIMEOUT,
    IDENTIFIER_SELECT,
    OPENID_NS,
    POSITIVE_ASSERTION_MODE,
    STEAM_ID_REGEX,
)
from ..exceptions import ProviderError, SteamError, SteamWebError

__all__ = ["SteamProvider"]


class SteamProvider:
    """Authenticate a user with Steam.

    Parameters
    ----------
    config
        Configuration for the Steam authentication provider.
    http_client
        Session to use to make HTTP requests.
    logger
        Logger for any log messages.
    """

    def __init__(
        self,
        *,
        config: SteamConfig,
        http_client: AsyncClient,
        logger: BoundLogger,
    ) -> None:
        self._config = config
        self._http_client = http_client
        self._logger = logger
        host = re.escape(config.identity_host)
        self._claimed_id_regex = re.compile(
            rf"https://{host}/openid/id/({STEAM_ID_REGEX})"
        )

    def get_redirect_url(self) -> str:
        """Get the login URL to which to redirect the user.

        Returns
        -------
        str
            The encoded URL to which to redirect the user.
        """
        params = {
            "openid.ns": OPENID_NS,
            "openid.mode": "checkid_setup",
            "openid.return_to": str(self._config.return_url),
            "openid.realm": str(self._config.realm),
            "openid.identity": IDENTIFIER_SELECT,
            "openid.claimed_id": IDENTIFIER_SELECT,
        }
        self._logger.info("Redirecting user to Steam for authentication")
        return f"{self._config.login_url}?{urlencode(params)}"

    async def verify_assertion(
        self, assertion: Mapping[str, str]
    ) -> str | None:
        """Verify a positive assertion and extract the Steam ID.

        Any failure is logged and reported by returning `None`. Only
        unexpected internal errors are raised.

        Parameters
        ----------
        assertion
            The ``openid.*`` query parameters from the callback request.

        Returns
        -------
        str or None
            The verified Steam ID, or `None` if the assertion could not be
            verified.
        """
        claimed_id = assertion.get("openid.claimed_id")
        if not claimed_id or not assertion.get("openid.identity"):
            self._reject("Missing required OpenID parameters")
            return None

        match = self._claimed_id_regex.fullmatch(claimed_id)
        if not match:
            self._reject("Invalid Steam ID in claimed_id", claimed_id)
            return None
        steam_id = match.group(1)

        mode = assertion.get("openid.mode")
        if mode != POSITIVE_ASSERTION_MODE:
            self._reject(f"OpenID mode is {mode}", claimed_id)
            return None

        return_to = assertion.get("openid.return_to", "")
        if not self._is_return_url(return_to):
            msg = f"Assertion was for a different return URL: {return_to}"
            self._reject(msg, claimed_id)
            return None

        try:
            await self._check_authentication(assertion)
        except ProviderError as e:
            self._reject(str(e), claimed_id)
            return None

        self._logger.info("Verified Steam assertion", steam_id=steam_id)
        return steam_id

    async def _check_authentication(
        self, assertion: Mapping[str, str]
    ) -> None:
        """Ask Steam to confirm that it issued this assertion.

        This checks the signature of the assertion. Steam also invalidates
        the response nonce, so an assertion can only be used once.

        Parameters
        ----------
        assertion
            The ``openid.*`` query parameters from the callback request.

        Raises
        ------
        SteamError
            Raised if Steam did not confirm the assertion.
        SteamWebError
            Raised if the request to Steam failed.
        """
        data = {
            k: v for k, v in assertion.items() if k.startswith("openid.")
        }
        data["openid.mode"] = CHECK_AUTHENTICATION_MODE
        url = str(self._config.login_url)
        self._logger.debug("Verifying assertion with Steam", url=url)
        try:
            r = await self._http_client.post(
                url, data=data, timeout=HTTP_TIMEOUT
            )
            r.raise_for_status()
        except HTTPError as e:
            raise SteamWebError.from_exception(e) from e
        result = _parse_key_value_form(r.text)
        is_valid = result.get("is_valid")
        if is_valid != "true":
            raise SteamError(f"Steam rejected assertion (is_valid {is_valid})")

    def _is_return_url(self, return_to: str) -> bool:
        """Check that an assertion was made for our callback URL."""
        if not return_to:
            return False
        expected = urlsplit(str(self._config.return_url))
        actual = urlsplit(return_to)
        return (
            actual.scheme == expected.scheme
            and actual.netloc.lower() == expected.netloc.lower()
            and actual.path == expected.path
        )

    def _reject(self, reason: str, claimed_id: str | None = None) -> None:
        """Log the reason for a verification failure."""
        if claimed_id:
            self._logger.warning(
                "Steam verification failed",
                error=reason,
                claimed_id=claimed_id,
            )
        else:
            self._logger.warning("Steam verification failed", error=reason)


def _parse_key_value_form(body: str) -> dict[str, str]:
    """Parse an OpenID key-value form response.

    Each line is a key and a value separated by the first colon.
    """
    result = {}
    for line in body.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            result[key.strip()] = value.strip()
    return result
