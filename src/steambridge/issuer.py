"""Session token issuer."""

from __future__ import annotations

from datetime import timedelta

import jwt
from pydantic import SecretStr
from safir.datetime import current_datetime
from structlog.stdlib import BoundLogger

from .constants import ALGORITHM
from .exceptions import NotConfiguredError
from .models.token import SessionToken

__all__ = ["SessionIssuer"]


class SessionIssuer:
    """Issue session tokens for verified Steam users.

    The issuer does no verification of its own. It must only be called with
    a Steam ID that was just returned by a successful assertion verification.

    Parameters
    ----------
    secret
        Shared secret used to sign tokens.
    issuer
        Value of the ``iss`` claim.
    lifetime
        How long issued tokens are valid.
    logger
        Logger to use.
    """

    def __init__(
        self,
        *,
        secret: SecretStr,
        issuer: str,
        lifetime: timedelta,
        logger: BoundLogger,
    ) -> None:
        self._secret = secret
        self._issuer = issuer
        self._lifetime = lifetime
        self._logger = logger

    def issue(self, steam_id: str) -> SessionToken:
        """Issue a session token.

        Parameters
        ----------
        steam_id
            Verified Steam ID of the user.

        Returns
        -------
        SessionToken
            The new token.

        Raises
        ------
        NotConfiguredError
            Raised if no signing secret is configured or the token lifetime
            would not produce an expiration after the issuance time.
        """
        secret = self._secret.get_secret_value()
        if not secret:
            raise NotConfiguredError("No session token signing secret")
        if self._lifetime < timedelta(seconds=1):
            msg = f"Invalid session token lifetime {self._lifetime}"
            raise NotConfiguredError(msg)

        now = current_datetime()
        expires = now + self._lifetime
        payload = {
            "iss": self._issuer,
            "sub": steam_id,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }
        encoded = jwt.encode(payload, secret, algorithm=ALGORITHM)
        self._logger.debug(
            "Issued session token",
            steam_id=steam_id,
            expires=int(expires.timestamp()),
        )
        return SessionToken(
            encoded=encoded, steam_id=steam_id, issued=now, expires=expires
        )
