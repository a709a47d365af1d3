"""Verify a session token."""

from __future__ import annotations

import re
from datetime import UTC, datetime

import jwt
from pydantic import SecretStr

from .constants import ALGORITHM, STEAM_ID_REGEX
from .exceptions import InvalidTokenError, NotConfiguredError
from .models.token import SessionToken

__all__ = ["SessionVerifier"]


class SessionVerifier:
    """Verifies session tokens issued by `~steambridge.issuer.SessionIssuer`.

    This is the check a relying party performs before trusting a session
    token. It must use the same algorithm and secret as the issuer.

    Parameters
    ----------
    secret
        Shared secret used to sign tokens.
    issuer
        Expected value of the ``iss`` claim.
    """

    def __init__(self, *, secret: SecretStr, issuer: str) -> None:
        self._secret = secret
        self._issuer = issuer

    def verify(self, encoded: str) -> SessionToken:
        """Verify a session token and return its contents.

        Parameters
        ----------
        encoded
            Encoded JWT.

        Returns
        -------
        SessionToken
            The verified token.

        Raises
        ------
        InvalidTokenError
            Raised if the signature does not verify, the token has expired,
            the issuer does not match, or required claims are missing.
        NotConfiguredError
            Raised if no signing secret is configured.
        """
        secret = self._secret.get_secret_value()
        if not secret:
            raise NotConfiguredError("No session token signing secret")
        try:
            payload = jwt.decode(
                encoded,
                secret,
                algorithms=[ALGORITHM],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "iss", "sub"]},
            )
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e)) from e

        steam_id = payload["sub"]
        if not isinstance(steam_id, str) or not re.fullmatch(
            STEAM_ID_REGEX, steam_id
        ):
            raise InvalidTokenError(f"Invalid sub claim: {steam_id}")
        issued = datetime.fromtimestamp(payload["iat"], tz=UTC)
        expires = datetime.fromtimestamp(payload["exp"], tz=UTC)
        if expires <= issued:
            raise InvalidTokenError("Token expires before it was issued")
        return SessionToken(
            encoded=encoded, steam_id=steam_id, issued=issued, expires=expires
        )
