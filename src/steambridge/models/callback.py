"""Outcomes of an OpenID callback and the redirects they produce."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

from fastapi import status

from ..constants import ERROR_REDIRECT_DELAY
from .token import SessionToken

__all__ = [
    "AppRedirect",
    "CallbackError",
    "CallbackResult",
    "CallbackSuccess",
    "ServerError",
    "VerificationFailed",
    "build_app_redirect",
]


class CallbackError(Enum):
    """Error codes passed to the native application.

    These are the only failure details the client ever sees.
    """

    SERVER_ERROR = "server_error"
    VERIFICATION_FAILED = "verification_failed"


@dataclass(frozen=True, slots=True)
class CallbackSuccess:
    """The assertion was verified and a session token was issued."""

    steam_id: str
    """Verified Steam ID."""

    token: SessionToken
    """Newly-issued session token."""


@dataclass(frozen=True, slots=True)
class VerificationFailed:
    """The assertion did not satisfy the authenticity policy."""


@dataclass(frozen=True, slots=True)
class ServerError:
    """Something unexpected failed while processing the callback."""

    exc: Exception | None = None
    """Underlying exception, used only for alerting."""


type CallbackResult = CallbackSuccess | VerificationFailed | ServerError
"""Every possible outcome of processing an OpenID callback."""


@dataclass(frozen=True, slots=True)
class AppRedirect:
    """Page sent to the browser to return the user to the application."""

    url: str
    """URL in the application's private scheme."""

    status_code: int
    """HTTP status code of the page."""

    title: str
    """Page title and heading."""

    message: str
    """Text shown to the user."""

    delay: int = 0
    """Milliseconds to wait before redirecting."""

    steam_id: str | None = None
    """Steam ID to display, if authentication succeeded."""


def build_app_redirect(result: CallbackResult, scheme: str) -> AppRedirect:
    """Convert the result of a callback into a redirect to the application.

    Parameters
    ----------
    result
        Outcome of processing the callback.
    scheme
        Private URL scheme of the native application.

    Returns
    -------
    AppRedirect
        Description of the page to return.
    """
    if isinstance(result, CallbackSuccess):
        query = urlencode(
            {"token": result.token.encoded, "identity": result.steam_id}
        )
        return AppRedirect(
            url=f"{scheme}://auth/success?{query}",
            status_code=status.HTTP_200_OK,
            title="Authentication Successful",
            message="Redirecting back to the application...",
            steam_id=result.steam_id,
        )
    elif isinstance(result, VerificationFailed):
        error = CallbackError.VERIFICATION_FAILED
        return AppRedirect(
            url=_error_url(scheme, error),
            status_code=status.HTTP_401_UNAUTHORIZED,
            title="Authentication Failed",
            message=(
                "Could not verify your Steam identity. Please try again."
            ),
            delay=ERROR_REDIRECT_DELAY,
        )
    else:
        return AppRedirect(
            url=_error_url(scheme, CallbackError.SERVER_ERROR),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            title="Error",
            message=(
                "An error occurred during authentication. Please try again."
            ),
            delay=ERROR_REDIRECT_DELAY,
        )


def _error_url(scheme: str, error: CallbackError) -> str:
    return f"{scheme}://auth/error?" + urlencode({"message": error.value})
