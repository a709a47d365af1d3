"""Processing of the return from the OpenID provider."""

from __future__ import annotations

from collections.abc import Mapping

from structlog.stdlib import BoundLogger

from ..issuer import SessionIssuer
from ..models.callback import (
    CallbackResult,
    CallbackSuccess,
    ServerError,
    VerificationFailed,
)
from ..providers.steam import SteamProvider

__all__ = ["CallbackService"]


class CallbackService:
    """Turn an OpenID positive assertion into a session token.

    A token is only issued for the Steam ID returned by the provider's
    verification of the same assertion.

    Parameters
    ----------
    provider
        Provider used to verify the assertion.
    issuer
        Issuer for session tokens.
    logger
        Logger to use.
    """

    def __init__(
        self,
        *,
        provider: SteamProvider,
        issuer: SessionIssuer,
        logger: BoundLogger,
    ) -> None:
        self._provider = provider
        self._issuer = issuer
        self._logger = logger

    async def process(self, assertion: Mapping[str, str]) -> CallbackResult:
        """Verify an assertion and issue a session token.

        Never raises. Every failure is reduced to one of the result types.

        Parameters
        ----------
        assertion
            Query parameters from the callback request.

        Returns
        -------
        CallbackResult
            Outcome of the callback.
        """
        try:
            steam_id = await self._provider.verify_assertion(assertion)
            if not steam_id:
                return VerificationFailed()
            token = self._issuer.issue(steam_id)
        except Exception as e:
            self._logger.exception(
                "Error processing Steam callback", error=str(e)
            )
            return ServerError(exc=e)
        self._logger.info("Authenticated user via Steam", steam_id=steam_id)
        return CallbackSuccess(steam_id=steam_id, token=token)
