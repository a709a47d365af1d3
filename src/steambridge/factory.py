"""Create steambridge components."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Self

import structlog
from httpx import AsyncClient
from safir.dependencies.http_client import http_client_dependency
from safir.slack.webhook import SlackWebhookClient
from structlog.stdlib import BoundLogger

from .config import Config
from .constants import HTTP_TIMEOUT
from .issuer import SessionIssuer
from .providers.steam import SteamProvider
from .services.callback import CallbackService
from .verify import SessionVerifier

__all__ = ["Factory", "ProcessContext"]


@dataclass(frozen=True, slots=True)
class ProcessContext:
    """State shared by every request in a process.

    Created once at startup from the configuration and never modified.
    """

    config: Config
    """steambridge's configuration."""

    http_client: AsyncClient
    """Shared HTTP client."""

    @classmethod
    async def from_config(cls, config: Config) -> Self:
        """Create a new process context from the steambridge configuration.

        Parameters
        ----------
        config
            The steambridge configuration.

        Returns
        -------
        ProcessContext
            Shared context for a steambridge process.
        """
        return cls(config=config, http_client=await http_client_dependency())


class Factory:
    """Build steambridge components.

    Components are created on demand for each request from the shared
    `ProcessContext`.

    Parameters
    ----------
    context
        Shared process context.
    logger
        Logger passed to every component.
    """

    @classmethod
    @asynccontextmanager
    async def standalone(cls, config: Config) -> AsyncIterator[Self]:
        """Async context manager for steambridge components.

        Intended for the command-line interface and the test suite. Uses a
        private HTTP client rather than the one shared by the web
        application.

        Parameters
        ----------
        config
            steambridge configuration.

        Yields
        ------
        Factory
            The factory. Must be used as an async context manager.
        """
        logger = structlog.get_logger("steambridge")
        async with AsyncClient(timeout=HTTP_TIMEOUT) as http_client:
            context = ProcessContext(config=config, http_client=http_client)
            yield cls(context, logger)

    def __init__(self, context: ProcessContext, logger: BoundLogger) -> None:
        self._context = context
        self._logger = logger

    def create_callback_service(self) -> CallbackService:
        """Create the service that processes OpenID callbacks.

        Returns
        -------
        CallbackService
            Newly-created callback service.
        """
        return CallbackService(
            provider=self.create_provider(),
            issuer=self.create_session_issuer(),
            logger=self._logger,
        )

    def create_provider(self) -> SteamProvider:
        """Create the Steam authentication provider.

        Returns
        -------
        SteamProvider
            A new provider.
        """
        return SteamProvider(
            config=self._context.config.steam,
            http_client=self._context.http_client,
            logger=self._logger,
        )

    def create_session_issuer(self) -> SessionIssuer:
        """Create an issuer for session tokens.

        Returns
        -------
        SessionIssuer
            A new session token issuer.
        """
        config = self._context.config
        return SessionIssuer(
            secret=config.session_secret,
            issuer=config.token_issuer,
            lifetime=config.token_lifetime,
            logger=self._logger,
        )

    def create_session_verifier(self) -> SessionVerifier:
        """Create a verifier for session tokens.

        Returns
        -------
        SessionVerifier
            A new session token verifier.
        """
        config = self._context.config
        return SessionVerifier(
            secret=config.session_secret, issuer=config.token_issuer
        )

    def create_slack_client(self) -> SlackWebhookClient | None:
        """Create a client for posting alerts to Slack.

        Returns
        -------
        safir.slack.webhook.SlackWebhookClient or None
            Configured Slack client if Slack alerts are enabled, otherwise
            `None`.
        """
        config = self._context.config
        if not config.slack_alerts or not config.slack_webhook:
            return None
        webhook = config.slack_webhook.get_secret_value()
        return SlackWebhookClient(webhook, "steambridge", self._logger)
