"""Request context dependency for FastAPI.

This dependency gathers a variety of information into a single object for the
convenience of writing request handlers, including the request logger and
a component factory that uses it.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from safir.dependencies.logger import logger_dependency
from structlog.stdlib import BoundLogger

from ..config import Config
from ..factory import Factory, ProcessContext

__all__ = [
    "ContextDependency",
    "RequestContext",
    "context_dependency",
]


@dataclass(slots=True)
class RequestContext:
    """Holds the incoming request and its surrounding context."""

    request: Request
    """The incoming request."""

    config: Config
    """steambridge's configuration."""

    logger: BoundLogger
    """The request logger, bound with request details."""

    factory: Factory
    """The component factory."""


class ContextDependency:
    """FastAPI dependency that builds a `RequestContext` for each request.

    Only the logger and factory are per request. Everything else comes from
    the `~steambridge.factory.ProcessContext` created at startup.
    """

    def __init__(self) -> None:
        self._process_context: ProcessContext | None = None

    async def __call__(
        self,
        *,
        request: Request,
        logger: Annotated[BoundLogger, Depends(logger_dependency)],
    ) -> RequestContext:
        """Build the context for one request."""
        if not self._process_context:
            raise RuntimeError("ContextDependency not initialized")
        return RequestContext(
            request=request,
            config=self._process_context.config,
            logger=logger,
            factory=Factory(self._process_context, logger),
        )

    async def aclose(self) -> None:
        """Clean up the per-process configuration."""
        self._process_context = None

    async def initialize(self, config: Config) -> None:
        """Create the process context at application startup.

        Parameters
        ----------
        config
            steambridge configuration.
        """
        self._process_context = await ProcessContext.from_config(config)


context_dependency = ContextDependency()
"""Shared request context dependency."""
