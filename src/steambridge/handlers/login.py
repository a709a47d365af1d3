"""Start of authentication (``/auth/login``)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from safir.slack.webhook import SlackRouteErrorHandler

from ..dependencies.context import RequestContext, context_dependency

router = APIRouter(route_class=SlackRouteErrorHandler)

__all__ = ["router"]


@router.get(
    "/auth/login",
    description=(
        "The native application opens this URL in a browser to start"
        " authentication. The user is sent to Steam, which returns them to"
        " ``/auth/callback``."
    ),
    responses={
        307: {
            "description": "Redirect to Steam",
            "headers": {
                "Location": {
                    "description": "URL of the Steam OpenID endpoint",
                    "schema": {"type": "string"},
                }
            },
        },
    },
    status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    summary="Authenticate with Steam",
    tags=["browser"],
)
async def get_login(
    *,
    context: Annotated[RequestContext, Depends(context_dependency)],
) -> RedirectResponse:
    provider = context.factory.create_provider()
    return RedirectResponse(
        provider.get_redirect_url(),
        headers={"Cache-Control": "no-cache, no-store"},
    )
