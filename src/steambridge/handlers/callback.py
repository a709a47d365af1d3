"""Return from the OpenID provider (``/auth/callback``)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response
from safir.models import ErrorDetail, ErrorModel
from safir.slack.webhook import SlackRouteErrorHandler

from ..dependencies.context import RequestContext, context_dependency
from ..models.callback import CallbackResult, ServerError, build_app_redirect
from ..templates import templates

router = APIRouter(route_class=SlackRouteErrorHandler)

__all__ = ["render_callback_result", "router"]


@router.get(
    "/auth/callback",
    description=(
        "Steam redirects the user here after authentication with a positive"
        " assertion in the query parameters. The assertion is verified with"
        " Steam, a session token is issued, and the browser is sent back to"
        " the native application with a URL in its private scheme."
    ),
    responses={
        200: {
            "content": {"text/html": {}},
            "description": "Page redirecting to the application with a token",
        },
        401: {
            "content": {"text/html": {}},
            "description": "Assertion could not be verified",
        },
        500: {
            "content": {"text/html": {}},
            "description": "Internal error processing the assertion",
        },
    },
    response_class=Response,
    summary="Complete Steam authentication",
    tags=["browser"],
)
async def get_callback(
    *,
    context: Annotated[RequestContext, Depends(context_dependency)],
) -> Response:
    # Providers should never repeat a parameter, but if one does, use the
    # first value.
    assertion: dict[str, str] = {}
    for key, value in context.request.query_params.multi_items():
        assertion.setdefault(key, value)

    callback_service = context.factory.create_callback_service()
    result = await callback_service.process(assertion)
    if isinstance(result, ServerError) and result.exc:
        slack_client = context.factory.create_slack_client()
        if slack_client:
            await slack_client.post_uncaught_exception(result.exc)
    return render_callback_result(context, result)


@router.api_route(
    "/auth/callback",
    methods=["DELETE", "PATCH", "POST", "PUT"],
    include_in_schema=False,
    status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
)
async def callback_method_not_allowed() -> JSONResponse:
    error = ErrorModel(
        detail=[
            ErrorDetail(msg="Method not allowed", type="method_not_allowed")
        ]
    )
    return JSONResponse(
        error.model_dump(exclude_none=True),
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        headers={"Allow": "GET"},
    )


def render_callback_result(
    context: RequestContext, result: CallbackResult
) -> Response:
    """Render the page that returns the user to the native application.

    Parameters
    ----------
    context
        Context of the incoming request.
    result
        Outcome of processing the callback.

    Returns
    -------
    fastapi.Response
        HTML page that redirects to the application.
    """
    redirect = build_app_redirect(result, context.config.app_scheme)
    return templates.TemplateResponse(
        context.request,
        "redirect.html",
        context={
            "url": redirect.url,
            "title": redirect.title,
            "message": redirect.message,
            "delay": redirect.delay,
            "steam_id": redirect.steam_id,
        },
        headers={"Cache-Control": "no-cache, no-store"},
        status_code=redirect.status_code,
    )
