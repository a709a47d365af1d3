"""Administrative command-line interface."""

from __future__ import annotations

import json
import secrets
import sys
from pathlib import Path

import click
import structlog
import uvicorn
from safir.click import display_help

from .dependencies.config import config_dependency
from .exceptions import InvalidTokenError
from .issuer import SessionIssuer
from .main import create_openapi
from .verify import SessionVerifier

__all__ = [
    "generate_secret",
    "help",
    "issue_token",
    "main",
    "openapi_schema",
    "run",
    "verify_token",
]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s")
def main() -> None:
    """Administrative command-line interface for steambridge."""


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic)


@main.command()
def generate_secret() -> None:
    """Generate a new session token signing secret."""
    sys.stdout.write(secrets.token_urlsafe(48) + "\n")


@main.command()
@click.argument("steam_id")
@click.option(
    "--config-path",
    envvar="STEAMBRIDGE_CONFIG_PATH",
    type=click.Path(path_type=Path),
    default=None,
    help="Application configuration file.",
)
def issue_token(*, steam_id: str, config_path: Path | None) -> None:
    """Issue a session token for a Steam ID without authentication.

    Intended for testing services that accept steambridge session tokens.
    """
    if not steam_id.isascii() or not steam_id.isdigit():
        raise click.BadParameter("must be a numeric Steam ID")
    if config_path:
        config_dependency.set_config_path(config_path)
    config = config_dependency.config()
    issuer = SessionIssuer(
        secret=config.session_secret,
        issuer=config.token_issuer,
        lifetime=config.token_lifetime,
        logger=structlog.get_logger("steambridge"),
    )
    token = issuer.issue(steam_id)
    sys.stdout.write(token.encoded + "\n")


@main.command()
@click.option(
    "--add-back-link/--no-add-back-link",
    default=False,
    help="Add link back to the top-level documentation.",
)
@click.option(
    "--output",
    default=None,
    type=click.Path(path_type=Path),
    help="Output path (output to stdout if not given).",
)
def openapi_schema(*, add_back_link: bool, output: Path | None) -> None:
    """Generate the OpenAPI schema."""
    schema = create_openapi(add_back_link=add_back_link)
    if output:
        output.parent.mkdir(exist_ok=True)
        output.write_text(schema)
    else:
        sys.stdout.write(schema)


@main.command()
@click.option(
    "--port", default=8080, type=int, help="Port to run the application on."
)
def run(*, port: int) -> None:
    """Run the application (for testing only)."""
    uvicorn.run(
        "steambridge.main:create_app",
        factory=True,
        port=port,
        reload=True,
        reload_dirs=["src"],
    )


@main.command()
@click.argument("token")
@click.option(
    "--config-path",
    envvar="STEAMBRIDGE_CONFIG_PATH",
    type=click.Path(path_type=Path),
    default=None,
    help="Application configuration file.",
)
def verify_token(*, token: str, config_path: Path | None) -> None:
    """Verify a session token and print its contents."""
    if config_path:
        config_dependency.set_config_path(config_path)
    config = config_dependency.config()
    verifier = SessionVerifier(
        secret=config.session_secret, issuer=config.token_issuer
    )
    try:
        verified = verifier.verify(token)
    except InvalidTokenError as e:
        raise click.ClickException(f"Invalid token: {e!s}") from e
    data = verified.model_dump(exclude={"encoded"})
    sys.stdout.write(json.dumps(data, sort_keys=True) + "\n")
