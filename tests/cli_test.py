"""Tests for the command-line interface.

None of these tests can be async because Click runs the commands
synchronously.
"""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from steambridge.cli import main
from steambridge.config import Config
from steambridge.verify import SessionVerifier

from .support.config import config_path
from .support.constants import TEST_STEAM_ID


def test_help() -> None:
    runner = CliRunner()

    result = runner.invoke(main, ["-h"])
    assert result.exit_code == 0
    assert "Commands:" in result.output

    result = runner.invoke(main, ["help"])
    assert result.exit_code == 0
    assert "Commands:" in result.output

    result = runner.invoke(main, ["help", "issue-token"])
    assert result.exit_code == 0
    assert "Options:" in result.output
    assert "Commands:" not in result.output

    result = runner.invoke(main, ["help", "unknown-command"])
    assert result.exit_code != 0
    assert "Unknown help topic unknown-command" in result.output


def test_generate_secret() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["generate-secret"], catch_exceptions=False)
    assert result.exit_code == 0
    secret = result.output.rstrip("\n")
    assert len(secret) >= 32
    assert "\n" not in secret


def test_issue_token(config: Config) -> None:
    runner = CliRunner()
    result = runner.invoke(
        main,
        [
            "issue-token",
            TEST_STEAM_ID,
            "--config-path",
            str(config_path("base")),
        ],
        catch_exceptions=False,
    )
    assert result.exit_code == 0

    verifier = SessionVerifier(
        secret=config.session_secret, issuer=config.token_issuer
    )
    token = verifier.verify(result.output.strip())
    assert token.steam_id == TEST_STEAM_ID


def test_issue_token_invalid(config: Config) -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["issue-token", "not-a-number"])
    assert result.exit_code == 2
    assert "must be a numeric Steam ID" in result.output


def test_verify_token(config: Config) -> None:
    runner = CliRunner()
    result = runner.invoke(
        main, ["issue-token", TEST_STEAM_ID], catch_exceptions=False
    )
    assert result.exit_code == 0
    encoded = result.output.strip()

    result = runner.invoke(
        main, ["verify-token", encoded], catch_exceptions=False
    )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["steam_id"] == TEST_STEAM_ID
    assert data["expires"] - data["issued"] == int(
        config.token_lifetime.total_seconds()
    )


def test_verify_token_invalid(config: Config) -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["verify-token", "not.a.token"])
    assert result.exit_code == 1
    assert "Invalid token" in result.output


def test_openapi_schema(tmp_path: Path) -> None:
    output_path = tmp_path / "openapi.json"
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["openapi-schema", "--output", str(output_path)],
        catch_exceptions=False,
    )
    assert result.exit_code == 0
    schema = json.loads(output_path.read_text())
    assert schema["info"]["title"] == "steambridge"
    assert "/auth/callback" in schema["paths"]
