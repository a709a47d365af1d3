"""Configuration for steambridge.

steambridge is primarily configured by a YAML file. Secrets and a few
deployment-specific settings may instead be injected via environment
variables, which take precedence over the file. Only the settings with
explicit ``validation_alias`` settings support configuration via environment
variable.
"""

from __future__ import annotations

import re
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Self, override

import yaml
from pydantic import (
    AliasChoices,
    Field,
    SecretStr,
    UrlConstraints,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import Url
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from safir.logging import LogLevel, Profile, configure_logging
from safir.pydantic import HumanTimedelta

from .constants import MINIMUM_LIFETIME, SCHEME_REGEX, SECRET_MIN_LENGTH

HttpsUrl = Annotated[
    Url,
    UrlConstraints(
        allowed_schemes=["https"], host_required=True, max_length=2083
    ),
]
"""URL type that accepts only ``https`` URLs."""

__all__ = [
    "CamelCaseSettings",
    "Config",
    "EnvFirstSettings",
    "HttpsUrl",
    "SteamConfig",
]


class CamelCaseSettings(BaseSettings):
    """Settings that accept camel-case keys and reject unknown keys.

    Every steambridge configuration model derives from this class.
    """

    model_config = SettingsConfigDict(
        alias_generator=to_camel, extra="forbid", populate_by_name=True
    )


class EnvFirstSettings(CamelCaseSettings):
    """Settings where environment variables win over constructor arguments."""

    @override
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use only the environment, then the parsed YAML file."""
        return (env_settings, init_settings)


class SteamConfig(EnvFirstSettings):
    """Configuration for the Steam OpenID 2.0 provider."""

    realm: HttpsUrl = Field(
        ...,
        title="OpenID realm",
        description=(
            "Realm sent to Steam during login. Steam shows this to the user"
            " as the site requesting authentication. The return URL must be"
            " under this realm."
        ),
    )

    return_url: HttpsUrl = Field(
        ...,
        title="Return URL after authentication",
        description=(
            "Where Steam should send the user after authentication. This"
            " should be the full URL of the ``/auth/callback`` route."
            " Positive assertions for any other return URL are rejected."
        ),
        validation_alias=AliasChoices(
            "STEAMBRIDGE_RETURN_URL", "returnUrl"
        ),
    )

    login_url: HttpsUrl = Field(
        "https://steamcommunity.com/openid/login",
        title="Steam OpenID endpoint",
        description=(
            "OpenID provider endpoint, used both to start authentication and"
            " to verify positive assertions"
        ),
        validate_default=True,
    )

    identity_host: str = Field(
        "steamcommunity.com",
        title="Identity host",
        description=(
            "Hostname of claimed identifiers issued by the provider, in the"
            " form ``https://<host>/openid/id/<steam-id>``"
        ),
    )

    @field_validator("identity_host")
    @classmethod
    def _validate_identity_host(cls, v: str) -> str:
        v = v.strip().lower()
        if not v or "/" in v:
            raise ValueError(f"invalid hostname {v}")
        return v


class Config(EnvFirstSettings):
    """Configuration for steambridge."""

    app_scheme: str = Field(
        ...,
        title="Application URL scheme",
        description=(
            "Private URL scheme registered by the native application. The"
            " user is returned to the application with a URL in this scheme."
        ),
        examples=["com.example.app"],
        validation_alias=AliasChoices(
            "STEAMBRIDGE_APP_SCHEME", "appScheme"
        ),
    )

    log_level: LogLevel = Field(
        LogLevel.INFO,
        title="Log level",
        description="Python logging level",
        validation_alias=AliasChoices("STEAMBRIDGE_LOG_LEVEL", "logLevel"),
    )

    log_profile: Profile = Field(
        Profile.production,
        title="Logging profile",
        description=(
            "Logging profile to use. ``production`` logs in JSON and"
            " ``development`` logs in a human-readable format."
        ),
        validation_alias=AliasChoices(
            "STEAMBRIDGE_LOG_PROFILE", "logProfile"
        ),
    )

    session_secret: SecretStr = Field(
        ...,
        title="Session token signing key",
        description="Shared secret used to sign and verify session tokens",
        validation_alias=AliasChoices(
            "STEAMBRIDGE_SESSION_SECRET", "sessionSecret"
        ),
    )

    slack_alerts: bool = Field(
        False,
        title="Enable Slack alerts",
        description=(
            "Whether to enable Slack alerts. If true, ``slack_webhook`` must"
            " also be set."
        ),
    )

    slack_webhook: SecretStr | None = Field(
        None,
        title="Slack webhook for alerts",
        description="If set, alerts will be posted to this Slack webhook",
        validation_alias=AliasChoices(
            "STEAMBRIDGE_SLACK_WEBHOOK", "slackWebhook"
        ),
    )

    steam: SteamConfig = Field(..., title="Steam configuration")

    token_issuer: str = Field(
        "steambridge",
        title="Token issuer",
        description="Value of the issuer (``iss``) claim of session tokens",
    )

    token_lifetime: HumanTimedelta = Field(
        timedelta(hours=1),
        title="Session token lifetime",
        description="How long a newly-issued session token is valid",
    )

    @field_validator("app_scheme")
    @classmethod
    def _validate_app_scheme(cls, v: str) -> str:
        if not re.fullmatch(SCHEME_REGEX, v):
            raise ValueError(f"invalid URL scheme {v}")
        return v

    @field_validator("session_secret")
    @classmethod
    def _validate_session_secret(cls, v: SecretStr) -> SecretStr:
        if len(v.get_secret_value()) < SECRET_MIN_LENGTH:
            msg = f"must be at least {SECRET_MIN_LENGTH} characters"
            raise ValueError(msg)
        return v

    @field_validator("token_lifetime")
    @classmethod
    def _validate_token_lifetime(cls, v: timedelta) -> timedelta:
        if v < MINIMUM_LIFETIME:
            limit = int(MINIMUM_LIFETIME.total_seconds())
            raise ValueError(f"must be at least {limit}s")
        return v

    @model_validator(mode="after")
    def _validate_slack(self) -> Self:
        if self.slack_alerts and not self.slack_webhook:
            raise ValueError("slackWebhook must be set if slackAlerts is true")
        return self

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Construct a Config object from a configuration file.

        Parameters
        ----------
        path
            Path to the configuration file in YAML.

        Returns
        -------
        Config
            The corresponding `Config` object.
        """
        with path.open("r") as f:
            return cls.model_validate(yaml.safe_load(f))

    def configure_logging(self) -> None:
        """Configure logging based on the steambridge configuration."""
        configure_logging(
            name="steambridge",
            profile=self.log_profile,
            log_level=self.log_level,
        )

    @property
    def slack_enabled(self) -> bool:
        """Whether Slack alerts should be sent."""
        return bool(self.slack_alerts and self.slack_webhook)
