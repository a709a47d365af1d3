"""Exceptions for steambridge."""

from __future__ import annotations

from safir.slack.blockkit import SlackException, SlackWebException

__all__ = [
    "InvalidTokenError",
    "NotConfiguredError",
    "ProviderError",
    "ProviderWebError",
    "SteamError",
    "SteamWebError",
]


class InvalidTokenError(Exception):
    """The provided session token was invalid.

    Raised for a bad signature, an expired token, a token from a different
    issuer, or a token whose claims are missing or malformed.
    """


class NotConfiguredError(Exception):
    """A required part of the configuration is missing.

    This is a fatal error. It is raised rather than silently producing an
    unusable result, such as a session token signed with an empty secret.
    """


class ProviderError(SlackException):
    """Something failed while talking to an authentication provider."""


class ProviderWebError(SlackWebException, ProviderError):
    """A web request to an authentication provider failed."""


class SteamError(ProviderError):
    """The response from Steam for a request was invalid."""


class SteamWebError(ProviderWebError):
    """A web request to Steam failed."""
