"""Constants for steambridge."""

from datetime import timedelta

__all__ = [
    "ALGORITHM",
    "CHECK_AUTHENTICATION_MODE",
    "CONFIG_PATH",
    "ERROR_REDIRECT_DELAY",
    "HTTP_TIMEOUT",
    "IDENTIFIER_SELECT",
    "MINIMUM_LIFETIME",
    "OPENID_NS",
    "POSITIVE_ASSERTION_MODE",
    "SCHEME_REGEX",
    "SECRET_MIN_LENGTH",
    "STEAM_ID_REGEX",
]

ALGORITHM = "HS256"
"""JWT algorithm used for session tokens."""

CHECK_AUTHENTICATION_MODE = "check_authentication"
"""OpenID mode used to ask the provider to verify an assertion."""

CONFIG_PATH = "/etc/steambridge/steambridge.yaml"
"""Default configuration path."""

ERROR_REDIRECT_DELAY = 2000
"""Delay (in milliseconds) before error pages send the user to the app."""

HTTP_TIMEOUT = 10.0
"""Timeout (in seconds) for the verification request to the provider."""

IDENTIFIER_SELECT = "http://specs.openid.net/auth/2.0/identifier_select"
"""Identifier that asks the provider to choose the user's identity."""

MINIMUM_LIFETIME = timedelta(minutes=1)
"""Minimum lifetime of a session token."""

OPENID_NS = "http://specs.openid.net/auth/2.0"
"""OpenID 2.0 namespace URI."""

POSITIVE_ASSERTION_MODE = "id_res"
"""OpenID mode of a successful authentication response."""

SCHEME_REGEX = "[a-zA-Z][a-zA-Z0-9+.-]*"
"""Regex matching a valid URI scheme for the native application."""

SECRET_MIN_LENGTH = 32
"""Minimum length of the session signing secret."""

STEAM_ID_REGEX = "[0-9]+"
"""Regex matching a Steam ID as it appears in a claimed identifier."""
