"""Representation of a session token."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

__all__ = ["SessionToken"]


class SessionToken(BaseModel):
    """A signed session token and the data encoded in it.

    The encoded form is a JWT signed with the shared session secret. Holders
    of the token treat it as opaque. Any relying party with the secret can
    verify it without contacting steambridge.
    """

    encoded: str = Field(..., title="Encoded JWT")

    steam_id: str = Field(
        ...,
        title="Steam ID",
        description="Verified 64-bit Steam ID of the user, as a string",
        examples=["76561198012345678"],
        pattern="^[0-9]+$",
    )

    issued: datetime = Field(..., title="Issuance time")

    expires: datetime = Field(..., title="Expiration time")

    @field_serializer("issued", "expires")
    def _serialize_datetime(self, time: datetime) -> int:
        return int(time.timestamp())
