"""
Pydantic response and request models.

Records themselves are freeform JSON objects, so only the envelopes
around them (registration, login, delete, health) get real models.
The Field() descriptions show up in the interactive docs at /docs.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# A stored record: whatever the caller sent, plus the server-assigned "id".
Record = dict[str, Any]


class TokenResponse(BaseModel):
    """A bearer token and when it expires."""

    token: str = Field(
        description="Signed bearer token. Send it as `Authorization: Bearer <token>`.",
    )
    token_type: str = Field(default="Bearer")
    expires_at: datetime = Field(
        description="Moment after which the token is rejected (one hour after issue).",
    )


class RegistrationResponse(TokenResponse):
    """The newly created client, plus a token issued for it."""

    client: Record = Field(
        description="The stored client record, including its generated id.",
        examples=[{"id": "5f0c...", "name": "Ana", "email": "a@x.com"}],
    )


class LoginRequest(BaseModel):
    """Login looks the client up by email only.

    Extra fields (e.g. a password) are accepted but not checked."""

    model_config = ConfigDict(extra="allow")

    email: str = Field(examples=["a@x.com"])


class LoginResponse(TokenResponse):
    message: str = Field(examples=["Login successful"])


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    version: str
    records: dict[str, int] = Field(
        description="Number of stored records per collection.",
    )
