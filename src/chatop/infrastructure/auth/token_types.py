"""Token claims and authenticated identity types.

The claims carried by a bearer token are a fixed record with an explicit
wire layout: ``{sub, iat, exp, name, tokenVersion}``.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TokenClaims(BaseModel):
    """Structure of the data signed inside a bearer token."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    subject: str = Field(..., alias="sub", description="User email (lowercase)")
    issued_at: int = Field(..., alias="iat", description="Unix timestamp of issuance")
    expires_at: int = Field(..., alias="exp", description="Unix timestamp of expiry")
    name: str = Field(..., description="User display name")
    token_version: int = Field(
        ..., alias="tokenVersion", description="User token version at issuance"
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JWT payload layout."""
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class AuthenticatedUser:
    """The identity resolved for a request by the authentication gate."""

    id: int
    email: str
    name: str
    token_version: int
