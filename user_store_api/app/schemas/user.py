"""
Pydantic models for user data.

``User`` is both the persisted record and the API representation; the
store keeps users exactly as clients see them.  ``UserCreate`` and
``UserUpdate`` describe request bodies.  Missing fields default to the
empty string and unknown fields are ignored, so clients may send
partial payloads.  A JSON ``null`` in a field reads as the empty
string.
"""

from typing import Any, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """A stored user record."""

    id: str = Field(..., examples=["1"])
    created_at: AwareDatetime = Field(..., description="Creation time, RFC 3339 with offset")
    display_name: str = Field("", examples=["Alice"])
    email: str = Field("", examples=["alice@example.com"])


class UserCreate(BaseModel):
    """Schema for creating a user."""

    model_config = ConfigDict(extra="ignore")

    display_name: str = Field("", examples=["Alice"])
    email: str = Field("", examples=["alice@example.com"])

    @field_validator("display_name", "email", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class UserUpdate(BaseModel):
    """Schema for updating a user.  Only the display name can change."""

    model_config = ConfigDict(extra="ignore")

    display_name: str = Field("", examples=["Alice B."])

    @field_validator("display_name", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class UserCreated(BaseModel):
    user_id: str


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed user request."""

    status: str = Field(..., examples=["Invalid request."])
    error: Optional[str] = Field(None, examples=["user_not_found"])
