"""
Pydantic models for user data.

``UserCreate`` requires all three writable fields, ``UserUpdate``
accepts any subset of them.  Keys that are not user fields are
ignored.  The password is write-only: ``UserRead`` has no password
field and ``sanitize`` removes it from raw table rows.
"""

from typing import Annotated, Any, Dict, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email

PASSWORD_MIN_LENGTH = 8
NAME_MIN_LENGTH = 2


def check_email(value: str) -> str:
    """Validate email syntax but keep the address exactly as sent."""
    validate_email(value)
    return value


EmailAddress = Annotated[str, AfterValidator(check_email)]


class UserCreate(BaseModel):
    """Schema for registering a user."""

    email: EmailAddress = Field(..., examples=["user@example.com"], json_schema_extra={"format": "email"})
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, examples=["strongpassword"])
    name: str = Field(..., min_length=NAME_MIN_LENGTH, examples=["Jane Doe"])


class UserUpdate(BaseModel):
    """Schema for a partial update.

    All fields are optional; only provided values are validated and
    written.  An explicit ``null`` is rejected since the columns are
    not nullable.
    """

    email: Optional[EmailAddress] = Field(None, json_schema_extra={"format": "email"})
    password: Optional[str] = Field(None, min_length=PASSWORD_MIN_LENGTH)
    name: Optional[str] = Field(None, min_length=NAME_MIN_LENGTH)

    @field_validator("email", "password", "name", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Value must not be null")
        return v

    def changes(self) -> Dict[str, Any]:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class UserRead(BaseModel):
    """Schema for a user as returned by the API.

    Columns other than the ones declared here are passed through
    unchanged.
    """

    id: int
    email: str
    name: str

    model_config = ConfigDict(extra="allow")


def sanitize(row: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``row`` without the ``password`` column."""
    return {key: value for key, value in row.items() if key != "password"}
