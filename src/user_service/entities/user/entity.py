"""User domain entities."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer

# Column order shared by the insert and update statements
USER_FIELDS: tuple[str, ...] = (
    "designation",
    "email",
    "first_name",
    "is_admin",
    "last_name",
    "middle_name",
    "phone_number",
    "previous_exp",
)


class UserPayload(BaseModel):
    """The eight writable fields of a user, as received from a request.

    Values are kept exactly as sent. A missing field stays ``None`` and is
    written as NULL; the database is the only validator.
    """

    model_config = ConfigDict(extra="ignore")

    designation: Any = Field(default=None, description="Job designation")
    email: Any = Field(default=None, description="Email address")
    first_name: Any = Field(default=None, description="First name")
    is_admin: Any = Field(default=None, description="Administrator flag (0/1)")
    last_name: Any = Field(default=None, description="Last name")
    middle_name: Any = Field(default=None, description="Middle name")
    phone_number: Any = Field(default=None, description="Phone number")
    previous_exp: Any = Field(default=None, description="Previous experience")

    def to_params(self) -> dict[str, Any]:
        """Bind parameters in column order."""
        return {name: getattr(self, name) for name in USER_FIELDS}


class User(UserPayload):
    """A stored user row, including its database-assigned identifier."""

    model_config = ConfigDict(extra="allow")

    id: int = Field(description="Database-assigned identifier")

    @model_serializer(mode="wrap")
    def _id_first(self, handler):
        # Rows serialize in table column order
        data = handler(self)
        if "id" not in data:
            return data
        return {"id": data.pop("id"), **data}
