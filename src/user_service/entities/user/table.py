"""User database table model."""

from sqlmodel import Field, SQLModel


class UserTable(SQLModel, table=True):
    """Schema of the ``users`` table.

    Only used to bootstrap the schema; reads and writes go through the
    fixed statements in ``UserRepository``.
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    designation: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=255)
    is_admin: bool | None = Field(default=None)
    last_name: str | None = Field(default=None, max_length=255)
    middle_name: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=50)
    previous_exp: str | None = Field(default=None, max_length=255)
