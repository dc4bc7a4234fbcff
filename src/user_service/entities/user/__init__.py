"""User entity module.

- User / UserPayload: Domain models
- UserTable: Database persistence model
- UserRepository: Data access layer
"""

from .entity import USER_FIELDS, User, UserPayload
from .repository import UserRepository
from .table import UserTable

__all__ = ["USER_FIELDS", "User", "UserPayload", "UserRepository", "UserTable"]
