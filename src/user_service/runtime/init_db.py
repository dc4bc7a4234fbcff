"""Database initialization script."""

from src.user_service.core.services import DbManageService, DbSessionService


def init_db(database_service: DbSessionService | None = None) -> None:
    """Create the users table if it does not exist."""
    service = database_service or DbSessionService()
    try:
        DbManageService(service.engine).create_all()
    finally:
        if database_service is None:
            service.dispose()


if __name__ == "__main__":
    init_db()
