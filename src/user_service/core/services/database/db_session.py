"""Database engine and session factory shared by every request."""

from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from src.user_service.runtime.config.config_data import DatabaseConfig
from src.user_service.runtime.context import get_config


class DbSessionService:
    """Owns the application's single engine (the pooled connection handle).

    The service is created once at startup and disposed at shutdown. Requests
    borrow a session from it and never open connections of their own.
    """

    def __init__(
        self,
        db_config: DatabaseConfig | None = None,
        *,
        engine: Engine | None = None,
    ) -> None:
        if engine is None:
            engine = self._create_engine(db_config or get_config().database)
        self._engine = engine

    @staticmethod
    def _create_engine(db_config: DatabaseConfig) -> Engine:
        logger.info(
            "Initializing database engine for {}", db_config.safe_connection_string
        )
        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "pool_pre_ping": True,  # Validate connections before use
            "connect_args": DbSessionService._get_connect_args(db_config),
        }

        if not db_config.is_sqlite:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        return create_engine(db_config.connection_string, **engine_kwargs)

    @staticmethod
    def _get_connect_args(db_config: DatabaseConfig) -> dict:
        """Get database-specific connection arguments."""
        if db_config.is_sqlite:
            return {
                "check_same_thread": False,  # Sessions are used from the threadpool
                "timeout": 20,  # Lock timeout
            }
        return {"charset": "utf8mb4"} if "mysql" in db_config.connection_string else {}

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def target(self) -> str:
        """Database URL with the password masked."""
        return self._engine.url.render_as_string(hide_password=True)

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False)

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def dispose(self) -> None:
        """Close every pooled connection."""
        logger.info("Closing database connections for {}", self.target)
        self._engine.dispose()
