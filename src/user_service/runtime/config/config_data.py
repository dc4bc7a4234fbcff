"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field
from sqlalchemy.engine import URL, make_url

# Fallbacks used when neither config.yaml nor the environment supplies a value
DEFAULT_DB_HOST = "localhost"
DEFAULT_DB_USER = "root"
DEFAULT_DB_PASSWORD = ""
DEFAULT_DB_NAME = "users_db"


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(
        default=None, description="Log file path (no file sink when empty)"
    )
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model.

    Either ``url`` is given as a complete SQLAlchemy URL, or the connection
    string is assembled from ``driver``, ``host``, ``port``, ``user``,
    ``password`` and ``name``.
    """

    url: str | None = Field(
        default=None, description="Full SQLAlchemy URL; overrides the parts below"
    )
    driver: str = Field(default="mysql+pymysql", description="SQLAlchemy dialect+driver")
    host: str = Field(default=DEFAULT_DB_HOST, description="Database host")
    port: int = Field(default=3306, description="Database port")
    user: str = Field(default=DEFAULT_DB_USER, description="Database username")
    password: str = Field(default=DEFAULT_DB_PASSWORD, description="Database password")
    name: str = Field(default=DEFAULT_DB_NAME, description="Database name")
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string."""
        if self.url:
            return self.url

        url = URL.create(
            self.driver,
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name,
        )
        # Render manually to avoid SQLAlchemy's password masking
        return url.render_as_string(hide_password=False)

    @property
    def safe_connection_string(self) -> str:
        """Connection string with the password masked, for logs."""
        return make_url(self.connection_string).render_as_string(hide_password=True)

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.connection_string).get_backend_name() == "sqlite"

    def warn_on_default_credentials(self, environment: str) -> None:
        """Flag hardcoded fallback credentials outside development."""
        if environment != "production" or self.url:
            return
        if self.user == DEFAULT_DB_USER and self.password == DEFAULT_DB_PASSWORD:
            logger.warning(
                "Database credentials fall back to built-in defaults in production; "
                "set MYSQL_USER and MYSQL_PASSWORD."
            )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=3000, description="Application port")

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        host = "localhost" if self.host == "0.0.0.0" else self.host
        return f"http://{host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
