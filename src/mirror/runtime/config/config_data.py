"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal
from urllib.parse import quote_plus, urlsplit, urlunsplit

from loguru import logger
from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Document database configuration model."""

    backend: Literal["mongodb", "memory"] = Field(
        default="mongodb", description="Document store backend"
    )
    url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL without credentials",
    )
    username: str | None = Field(default=None, description="Database username")
    app_db: str = Field(default="node_assignment_db", description="Database name")
    server_selection_timeout_ms: int = Field(
        default=5000, description="Server selection timeout in milliseconds"
    )
    password_env_var: str | None = Field(
        default="MONGO_PASSWORD",
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @property
    def password(self) -> str | None:
        """
        Get the database password from the appropriate source.

        The mounted secrets file wins over the environment variable. The
        password is never read from the URL itself.
        """
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e
        if self.password_env_var:
            return os.getenv(self.password_env_var) or None
        return None

    @property
    def connection_string(self) -> str:
        """Construct the MongoDB connection string with credentials if provided."""
        parts = urlsplit(self.url)
        if "@" in parts.netloc:
            logger.warning(
                "Database URL already carries credentials; "
                "consider using a secrets file or environment variable."
            )
            return self.url

        if not self.username:
            return self.url

        credentials = quote_plus(self.username)
        password = self.password
        if password:
            credentials = f"{credentials}:{quote_plus(password)}"
        else:
            logger.warning("No database password available for user '{}'", self.username)

        return urlunsplit(parts._replace(netloc=f"{credentials}@{parts.netloc}"))

    @property
    def sanitized_connection_string(self) -> str:
        """Connection string with the password masked, safe for logs."""
        connection_string = self.connection_string
        parts = urlsplit(connection_string)
        if parts.password is None:
            return connection_string
        userinfo, _, hosts = parts.netloc.rpartition("@")
        username = userinfo.split(":", 1)[0]
        return urlunsplit(parts._replace(netloc=f"{username}:***@{hosts}"))


class UpstreamConfig(BaseModel):
    """Upstream placeholder API configuration."""

    base_url: str = Field(
        default="https://jsonplaceholder.typicode.com",
        description="Base URL of the read-only placeholder API",
    )
    timeout_seconds: float = Field(
        default=30.0, description="Timeout for each upstream request in seconds"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=3000, description="Application port")


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    upstream: UpstreamConfig = Field(
        default_factory=UpstreamConfig, description="Upstream API configuration"
    )
