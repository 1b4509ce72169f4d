"""deploy_sql configuration loaded from environment variables."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from deploy_sql.connection import ConnectionType, SqlConnection
from deploy_sql.options import ConnectionOptions
from deploy_sql.registry import ConnectorRegistry, open_connection

logger = logging.getLogger(__name__)


class DeployEnv(str, Enum):
    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with DEPLOY_SQL_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="DEPLOY_SQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    env: DeployEnv = DeployEnv.DEV
    debug: bool = False

    # Logging
    structured_logging: bool = False
    log_level: str = "INFO"

    # Connection
    connection_type: ConnectionType = ConnectionType.MYSQL

    # MySQL -- unset fields stay absent so normalization defaults apply.
    mysql_host: str | None = None
    mysql_port: str | None = None
    mysql_user: str | None = None
    mysql_password: SecretStr | None = None
    mysql_database: str | None = None
    mysql_reject_unauthorized: bool | None = None

    @field_validator("mysql_password", mode="before")
    @classmethod
    def mask_password_in_repr(cls, v: str | None) -> SecretStr | None:
        if v is None:
            return None
        if isinstance(v, SecretStr):
            return v
        return SecretStr(v)

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    def connection_options(self) -> ConnectionOptions:
        """Build sparse :class:`ConnectionOptions` from the ``mysql_*`` fields."""
        password = self.mysql_password.get_secret_value() if self.mysql_password is not None else None
        return ConnectionOptions(
            host=self.mysql_host,
            port=self.mysql_port,
            user=self.mysql_user,
            password=password,
            database=self.mysql_database,
            reject_unauthorized=self.mysql_reject_unauthorized,
        )

    async def open_connection(self, registry: ConnectorRegistry | None = None) -> SqlConnection:
        """Open a ``connection_type`` connection from these settings.

        The caller owns the returned connection and must close it.
        """
        return await open_connection(self.connection_type, [self.connection_options()], registry=registry)


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded settings for environment: %s", settings.env.value)

    return settings
