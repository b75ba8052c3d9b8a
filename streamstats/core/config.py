from typing import Optional
from enum import Enum

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings


class BaseConfig(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True
    }

class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

class CompressionType(str, Enum):
    GZIP = "gz"
    BZIP2 = "bz2"
    ZIP = "zip"

class AppSettings(BaseSettings):
    app_name: str = Field(
        default="streamstats",
        min_length=1,
        max_length=100,
        alias="APP_NAME"
    )
    app_log_level: LogLevel = Field(default=LogLevel.INFO, alias="APP_LOG_LEVEL")
    log_format: str = Field(default="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}")
    log_file: str = Field(default="logs/streamstats.log", alias="LOG_FILE")
    log_rotation: str = Field(default="1 day")
    log_compression: CompressionType = Field(default=CompressionType.GZIP)

    model_config = BaseConfig.model_config

class DatabaseSettings(BaseSettings):
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")
    postgres_user: str = Field(default="postgres", min_length=1, alias="POSTGRES_USER")
    postgres_password: str = Field(default="", alias="POSTGRES_PASSWORD")
    postgres_db: str = Field(default="streaming_analytics", min_length=1, alias="POSTGRES_DB")
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, ge=1, le=65535, alias="POSTGRES_PORT")
    debug_sql: bool = Field(default=False, alias="DEBUG_SQL")

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    model_config = BaseConfig.model_config


class AppUserSettings(BaseSettings):
    app_db_user: str = Field(default="streaming_app", min_length=1, max_length=63, alias="APP_DB_USER")
    app_db_password: SecretStr = Field(..., min_length=8, alias="APP_DB_PASSWORD")

    model_config = BaseConfig.model_config
