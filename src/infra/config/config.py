from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from infra.utils.version import get_version


class LoggingConfig(BaseModel):
    LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    JSON_FORMAT: bool = False
    LIBRARY_LOG_LEVELS: dict[str, str | int] = Field(default_factory=dict)


class DatabaseConfig(BaseModel):
    DRIVER: Literal["postgres", "sqlite"] = "postgres"
    SQLITE_PATH: str = "./uptime_status.db"

    USER: str | None = None
    PASSWORD: str | None = None
    HOST: str | None = None
    PORT: int | None = None
    DATABASE: str | None = None
    ECHO: bool = False
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_TIMEOUT: int = 30
    POOL_RECYCLE: int = 1800

    @model_validator(mode="after")
    def validate_required_postgres_fields(self) -> "DatabaseConfig":
        if self.DRIVER == "sqlite":
            return self

        required_fields = {
            "USER": self.USER,
            "PASSWORD": self.PASSWORD,
            "HOST": self.HOST,
            "PORT": self.PORT,
            "DATABASE": self.DATABASE,
        }
        missing_fields = [field_name for field_name, value in required_fields.items() if value in (None, "")]

        if missing_fields:
            raise ValueError(
                f"DATABASE_CONFIG fields required when DRIVER=postgres: {', '.join(missing_fields)}"
            )

        return self


class ProbeConfig(BaseModel):
    TIMEOUT_MS: int = Field(default=10_000, gt=0)
    MAX_ATTEMPTS: int = Field(default=3, ge=1)
    RETRY_DELAY_MS: int = Field(default=1_000, ge=0)
    BACKOFF_MULTIPLIER: float = Field(default=1.0, ge=1.0)
    USER_AGENT: str = "StatusPage-HealthCheck/1.0"


class NotificationConfig(BaseModel):
    TELEGRAM_TOKEN: Optional[SecretStr] = None
    TELEGRAM_CHAT_ID: Optional[str] = None
    API_BASE_URL: str = "https://api.telegram.org"
    TIMEOUT_MS: int = Field(default=10_000, gt=0)
    NOTIFY_ON_FIRST_CHECK: bool = False


class Config(BaseSettings):
    APP_NAME: str = "uptime-status-page"
    VERSION: str = get_version()
    ENVIRONMENT: Literal["loc", "dev", "pre", "pro"] = "dev"
    ROOT_PATH: str = ""

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    LOGGING_CONFIG: LoggingConfig = LoggingConfig()
    DATABASE_CONFIG: DatabaseConfig
    PROBE_CONFIG: ProbeConfig = ProbeConfig()
    NOTIFICATION_CONFIG: NotificationConfig = NotificationConfig()

    SWEEP_INTERVAL_SECONDS: int = Field(default=60, gt=0)
    SWEEP_CONCURRENCY: int = Field(default=5, ge=1)
    CHANGELOG_WINDOW_HOURS: int = Field(default=24, gt=0)
    SHUTDOWN_GRACE_SECONDS: float = Field(default=10.0, ge=0)

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_nested_delimiter="__",
    )


@lru_cache
def get_config() -> Config:
    return Config()  # type: ignore
