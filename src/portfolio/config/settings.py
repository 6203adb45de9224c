from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration. DATABASE_URL wins; otherwise the POSTGRES_* parts
    # are assembled; with neither, a local SQLite file is used.
    DATABASE_URL_OVERRIDE: str | None = Field(
        default=None, validation_alias=AliasChoices("DATABASE_URL", "DATABASE_URL_OVERRIDE")
    )
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_HOST: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str | None = None
    SQLITE_PATH: Path = Path("./portfolio.db")

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Auth
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 10
    ADMIN_OPEN_REGISTRATION: bool = True

    # Content
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/portfolio")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Resolve the async database URL.

        Order: explicit DATABASE_URL, then Postgres when host and database are
        configured, then the SQLite fallback (aiosqlite driver).
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        if self.POSTGRES_HOST and self.POSTGRES_DB:
            credentials = ""
            if self.POSTGRES_USERNAME:
                credentials = self.POSTGRES_USERNAME
                if self.POSTGRES_PASSWORD:
                    credentials += f":{self.POSTGRES_PASSWORD}"
                credentials += "@"
            return (
                f"postgresql+{self.POSTGRES_DRIVER}://"
                f"{credentials}{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
                f"{self.POSTGRES_DB}"
            )

        return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str | None:
        """Logging expects upper-case level names ("DEBUG", "INFO")."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        return v.lower() if isinstance(v, str) else v

    model_config = SettingsConfigDict(
        # .env next to the package root (src/portfolio/.env)
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() always returns the same settings from the environment.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
