"""
Settings for opening a named-statement database from the environment.

All fields can be set via NAMEDSQL_* environment variables or a .env file.
"""

from typing import Any

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NAMEDSQL_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    DB_DRIVER: str = "sqlite"
    # Everything after "://" in the SQLAlchemy URL; forwarded verbatim.
    DB_DSN: str = ""
    SQL_PATH: str = "sql/**/*.sql"

    DB_ECHO: bool = False
    DB_POOL_PRE_PING: bool = True
    DB_POOL_SIZE: int | None = None
    DB_POOL_RECYCLE_SEC: int | None = None

    LOG_LEVEL: str = "INFO"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        return f"{self.DB_DRIVER}://{self.DB_DSN}"

    def engine_options(self) -> dict[str, Any]:
        """Keyword arguments for sqlalchemy.create_engine (unset pool knobs omitted)."""
        opts: dict[str, Any] = {
            "echo": self.DB_ECHO,
            "pool_pre_ping": self.DB_POOL_PRE_PING,
        }
        if self.DB_POOL_SIZE is not None:
            opts["pool_size"] = self.DB_POOL_SIZE
        if self.DB_POOL_RECYCLE_SEC is not None:
            opts["pool_recycle"] = self.DB_POOL_RECYCLE_SEC
        return opts


settings = Settings()
