from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_NAME: str = "datagrids"
    DATABASE_USER: str = "datagrids"
    DATABASE_PASSWORD: str = "datagrids"
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432

    # Full SQLAlchemy URL, takes precedence over the DATABASE_* parts (e.g. sqlite for local runs)
    DATABASE_URL_OVERRIDE: str | None = None
    DATABASE_ECHO: bool = False

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+psycopg2://{self.DATABASE_USER}:"
            f"{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}:"
            f"{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    # Row payload validation
    # Reject payload keys that have no matching column (default: pass through)
    DATAGRID_REJECT_UNKNOWN_KEYS: bool = False
    # Strip a deleted column's key from existing row data (default: leave it in place)
    DATAGRID_PRUNE_ORPHANED_KEYS: bool = False

    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    DEBUG: bool = False

    # Sentry error tracking
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str = "development"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
