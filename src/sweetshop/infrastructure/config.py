"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from sweetshop.domain.model.product import DEFAULT_CATEGORIES


class Settings(BaseSettings):
    """Application settings loaded from ``SWEETSHOP_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SWEETSHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///sweetshop.db"
    sql_echo: bool = False

    # Catalog
    categories: list[str] = list(DEFAULT_CATEGORIES)
    catalog_cache: bool = True

    # Auth collaborator stand-in: user ids that hold the admin capability
    admin_users: list[str] = ["admin"]

    # Logging
    log_level: str = "INFO"


settings = Settings()
