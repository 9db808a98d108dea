"""Configuration Management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Compiler settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SITEGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Database
    database_type: Literal["sqlite", "postgres", "mysql"] = Field(
        default="sqlite", description="SQL dialect for schema scripts"
    )

    # Output layout (relative to output_dir)
    output_dir: str = Field(default=".", description="Root directory for generated artifacts")
    views_dir: str = Field(default="src/views", description="View modules directory")
    app_dir: str = Field(default="src/app", description="Route modules directory")
    migrations_dir: str = Field(default="migrations", description="SQL scripts directory")
    styles_path: str = Field(default="src/styles/views.css", description="Collected view CSS")
    theme_path: str = Field(default="src/styles/theme.css", description="Design theme CSS")
    components_import: str = Field(
        default="../components", description="Import prefix of pre-built components, seen from views_dir"
    )

    # Rendering
    menu_collapse_width: int = Field(default=800, gt=0, description="Menu collapse breakpoint (px)")
    cycle_check: Literal["graph", "identity"] = Field(
        default="graph", description="Container cycle detection strategy"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
