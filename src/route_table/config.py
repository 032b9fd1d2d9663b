"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Callable, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_tuple(value: Any, cast: Callable[[Any], Any]) -> tuple:
    """Tuple from an env value: a JSON array, a comma-separated list or a single item."""
    if isinstance(value, tuple):
        return value
    if isinstance(value, list):
        return tuple(cast(item) for item in value)
    if not isinstance(value, str) or not value.strip():
        return tuple()
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = None
    if isinstance(parsed, list):
        return tuple(cast(item) for item in parsed)
    return tuple(cast(item.strip()) for item in value.split(",") if item.strip())


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTE_TABLE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Delivery Route Table API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    rows_file: Path = Field(
        default=Path("data/table_rows.csv"),
        description="Seed file (.csv or .xlsx) used when the database is not configured.",
    )
    hub_location: str = Field(
        default="QL Kitchen",
        description="Location name of the depot row pinned to the top and used as the return point.",
    )
    timezone: str = Field(
        default="Asia/Kuala_Lumpur",
        description="IANA timezone used to resolve the current delivery weekday.",
    )
    default_page_size: int = Field(default=10, ge=1)
    page_size_options: tuple[int, ...] = Field(
        default=(10, 30, 50, 100),
        description="Page sizes offered to table clients.",
    )
    page_window_size: int = Field(default=6, ge=1, description="Number of page buttons shown at once.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5000",
            "http://127.0.0.1:5000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    rows_table: str = Field(default="table_rows", description="Table holding the delivery rows.")

    @field_validator("data_root", "rows_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: Any) -> tuple[str, ...]:
        return _parse_tuple(value, str)

    @field_validator("page_size_options", mode="before")
    @classmethod
    def _parse_page_sizes(cls, value: Any) -> tuple[int, ...]:
        return _parse_tuple(value, int)


settings = Settings()
