"""Application configuration.

Settings are read from environment variables named ASSET_PLANNER_<FIELD>;
a mapping passed to create_app() wins over the environment. Keys that are
not settings (TESTING, ...) are handed to Flask untouched.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from backend.constants import DEFAULT_ASSET_CATEGORIES, DEFAULT_ITERATIONS

ENV_PREFIX = "ASSET_PLANNER_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    CORS_ORIGINS: Annotated[List[str], NoDecode] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    LOG_LEVEL: LogLevel = "INFO"

    MONTE_CARLO_DEFAULT_ITERATIONS: int = Field(DEFAULT_ITERATIONS, gt=0)
    MONTE_CARLO_MAX_ITERATIONS: int = Field(10_000, gt=0)
    MONTE_CARLO_MAX_YEARS: int = Field(100, gt=0)

    # None accepts any category label.
    ASSET_CATEGORIES: Annotated[Optional[List[str]], NoDecode] = list(DEFAULT_ASSET_CATEGORIES)

    @field_validator("CORS_ORIGINS", "ASSET_CATEGORIES", mode="before")
    @classmethod
    def split_comma_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


def load_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Resolve Settings (defaults, then environment, then overrides) into a Flask config mapping."""
    overrides = dict(overrides or {})
    known = {key: overrides.pop(key) for key in list(overrides) if key in Settings.model_fields}
    settings = Settings(**known)
    return {**settings.model_dump(), **overrides}
