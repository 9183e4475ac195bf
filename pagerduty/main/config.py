from functools import lru_cache
import os
from typing import Any

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_ENDPOINT = "https://api.pagerduty.com"


class PagerDutyConfig(BaseModel):
    PAGERDUTY_API_ENDPOINT: str = DEFAULT_API_ENDPOINT
    PAGERDUTY_API_TOKEN: str = ""
    PAGERDUTY_TIMEOUT_SECONDS: float = Field(30.0, gt=0)
    PAGERDUTY_PAGE_SIZE: int | None = Field(None, ge=1, le=100)

    model_config = ConfigDict(extra="ignore")

    @field_validator("PAGERDUTY_API_ENDPOINT")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("PAGERDUTY_PAGE_SIZE", mode="before")
    @classmethod
    def empty_page_size_is_default(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_configured(self) -> bool:
        return bool(self.PAGERDUTY_API_TOKEN)


class AppConfig(BaseModel):
    LOG_LEVEL: str = "INFO"
    LOG_LEVEL_FILE: str = "WARNING"
    # File logging is off unless a directory is given
    LOG_DIR: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("LOG_DIR", mode="before")
    @classmethod
    def empty_log_dir_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Config(BaseModel):
    app: AppConfig
    pagerduty: PagerDutyConfig

    model_config = ConfigDict(extra="ignore")


@lru_cache
def get_settings() -> Config:
    """
    Cached settings factory. Override in tests via monkeypatching or cache_clear().
    """
    env_filename = ".env.test" if os.getenv("TESTING") == "true" else ".env"
    env_file_values = dotenv_values(env_filename)
    merged_env: dict[str, Any] = {
        k: v
        for k, v in {**env_file_values, **dict(os.environ)}.items()
        if v is not None
    }

    return Config(
        app=AppConfig(**merged_env),
        pagerduty=PagerDutyConfig(**merged_env),
    )


config = get_settings()
