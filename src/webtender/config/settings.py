from __future__ import annotations

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from webtender.config.schema import ClientConfig
from webtender.errors import ConfigError

DEFAULT_BASE_URL = "https://api.webtender.host/api"
DEFAULT_TIMEOUT = 30.0


class Settings(BaseSettings):
    # Keep raw env as strings so empty values fall back instead of failing validation
    WEBTENDER_API_BASE_URL: str | None = None
    WEBTENDER_API_KEY: str | None = None
    WEBTENDER_API_SECRET: str | None = None
    WEBTENDER_API_TIMEOUT: str | None = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


def get_settings() -> Settings:
    return Settings()


def _pick(explicit: str | None, env_value: str | None, name: str, fallback: str = "") -> str:
    value = explicit or env_value or fallback
    if not value:
        raise ConfigError(f"{name} is required")
    return value


def _timeout(explicit: float | None, env_value: str | None) -> float:
    # 0 or unset means the default, whichever source it comes from
    if explicit:
        return float(explicit)
    if env_value and env_value.strip():
        try:
            parsed = float(env_value)
        except ValueError as e:
            raise ConfigError(f"WEBTENDER_API_TIMEOUT must be a number: {env_value!r}") from e
        if parsed:
            return parsed
    return DEFAULT_TIMEOUT


def resolve_config(
    *,
    api_key: str | None = None,
    api_secret: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
    settings: Settings | None = None,
) -> ClientConfig:
    """Fill every missing value from settings and validate the result.

    Raises ConfigError naming the environment variable when a required value
    is missing, or describing the first validation failure.
    """
    s = settings if settings is not None else get_settings()
    try:
        return ClientConfig(
            base_url=_pick(base_url, s.WEBTENDER_API_BASE_URL, "WEBTENDER_API_BASE_URL", DEFAULT_BASE_URL),
            api_key=_pick(api_key, s.WEBTENDER_API_KEY, "WEBTENDER_API_KEY"),
            api_secret=_pick(api_secret, s.WEBTENDER_API_SECRET, "WEBTENDER_API_SECRET"),
            timeout=_timeout(timeout, s.WEBTENDER_API_TIMEOUT),
        )
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or "config"
        raise ConfigError(f"invalid {field}: {first.get('msg', 'validation error')}") from e
