from __future__ import annotations
import logging
import os
import functools
import yaml
from pathlib import Path
from typing import Dict, Mapping, Optional
from pydantic import BaseModel

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "config" / "settings.yaml"

ENV_VAR = "SCHOOL_PORTAL_ENV"
API_URL_VAR = "SCHOOL_PORTAL_API_URL"
API_TIMEOUT_VAR = "SCHOOL_PORTAL_API_TIMEOUT"
DEBUG_VAR = "SCHOOL_PORTAL_DEBUG"

FALLBACK_ENVIRONMENT = "development"

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    name: str
    version: str = "1.0.0"
    environment: str = FALLBACK_ENVIRONMENT
    debug: bool = False
    page_size: int = 20


class ApiEnvironment(BaseModel):
    name: str
    base_url: str
    timeout_ms: int = 30000

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


class ApiConfig(BaseModel):
    environments: Dict[str, ApiEnvironment]


class LoggingConfig(BaseModel):
    level: str = "INFO"
    http_client_debug: bool = False


class UploadsConfig(BaseModel):
    max_csv_bytes: int = 5 * 1024 * 1024


class Settings(BaseModel):
    app: AppConfig
    api: ApiConfig
    logging: LoggingConfig = LoggingConfig()
    uploads: UploadsConfig = UploadsConfig()

    @property
    def debug(self) -> bool:
        return self.app.debug

    def environment_names(self) -> list[str]:
        return list(self.api.environments.keys())

    def api_environment(self, name: Optional[str] = None) -> ApiEnvironment:
        """Config for `name`, falling back to the configured default, then development."""
        envs = self.api.environments
        for candidate in (name, self.app.environment, FALLBACK_ENVIRONMENT):
            if candidate and candidate in envs:
                return envs[candidate]
        raise KeyError(f"No API environment configured (asked for {name!r})")


def _truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _apply_env_overrides(settings: Settings, environ: Mapping[str, str]) -> Settings:
    env_name = (environ.get(ENV_VAR) or "").strip()
    if env_name:
        settings.app.environment = env_name

    if environ.get(DEBUG_VAR):
        settings.app.debug = _truthy(environ[DEBUG_VAR])

    url = (environ.get(API_URL_VAR) or "").strip()
    timeout = (environ.get(API_TIMEOUT_VAR) or "").strip()
    if url or timeout:
        active = settings.app.environment
        current = settings.api.environments.get(active) or settings.api_environment(active)
        update = {}
        if url:
            update["base_url"] = url.rstrip("/")
        if timeout:
            try:
                update["timeout_ms"] = int(timeout)
            except ValueError:
                logger.warning("Ignoring %s=%r: not a whole number of milliseconds", API_TIMEOUT_VAR, timeout)
        settings.api.environments[active] = current.model_copy(update=update)
    return settings


def load_settings(
    path: str | Path = DEFAULT_SETTINGS_PATH,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    settings = Settings(
        app=AppConfig(**data["app"]),
        api=ApiConfig(**data["api"]),
        logging=LoggingConfig(**(data.get("logging") or {})),
        uploads=UploadsConfig(**(data.get("uploads") or {})),
    )
    return _apply_env_overrides(settings, os.environ if environ is None else environ)


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings loaded from the default path."""
    return load_settings()
