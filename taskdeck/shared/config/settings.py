# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class ResilienceConfig(BaseSettings):
    max_retries: int = Field(3, ge=1, alias="RESILIENCE_RETRIES")
    initial_delay: float = Field(1.0, ge=0.0, alias="RESILIENCE_INITIAL_DELAY")
    max_delay: float = Field(10.0, ge=0.0, alias="RESILIENCE_MAX_DELAY")
    default_timeout: float = Field(30.0, gt=0.0, alias="RESILIENCE_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


class ErrorHandlingConfig(BaseSettings):
    show_toast: bool = Field(True, alias="ERRORS_SHOW_TOAST")
    log_to_console: bool = Field(True, alias="ERRORS_LOG")
    redirect_on_auth: bool = Field(False, alias="ERRORS_REDIRECT_ON_AUTH")
    login_path: str = Field("/login", alias="LOGIN_PATH")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @field_validator("show_toast", "log_to_console", "redirect_on_auth", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)


class BackendConfig(BaseSettings):
    url: str = Field("http://localhost:54321", alias="BACKEND_URL")
    anon_key: str = Field("", alias="BACKEND_ANON_KEY")
    request_timeout: float = Field(15.0, gt=0.0, alias="BACKEND_TIMEOUT")
    tasks_table: str = Field("tasks", alias="TASKS_TABLE")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @field_validator("url", mode="after")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        return value.rstrip("/")


def _resilience_config_factory() -> ResilienceConfig:
    return ResilienceConfig()  # type: ignore[call-arg]


def _error_handling_config_factory() -> ErrorHandlingConfig:
    return ErrorHandlingConfig()  # type: ignore[call-arg]


def _backend_config_factory() -> BackendConfig:
    return BackendConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    resilience: ResilienceConfig = Field(default_factory=_resilience_config_factory)
    errors: ErrorHandlingConfig = Field(default_factory=_error_handling_config_factory)
    backend: BackendConfig = Field(default_factory=_backend_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = [
    "AppConfig",
    "BackendConfig",
    "ErrorHandlingConfig",
    "ResilienceConfig",
    "load_config",
]
