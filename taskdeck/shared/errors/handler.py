# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Terminal error sink: log, notify, and react to a caught error."""

from __future__ import annotations

import asyncio
import functools
import threading
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any, ParamSpec, TypeVar

from taskdeck.application.interfaces import Navigator, Notifier, Severity, Toast
from taskdeck.infrastructure.notifications import LoguruNotifier
from taskdeck.shared.config import load_config
from taskdeck.shared.logging import logger

from .base import ApplicationError, ErrorKind, is_app_error

P = ParamSpec("P")
T = TypeVar("T")

AUTH_REDIRECT_DELAY = 2.0
WARNING_ICON = "⚠️"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"

_AUTH_KINDS = frozenset({ErrorKind.AUTHENTICATION, ErrorKind.SESSION_EXPIRED})

# (substrings, user-facing copy), checked in order against the lowercased message
_USER_MESSAGES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("fetch",), "Network error. Please check your connection and try again."),
    (("timeout",), "Request timed out. Please try again."),
    (("network",), "Network error. Please check your internet connection."),
    (("jwt", "token"), "Your session has expired. Please sign in again."),
    (("not found",), "The requested resource was not found."),
    (("permission", "unauthorized"), "You do not have permission to perform this action."),
)
FALLBACK_MESSAGE = "An unexpected error occurred. Please try again."


@dataclass(frozen=True, slots=True)
class ErrorHandlerConfig:
    show_toast: bool = True
    log_to_console: bool = True
    redirect_on_auth: bool = False
    on_error: Callable[[BaseException], None] | None = None
    notifier: Notifier = field(default_factory=LoguruNotifier)
    navigator: Navigator | None = None
    login_path: str = "/login"

    @classmethod
    def from_settings(cls, **overrides: Any) -> ErrorHandlerConfig:
        settings = load_config().errors
        values: dict[str, Any] = {
            "show_toast": settings.show_toast,
            "log_to_console": settings.log_to_console,
            "redirect_on_auth": settings.redirect_on_auth,
            "login_path": settings.login_path,
        }
        values.update(overrides)
        return cls(**values)


DEFAULT_ERROR_HANDLER_CONFIG = ErrorHandlerConfig()

ConfigOverrides = ErrorHandlerConfig | Mapping[str, Any] | None


def resolve_config(config: ConfigOverrides = None) -> ErrorHandlerConfig:
    """Merge per-call overrides over the immutable defaults."""
    if config is None:
        return DEFAULT_ERROR_HANDLER_CONFIG
    if isinstance(config, ErrorHandlerConfig):
        return config
    return replace(DEFAULT_ERROR_HANDLER_CONFIG, **dict(config))


def normalize_error(error: object) -> BaseException:
    if isinstance(error, BaseException):
        return error
    if isinstance(error, str):
        return Exception(error)
    return Exception(UNKNOWN_ERROR_MESSAGE)


def get_user_message(error: BaseException) -> str:
    if isinstance(error, ApplicationError):
        return error.message

    text = str(error).lower()
    for needles, copy in _USER_MESSAGES:
        if any(needle in text for needle in needles):
            return copy
    return FALLBACK_MESSAGE


def toast_style(error: BaseException) -> tuple[Severity, str | None]:
    if not isinstance(error, ApplicationError):
        return Severity.ERROR, None
    status = error.status_code
    if status >= 500 or status in (401, 403):
        return Severity.ERROR, None
    if status >= 400:
        return Severity.WARNING, WARNING_ICON
    return Severity.ERROR, None


def _log_error(error: BaseException, context: str | None) -> None:
    prefix = f"[{context}]" if context else "[Error]"
    lines = [
        f"{prefix} {datetime.now(UTC).isoformat()}",
        f"  Message: {error}",
        f"  Name: {error.name if isinstance(error, ApplicationError) else type(error).__name__}",
    ]
    if isinstance(error, ApplicationError):
        lines.append(f"  Status Code: {error.status_code}")
        lines.append(f"  Operational: {error.is_operational}")

    exception = error if error.__traceback__ is not None else None
    logger.opt(exception=exception).error("\n".join(lines))


def _schedule_redirect(navigator: Navigator, path: str) -> None:
    def _go() -> None:
        try:
            navigator.navigate(path)
        except Exception:
            logger.exception(f"errors: redirect to {path} failed")

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        timer = threading.Timer(AUTH_REDIRECT_DELAY, _go)
        timer.daemon = True
        timer.start()
    else:
        loop.call_later(AUTH_REDIRECT_DELAY, _go)
    logger.info(f"errors: redirect to {path} in {AUTH_REDIRECT_DELAY:.0f}s")


def handle_error(
    error: object,
    context: str | None = None,
    config: ConfigOverrides = None,
) -> None:
    """Log, notify and react to ``error``. Never raises."""

    app_error = normalize_error(error)
    try:
        cfg = resolve_config(config)
    except TypeError:
        logger.exception("errors: invalid handler config, falling back to defaults")
        cfg = DEFAULT_ERROR_HANDLER_CONFIG

    if cfg.log_to_console:
        try:
            _log_error(app_error, context)
        except Exception:  # pragma: no cover - logging sinks failing
            pass

    if cfg.show_toast:
        severity, icon = toast_style(app_error)
        try:
            cfg.notifier.notify(Toast(get_user_message(app_error), severity, icon))
        except Exception:
            logger.exception("errors: notifier failed")

    if cfg.on_error is not None:
        try:
            cfg.on_error(app_error)
        except Exception:
            logger.exception("errors: on_error callback failed")

    if (
        is_app_error(app_error)
        and app_error.kind in _AUTH_KINDS  # type: ignore[attr-defined]
        and cfg.redirect_on_auth
        and cfg.navigator is not None
    ):
        try:
            _schedule_redirect(cfg.navigator, cfg.login_path)
        except Exception:
            logger.exception("errors: could not schedule auth redirect")


def with_error_handling(
    fn: Callable[P, Awaitable[T]],
    context: str | None = None,
    config: ConfigOverrides = None,
) -> Callable[P, Awaitable[T]]:
    """Route failures of ``fn`` through :func:`handle_error`, then re-raise."""

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await fn(*args, **kwargs)
        except Exception as exc:
            handle_error(exc, context, config)
            raise

    return wrapper


async def safe_async(
    operation: Awaitable[T],
) -> tuple[Exception, None] | tuple[None, T]:
    try:
        data = await operation
    except Exception as exc:
        return exc, None
    return None, data


__all__ = [
    "AUTH_REDIRECT_DELAY",
    "DEFAULT_ERROR_HANDLER_CONFIG",
    "ErrorHandlerConfig",
    "get_user_message",
    "handle_error",
    "normalize_error",
    "resolve_config",
    "safe_async",
    "toast_style",
    "with_error_handling",
]
