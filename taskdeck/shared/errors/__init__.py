from .base import ApplicationError, ErrorKind, is_app_error, is_operational_error
from .handler import (
    AUTH_REDIRECT_DELAY,
    DEFAULT_ERROR_HANDLER_CONFIG,
    ErrorHandlerConfig,
    get_user_message,
    handle_error,
    safe_async,
    toast_style,
    with_error_handling,
)
from .validation import raise_validation_error, validation_error

__all__ = [
    "AUTH_REDIRECT_DELAY",
    "ApplicationError",
    "DEFAULT_ERROR_HANDLER_CONFIG",
    "ErrorHandlerConfig",
    "ErrorKind",
    "get_user_message",
    "handle_error",
    "is_app_error",
    "is_operational_error",
    "raise_validation_error",
    "safe_async",
    "toast_style",
    "validation_error",
    "with_error_handling",
]
