# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AppConfig,
    BackendConfig,
    ErrorHandlingConfig,
    ResilienceConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "BackendConfig",
    "ErrorHandlingConfig",
    "ResilienceConfig",
    "load_config",
]
