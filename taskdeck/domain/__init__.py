# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import TITLE_MAX_LENGTH, Priority, Task

__all__ = [
    "Priority",
    "Task",
    "TITLE_MAX_LENGTH",
]
