# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskdeck.application.interfaces import Severity, Toast
from taskdeck.shared.logging import logger

_LEVELS = {
    Severity.SUCCESS: "SUCCESS",
    Severity.WARNING: "WARNING",
    Severity.ERROR: "ERROR",
}


class LoguruNotifier:
    """Notifier used when no UI surface is attached: toasts become log lines."""

    def notify(self, toast: Toast) -> None:
        prefix = f"{toast.icon} " if toast.icon else ""
        logger.log(_LEVELS[toast.severity], f"toast: {prefix}{toast.message}")


__all__ = ["LoguruNotifier"]
