# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Connectivity flag maintained by the host runtime."""

from __future__ import annotations

import threading

from taskdeck.shared.logging import logger

_online = threading.Event()
_online.set()


def is_online() -> bool:
    return _online.is_set()


def set_online(value: bool) -> None:
    if value == _online.is_set():
        return
    if value:
        _online.set()
        logger.info("connectivity: back online")
    else:
        _online.clear()
        logger.warning("connectivity: offline")


__all__ = ["is_online", "set_online"]
