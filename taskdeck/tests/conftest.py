from __future__ import annotations

import pytest

from taskdeck.application.interfaces import Toast
from taskdeck.infrastructure.connectivity import set_online
from taskdeck.shared.config import load_config
from taskdeck.shared.errors import ErrorHandlerConfig


class RecordingNotifier:
    def __init__(self) -> None:
        self.toasts: list[Toast] = []

    def notify(self, toast: Toast) -> None:
        self.toasts.append(toast)

    @property
    def messages(self) -> list[str]:
        return [toast.message for toast in self.toasts]


class RecordingNavigator:
    def __init__(self) -> None:
        self.paths: list[str] = []

    def navigate(self, path: str) -> None:
        self.paths.append(path)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture()
def error_config(
    notifier: RecordingNotifier, navigator: RecordingNavigator
) -> ErrorHandlerConfig:
    return ErrorHandlerConfig(
        log_to_console=False,
        notifier=notifier,
        navigator=navigator,
    )


@pytest.fixture(autouse=True)
def _isolated_environment():
    load_config.cache_clear()
    set_online(True)
    yield
    set_online(True)
    load_config.cache_clear()
