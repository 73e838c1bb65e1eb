"""Shared fixtures for mdkanban tests."""

import pytest

from mdkanban.commands import KanbanService
from mdkanban.config import AppConfig


@pytest.fixture
def app_config(tmp_path):
    """Config pointing both roots into a fresh temp directory."""
    return AppConfig(
        config_dir=str(tmp_path / "config"),
        tasks_dir=str(tmp_path / "tasks"),
        title="Test Boards",
        poll_interval=0.05,
    )


@pytest.fixture
def service(app_config):
    svc = KanbanService(app_config)
    yield svc
    handle = svc.watcher._handle
    if handle is not None:
        handle.cancel()
        handle.join(timeout=2)


@pytest.fixture
def tasks_dir(app_config):
    return app_config.tasks_path
