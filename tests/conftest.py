"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from porefect_cli.models import UserSession


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Keep config, credentials and logs inside *tmp_path*."""
    import porefect_cli.config as config_mod
    import porefect_cli.utils.logger as logger_mod
    from porefect_cli.ui import formatters

    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")
    log_dir = str(tmp_path / "logs")

    config_mod._config_manager = None
    original_logger = logger_mod._logger
    logger_mod._logger = None
    with patch("porefect_cli.config.user_config_dir", return_value=config_dir):
        with patch("porefect_cli.config.user_data_dir", return_value=data_dir):
            with patch("porefect_cli.utils.logger.user_log_dir", return_value=log_dir):
                yield tmp_path
    config_mod._config_manager = None
    logger_mod._logger = original_logger
    formatters.console.no_color = False


# ---------------------------------------------------------------------------
# Auth bypass
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def bypass_auth():
    """Skip authentication checks in all tests by default."""
    with patch("porefect_cli.commands.decorators._require_auth"):
        yield


# ---------------------------------------------------------------------------
# Domain helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def session() -> UserSession:
    return UserSession(user_id="user-1", token="tok-abc")


@pytest.fixture()
def mock_tasks_api():
    """Tasks API double with every endpoint as an AsyncMock."""
    api = MagicMock()
    api.list_tasks = AsyncMock(return_value=[])
    api.tasks_for_date = AsyncMock(return_value=[])
    api.create_task = AsyncMock()
    api.complete_task = AsyncMock(return_value={})
    api.uncomplete_task = AsyncMock(return_value={})
    return api
