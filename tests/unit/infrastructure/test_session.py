"""Unit tests for backend configuration handling."""

from unittest.mock import patch

import pytest

from core.config import Settings
from core.exceptions import BackendError
from infrastructure.database import session


@pytest.fixture(autouse=True)
def clear_engine_cache():
    session.get_engine.cache_clear()
    yield
    session.get_engine.cache_clear()


def test_missing_url_fails_on_first_use():
    with patch.object(session, "settings", Settings(_env_file=None, database_url="")):
        with pytest.raises(BackendError) as exc_info:
            session.get_engine()

    assert exc_info.value.status_code == 502


def test_warns_when_unconfigured():
    unconfigured = Settings(_env_file=None, database_url="", database_key="")

    with patch.object(session, "settings", unconfigured), patch.object(session, "logger") as mock_logger:
        assert session.warn_if_unconfigured() is False

    mock_logger.warning.assert_called_once()
    assert mock_logger.warning.call_args.args[0] == "backend_not_configured"


def test_configured_backend_is_silent():
    configured = Settings(
        _env_file=None, database_url="postgresql://postgres@db.example/postgres", database_key="k"
    )

    with patch.object(session, "settings", configured), patch.object(session, "logger") as mock_logger:
        assert session.warn_if_unconfigured() is True

    mock_logger.warning.assert_not_called()
