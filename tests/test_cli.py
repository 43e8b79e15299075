"""Tests for the process entry point."""

from unittest.mock import patch

import pytest

from shortener import cli
from shortener.core.config import EnvironmentType, Settings, StoreBackend


def test_missing_database_url_aborts_before_serving():
    config = Settings(
        ENVIRONMENT=EnvironmentType.TESTING,
        STORE_BACKEND=StoreBackend.DATABASE,
        DATABASE_URL=None,
    )

    with patch.object(cli, "setup_logging"), patch.object(cli.uvicorn, "run") as run_server:
        with pytest.raises(SystemExit) as excinfo:
            cli.run(config)

    assert excinfo.value.code == 1
    run_server.assert_not_called()


def test_valid_config_starts_server():
    config = Settings(
        ENVIRONMENT=EnvironmentType.TESTING,
        STORE_BACKEND=StoreBackend.MEMORY,
        PORT=4000,
    )

    with patch.object(cli, "setup_logging"), patch.object(cli.uvicorn, "run") as run_server:
        cli.run(config)

    run_server.assert_called_once()
    assert run_server.call_args.kwargs["port"] == 4000
