"""
Tests for the CLI interface.
"""
import logging
import os
import tempfile
from unittest.mock import Mock, patch

import pytest
import redis
import yaml
from typer.testing import CliRunner

from balance_guard.cli.main import app, EXIT_CODE_OK, EXIT_CODE_FAIL
from balance_guard.config.loader import CacheBackend

runner = CliRunner()

KEY = "account1/balance"


@pytest.fixture
def mock_create_store(memory_store):
    """Route CLI store construction to the in-memory store."""
    with patch('balance_guard.cli.main.create_store') as mock:
        mock.return_value = memory_store
        yield mock


class TestCLI:
    """Test CLI commands."""

    def test_no_command_prints_hint(self):
        """Test that invoking without a command prints usage hint."""
        result = runner.invoke(app, [])

        assert result.exit_code == EXIT_CODE_OK
        assert "Use --help" in result.output

    def test_charge_authorized(self, mock_create_store, memory_store):
        """Test charge command with a funded balance."""
        memory_store.balances[KEY] = 100

        result = runner.invoke(app, ["charge"])

        assert result.exit_code == EXIT_CODE_OK
        assert "Authorized: charged 5" in result.output
        assert "Remaining balance: 95" in result.output
        assert memory_store.balances[KEY] == 95

    def test_charge_declined_exits_with_failure(self, mock_create_store, memory_store):
        """Test that a declined charge exits non-zero and leaves balance."""
        memory_store.balances[KEY] = 3

        result = runner.invoke(app, ["charge", "--backend", "memcached"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Declined" in result.output
        assert memory_store.balances[KEY] == 3
        cache_config = mock_create_store.call_args[0][0]
        assert cache_config.backend == CacheBackend.MEMCACHED

    def test_reset(self, mock_create_store, memory_store):
        """Test reset command restores the default balance."""
        memory_store.balances[KEY] = 10

        result = runner.invoke(app, ["reset", "-b", "redis"])

        assert result.exit_code == EXIT_CODE_OK
        assert "Balance reset to 100" in result.output
        assert memory_store.balances[KEY] == 100

    def test_balance(self, mock_create_store, memory_store):
        """Test balance command shows current and default balance."""
        memory_store.balances[KEY] = 45

        result = runner.invoke(app, ["balance"])

        assert result.exit_code == EXIT_CODE_OK
        assert "Balance: 45 / 100" in result.output
        assert "Charge per request: 5" in result.output

    def test_config_file_is_applied(self, mock_create_store, memory_store):
        """Test that --config overrides key and default balance."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = os.path.join(temp_dir, "balance.yaml")
            with open(config_path, 'w', encoding='utf-8') as f:
                yaml.dump({"balance": {"key": "acct/9", "default_balance": 200}}, f)

            result = runner.invoke(app, ["reset", "--config", config_path])

        assert result.exit_code == EXIT_CODE_OK
        assert "Balance reset to 200" in result.output
        assert memory_store.balances == {"acct/9": 200}

    def test_environment_drives_connection(self, mock_create_store, monkeypatch):
        """Test that ENDPOINT and PORT reach the store factory."""
        monkeypatch.setenv("ENDPOINT", "cache.internal")
        monkeypatch.setenv("PORT", "6400")

        runner.invoke(app, ["balance"])

        cache_config = mock_create_store.call_args[0][0]
        assert cache_config.host == "cache.internal"
        assert cache_config.port == 6400

    def test_unknown_backend_fails(self, mock_create_store):
        """Test that an unsupported backend is reported."""
        result = runner.invoke(app, ["charge", "--backend", "dynamodb"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "backend must be one of" in result.output
        mock_create_store.assert_not_called()

    def test_cache_error_fails(self, mock_create_store):
        """Test that cache errors are reported with a failing exit code."""
        mock_create_store.return_value = _failing_store(
            redis.exceptions.ConnectionError("Connection refused")
        )

        result = runner.invoke(app, ["charge"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Connection refused" in result.output

    @pytest.fixture
    def package_logger(self):
        """Package logger, restored to its prior level afterwards."""
        logger = logging.getLogger("balance_guard")
        previous = logger.level
        yield logger
        logger.setLevel(previous)

    def test_verbose_enables_debug_logging(self, mock_create_store, package_logger):
        """Test that -v lowers the package log level to DEBUG."""
        result = runner.invoke(app, ["-v", "balance"])

        assert result.exit_code == EXIT_CODE_OK
        assert package_logger.getEffectiveLevel() == logging.DEBUG

    def test_default_log_level_is_warning(self, mock_create_store, package_logger):
        """Test that without -v only warnings and errors are logged."""
        result = runner.invoke(app, ["balance"])

        assert result.exit_code == EXIT_CODE_OK
        assert package_logger.getEffectiveLevel() == logging.WARNING


def _failing_store(error):
    """Store whose every command raises ``error``."""
    store = Mock()
    store.get_balance.side_effect = error
    store.set_balance.side_effect = error
    store.decrement.side_effect = error
    return store
