"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from todo_api.config import DEFAULT_TODO_FILE, Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.todo_file == DEFAULT_TODO_FILE
        assert settings.port == 8080
        assert settings.log_file is None
        assert settings.lock_timeout is None

    def test_from_env(self):
        settings = Settings.from_env({
            "TODO_FILE": "/data/todo.json",
            "TODO_HOST": "127.0.0.1",
            "TODO_PORT": "9000",
            "TODO_LOG_LEVEL": "debug",
            "TODO_LOG_FILE": "/var/log/todo.log",
            "TODO_LOCK_TIMEOUT": "2.5",
        })
        assert settings.todo_file == "/data/todo.json"
        assert settings.host == "127.0.0.1"
        assert settings.port == 9000
        assert settings.log_level == "debug"
        assert settings.log_file == "/var/log/todo.log"
        assert settings.lock_timeout == 2.5

    def test_empty_values_use_defaults(self):
        assert Settings.from_env({"TODO_PORT": ""}).port == 8080

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("TODO_FILE", "from-env.json")
        assert Settings.from_env().todo_file == "from-env.json"

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            Settings.from_env({"TODO_PORT": "eighty"})
