# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket

import pytest

from reqprobe import config
from reqprobe.errors import (
    ConfigurationError,
    ErrorCategory,
    ProbeConnectionError,
    ReqProbeError,
    ResolutionError,
    categorize_exception,
    error_category_to_reason,
)
from reqprobe.log import resolve_log_level, setup_logging


def test_probe_settings_defaults():
    settings = config.ProbeSettings()
    assert settings.timeout == 30.0
    assert settings.port == 80
    assert settings.buffer_size == 2048
    assert settings.max_hostname_bytes == 255
    assert settings.verbose is False


def test_probe_settings_from_env(monkeypatch):
    monkeypatch.setenv("REQPROBE_TIMEOUT", "2.5")
    monkeypatch.setenv("REQPROBE_PORT", "8080")
    monkeypatch.setenv("REQPROBE_BUFFER_SIZE", "512")
    monkeypatch.setenv("REQPROBE_VERBOSE", "yes")
    settings = config.load_probe_settings()
    assert settings.timeout == 2.5
    assert settings.port == 8080
    assert settings.buffer_size == 512
    assert settings.verbose is True


def test_probe_settings_verbose_flag_values(monkeypatch):
    for raw, expected in [("1", True), (" On ", True), ("false", False), ("", False)]:
        monkeypatch.setenv("REQPROBE_VERBOSE", raw)
        assert config.load_probe_settings().verbose is expected


def test_probe_settings_invalid_env_falls_back(monkeypatch):
    monkeypatch.setenv("REQPROBE_TIMEOUT", "soon")
    monkeypatch.setenv("REQPROBE_PORT", "99999")
    monkeypatch.setenv("REQPROBE_BUFFER_SIZE", "0")
    monkeypatch.setenv("REQPROBE_MAX_PATH_BYTES", "-1")
    settings = config.load_probe_settings()
    assert settings.timeout == config.ProbeSettings.timeout
    assert settings.port == config.ProbeSettings.port
    assert settings.buffer_size == config.ProbeSettings.buffer_size
    assert settings.max_path_bytes == config.ProbeSettings.max_path_bytes


def test_load_probe_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("REQPROBE_TIMEOUT", "7.7")
    assert config.load_probe_settings().timeout == 7.7
    monkeypatch.setenv("REQPROBE_TIMEOUT", "8.8")
    assert config.load_probe_settings().timeout == 8.8


def test_probe_settings_are_immutable():
    settings = config.ProbeSettings()
    with pytest.raises(AttributeError):
        settings.verbose = True  # type: ignore[misc]


def test_exception_hierarchy():
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(ProbeConnectionError, ConnectionError)
    err = ResolutionError("example.invalid", "boom")
    assert isinstance(err, ReqProbeError)
    assert str(err) == "cannot resolve example.invalid: boom"


@pytest.mark.parametrize(
    "exc,default,expected",
    [
        (socket.timeout("timed out"), ErrorCategory.RECEIVE_ERROR, ErrorCategory.TIMEOUT),
        (TimeoutError("deadline"), ErrorCategory.SEND_ERROR, ErrorCategory.TIMEOUT),
        (ConnectionRefusedError("refused"), ErrorCategory.CONNECT_ERROR, ErrorCategory.CONNECT_ERROR),
        (BrokenPipeError("pipe"), ErrorCategory.SEND_ERROR, ErrorCategory.SEND_ERROR),
        (ConnectionResetError("reset"), ErrorCategory.RECEIVE_ERROR, ErrorCategory.RECEIVE_ERROR),
        (ProbeConnectionError("x", category=ErrorCategory.TIMEOUT), ErrorCategory.CONNECT_ERROR, ErrorCategory.TIMEOUT),
    ],
)
def test_categorize_exception(exc, default, expected):
    assert categorize_exception(exc, default=default) is expected


def test_error_category_to_reason():
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""
    assert "connect" in error_category_to_reason(ErrorCategory.CONNECT_ERROR).lower()
    for category in ErrorCategory:
        if category is not ErrorCategory.NONE:
            assert error_category_to_reason(category)


def test_setup_logging_accepts_level(monkeypatch):
    calls = []
    monkeypatch.delenv("REQPROBE_LOG_LEVEL", raising=False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    assert setup_logging("debug") == logging.DEBUG
    assert setup_logging("not-a-level") == logging.WARNING
    assert calls[0]["level"] == logging.DEBUG
    assert calls[1]["level"] == logging.WARNING


def test_log_level_precedence(monkeypatch):
    monkeypatch.delenv("REQPROBE_LOG_LEVEL", raising=False)
    assert resolve_log_level() == logging.WARNING

    monkeypatch.setenv("REQPROBE_LOG_LEVEL", "info")
    assert resolve_log_level() == logging.INFO
    assert resolve_log_level("error") == logging.ERROR
    assert resolve_log_level("bogus") == logging.INFO

    monkeypatch.setenv("REQPROBE_LOG_LEVEL", "bogus")
    assert resolve_log_level() == logging.WARNING


def test_cli_log_level_overrides_environment(monkeypatch):
    from reqprobe.cli import main as cli_main

    applied = []
    monkeypatch.setenv("REQPROBE_LOG_LEVEL", "info")
    monkeypatch.setattr(cli_main, "setup_logging", lambda level=None: applied.append(resolve_log_level(level)))

    def reject(*_args):
        raise ConfigurationError("stop before any network work")

    monkeypatch.setattr(cli_main, "parse_target", reject)
    with pytest.raises(SystemExit):
        cli_main.main(["-u", "example.com", "-p", "1", "--log-level", "debug"])
    assert applied == [logging.DEBUG]
