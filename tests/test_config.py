"""Tests for environment-driven configuration."""

import logging

import pytest

import config
from config import DEFAULT_API_BASE_URL, configure_logging, get_config

ENV_VARS = (
    "HARVARD_API_KEY",
    "EXPLORER_API_BASE_URL",
    "EXPLORER_BACKEND",
    "EXPLORER_REQUEST_TIMEOUT",
    "EXPLORER_PAGE_SIZE",
    "EXPLORER_CLEAR_FEATURE_ON_SEARCH",
    "EXPLORER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # No secrets file in tests
    monkeypatch.setattr(config, "_read_api_key", lambda: config.os.environ.get("HARVARD_API_KEY", "").strip())


def test_defaults_without_key():
    cfg = get_config()

    assert cfg.backend == "local"
    assert cfg.api_key == ""
    assert cfg.api_base_url == DEFAULT_API_BASE_URL
    assert cfg.request_timeout == 20
    assert cfg.page_size == 4
    assert cfg.clear_feature_on_new_results is False
    assert cfg.log_level == "INFO"


def test_key_selects_harvard(monkeypatch):
    monkeypatch.setenv("HARVARD_API_KEY", "secret")
    cfg = get_config()
    assert cfg.backend == "harvard"
    assert cfg.api_key == "secret"


def test_explicit_backend_wins(monkeypatch):
    monkeypatch.setenv("HARVARD_API_KEY", "secret")
    monkeypatch.setenv("EXPLORER_BACKEND", "LOCAL")
    assert get_config().backend == "local"


def test_unknown_backend(monkeypatch):
    monkeypatch.setenv("EXPLORER_BACKEND", "rijks")
    with pytest.raises(ValueError):
        get_config()


def test_overrides(monkeypatch):
    monkeypatch.setenv("EXPLORER_API_BASE_URL", "https://api.example.org/")
    monkeypatch.setenv("EXPLORER_REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("EXPLORER_PAGE_SIZE", "10")
    monkeypatch.setenv("EXPLORER_CLEAR_FEATURE_ON_SEARCH", "yes")
    monkeypatch.setenv("EXPLORER_LOG_LEVEL", "debug")

    cfg = get_config()

    assert cfg.api_base_url == "https://api.example.org"
    assert cfg.request_timeout == 5
    assert cfg.page_size == 10
    assert cfg.clear_feature_on_new_results is True
    assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_invalid_numbers_fall_back(monkeypatch, raw):
    monkeypatch.setenv("EXPLORER_REQUEST_TIMEOUT", raw)
    assert get_config().request_timeout == 20


def test_configure_logging_sets_level():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("WARNING")
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
