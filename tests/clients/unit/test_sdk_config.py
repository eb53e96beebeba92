from pathlib import Path

import pytest

from clients.dealerscope_sdk.config import DEFAULT_BASE_URL, SDKConfig, parse_bool

ENV_KEYS = (
    "DEALERSCOPE_BASE_URL",
    "DEALERSCOPE_TIMEOUT_SECONDS",
    "DEALERSCOPE_VERIFY_SSL",
    "DEALERSCOPE_RETRY_MAX_ATTEMPTS",
    "DEALERSCOPE_RETRY_BACKOFF_MS",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env, tmp_path: Path) -> None:
    config = SDKConfig.from_env(env_file=str(tmp_path / "missing.env"))

    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout_seconds == 30.0
    assert config.verify_ssl is True
    assert config.retry_max_attempts == 3
    assert config.retry_backoff_ms == 250


def test_environment_overrides(clean_env, tmp_path: Path) -> None:
    clean_env.setenv("DEALERSCOPE_BASE_URL", "https://api.example.com")
    clean_env.setenv("DEALERSCOPE_TIMEOUT_SECONDS", "2.5")
    clean_env.setenv("DEALERSCOPE_VERIFY_SSL", "off")
    clean_env.setenv("DEALERSCOPE_RETRY_MAX_ATTEMPTS", "0")
    clean_env.setenv("DEALERSCOPE_RETRY_BACKOFF_MS", "-5")

    config = SDKConfig.from_env(env_file=str(tmp_path / "missing.env"))

    assert config.base_url == "https://api.example.com/"
    assert config.timeout_seconds == 2.5
    assert config.verify_ssl is False
    assert config.retry_max_attempts == 1
    assert config.retry_backoff_ms == 0


@pytest.mark.parametrize(
    ("value", "expected"),
    [("yes", True), ("0", False), ("maybe", True), (None, True), (False, False)],
)
def test_parse_bool(value, expected) -> None:
    assert parse_bool(value, default=True) is expected
