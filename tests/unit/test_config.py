"""Unit tests for environment-driven configuration."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from eventsite import config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (config.DB_URL_ENVVAR, config.TX_ATTEMPTS_ENVVAR, config.ENV_ENVVAR):
        monkeypatch.delenv(name, raising=False)


class TestEnv:
    """Tests for get_env and is_local."""

    @staticmethod
    def test_defaults_to_local():
        assert config.get_env() is config.Env.LOCAL

    @staticmethod
    def test_is_case_insensitive(monkeypatch):
        monkeypatch.setenv(config.ENV_ENVVAR, " Prod ")
        assert config.get_env() is config.Env.PROD

    @staticmethod
    def test_unknown_env(monkeypatch):
        monkeypatch.setenv(config.ENV_ENVVAR, "qa")
        with pytest.raises(config.InvalidSettingError, match="expected one of"):
            config.get_env()

    @staticmethod
    @pytest.mark.parametrize(
        "env,expected",
        [
            (config.Env.LOCAL, True),
            (config.Env.TEST, True),
            (config.Env.STAGING, False),
            (config.Env.PROD, False),
        ],
    )
    def test_is_local(env, expected):
        assert config.is_local(env) is expected


class TestDbUrl:
    """Tests for get_db_url."""

    @staticmethod
    def test_missing_url():
        with pytest.raises(config.DatabaseUrlNotSetError):
            config.get_db_url()

    @staticmethod
    def test_empty_url_counts_as_missing(monkeypatch):
        monkeypatch.setenv(config.DB_URL_ENVVAR, "")
        with pytest.raises(config.DatabaseUrlNotSetError):
            config.get_db_url()

    @staticmethod
    def test_url_is_returned(monkeypatch):
        monkeypatch.setenv(config.DB_URL_ENVVAR, "sqlite:///eventsite.db")
        assert config.get_db_url() == "sqlite:///eventsite.db"


class TestTransactionAttempts:
    """Tests for get_transaction_attempts."""

    @staticmethod
    def test_default():
        assert config.get_transaction_attempts() == config.DEFAULT_TX_ATTEMPTS

    @staticmethod
    def test_override(monkeypatch):
        monkeypatch.setenv(config.TX_ATTEMPTS_ENVVAR, "5")
        assert config.get_transaction_attempts() == 5

    @staticmethod
    @pytest.mark.parametrize("raw", ["0", "-2", "three"])
    def test_invalid(monkeypatch, raw):
        monkeypatch.setenv(config.TX_ATTEMPTS_ENVVAR, raw)
        with pytest.raises(config.InvalidSettingError) as exc_info:
            config.get_transaction_attempts()
        assert exc_info.value.name == config.TX_ATTEMPTS_ENVVAR
        assert exc_info.value.value == raw


def test_alembic_config_points_at_packaged_scripts():
    out = io.StringIO()
    cfg = config.build_alembic_config("sqlite:///eventsite.db", stdout=out)

    assert cfg.get_main_option(config.ALEMBIC_URL_KEY) == "sqlite:///eventsite.db"
    script_location = Path(cfg.get_main_option(config.ALEMBIC_SCRIPT_LOCATION_KEY))
    assert (script_location / "env.py").is_file()
    assert (script_location / "versions").is_dir()
    assert cfg.stdout is out


def test_alembic_config_without_url():
    cfg = config.build_alembic_config()
    assert cfg.get_main_option(config.ALEMBIC_URL_KEY) is None
