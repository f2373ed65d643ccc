import pytest

from fulcrum.config import settings
from fulcrum.config.settings import FulcrumConfig, _load_secret_from_file, load_settings
from fulcrum.core.api.client import DEFAULT_API_URL, REQUEST_TIMEOUT
from fulcrum.core.form import DEFAULT_LATITUDE, DEFAULT_LONGITUDE

ENV_VARS = (
    "FULCRUM_API_KEY",
    "FULCRUM_API_URL",
    "FULCRUM_PHOTO_URL",
    "FULCRUM_REQUEST_TIMEOUT",
    "FULCRUM_DEFAULT_LATITUDE",
    "FULCRUM_DEFAULT_LONGITUDE",
    "FULCRUM_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point /run/secrets at an empty directory and clear FULCRUM_* variables."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    real_path = settings.Path

    def fake_path(target):
        if str(target) == "/run/secrets":
            return tmp_path
        return real_path(target)

    monkeypatch.setattr(settings, "Path", fake_path)
    return tmp_path


def test_secret_file_wins_over_environment(monkeypatch, isolated_env):
    (isolated_env / "fulcrum_api_key").write_text("file-key\n")
    monkeypatch.setenv("FULCRUM_API_KEY", "env-key")
    assert _load_secret_from_file("fulcrum_api_key", "FULCRUM_API_KEY") == "file-key"


def test_empty_secret_file_falls_back_to_env(monkeypatch, isolated_env):
    (isolated_env / "fulcrum_api_key").write_text("  ")
    monkeypatch.setenv("FULCRUM_API_KEY", "env-key")
    assert _load_secret_from_file("fulcrum_api_key", "FULCRUM_API_KEY") == "env-key"


def test_missing_secret_returns_none():
    assert _load_secret_from_file("fulcrum_api_key", "FULCRUM_API_KEY") is None
    assert _load_secret_from_file("fulcrum_api_key") is None


def test_load_settings_defaults(monkeypatch):
    monkeypatch.setenv("FULCRUM_API_KEY", "env-key")
    cfg = load_settings()

    assert cfg.api_key == "env-key"
    assert cfg.has_api_key
    assert cfg.api_url == DEFAULT_API_URL
    assert cfg.request_timeout == REQUEST_TIMEOUT
    assert cfg.default_latitude == DEFAULT_LATITUDE
    assert cfg.default_longitude == DEFAULT_LONGITUDE
    assert cfg.log_level == "WARNING"


def test_load_settings_reads_overrides(monkeypatch):
    monkeypatch.setenv("FULCRUM_API_KEY", "k")
    monkeypatch.setenv("FULCRUM_API_URL", "https://eu.test/api/v2/")
    monkeypatch.setenv("FULCRUM_PHOTO_URL", "https://photos.test")
    monkeypatch.setenv("FULCRUM_REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("FULCRUM_DEFAULT_LATITUDE", "1.5")
    monkeypatch.setenv("FULCRUM_DEFAULT_LONGITUDE", "-2.5")
    monkeypatch.setenv("FULCRUM_LOG_LEVEL", "debug")

    cfg = load_settings()

    assert cfg.api_url == "https://eu.test/api/v2"
    assert cfg.photo_url == "https://photos.test"
    assert cfg.request_timeout == 5.0
    assert (cfg.default_latitude, cfg.default_longitude) == (1.5, -2.5)
    assert cfg.log_level == "DEBUG"


def test_load_settings_missing_key_required():
    with pytest.raises(RuntimeError, match="FULCRUM_API_KEY"):
        load_settings()


def test_load_settings_missing_key_optional():
    cfg = load_settings(required=False)
    assert cfg.api_key == ""
    assert not cfg.has_api_key


def test_load_settings_rejects_malformed_numbers(monkeypatch):
    monkeypatch.setenv("FULCRUM_API_KEY", "k")
    monkeypatch.setenv("FULCRUM_REQUEST_TIMEOUT", "soon")
    with pytest.raises(RuntimeError, match="FULCRUM_REQUEST_TIMEOUT"):
        load_settings()


def test_config_dataclass_defaults():
    cfg = FulcrumConfig(api_key="k")
    assert cfg.api_url == DEFAULT_API_URL
    assert cfg.default_longitude == DEFAULT_LONGITUDE
