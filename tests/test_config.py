import pytest

from iris_sdk import ConfigurationError, config, configure, settings
from iris_sdk.config import PRODUCTION_BASE_URL, PRODUCTION_IRIS_URL, LOCAL_FL_API_URL


def test_production_defaults():
    s = settings()
    assert s.environment == "production"
    assert s.base_url == PRODUCTION_BASE_URL
    assert s.iris_url == PRODUCTION_IRIS_URL
    assert s.fl_api_url == PRODUCTION_BASE_URL
    assert s.api_key is None
    assert s.user_id is None


def test_env_overrides_configured(monkeypatch):
    monkeypatch.setenv("IRIS_API_KEY", "env-key")
    monkeypatch.setenv("IRIS_USER_ID", "193")
    monkeypatch.setenv("IRIS_API_URL", "https://api.example/")
    with config(api_key="configured"):
        s = settings()
    assert s.api_key == "env-key"
    assert s.user_id == 193
    assert s.base_url == "https://api.example"
    assert s.fl_api_url == "https://api.example"


def test_environment_specific_keys(monkeypatch):
    monkeypatch.setenv("IRIS_ENV", "local")
    monkeypatch.setenv("IRIS_API_KEY", "generic")
    monkeypatch.setenv("IRIS_LOCAL_API_KEY", "local-key")
    s = settings()
    assert s.api_key == "local-key"
    assert s.fl_api_url == LOCAL_FL_API_URL

    monkeypatch.setenv("IRIS_ENV", "production")
    monkeypatch.setenv("IRIS_PROD_API_KEY", "prod-key")
    assert settings().api_key == "prod-key"


def test_config_context_restores():
    with config(timeout=5.0, user_id=9):
        assert settings().timeout == 5.0
        assert settings().require_user_id() == 9
    assert settings().timeout == 30.0
    with pytest.raises(ConfigurationError):
        settings().require_user_id()


def test_invalid_user_id(monkeypatch):
    monkeypatch.setenv("IRIS_USER_ID", "abc")
    with pytest.raises(ConfigurationError):
        settings()


def test_unknown_setting_rejected():
    with pytest.raises(AttributeError):
        configure(nope=True)
