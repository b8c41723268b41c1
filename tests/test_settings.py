import pytest

from checkout_adapter.api import main
from checkout_adapter.utils.settings import ConfigurationError, Settings


def test_missing_secret_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        Settings.from_env({"PORT": "8080"})


def test_blank_secret_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        Settings.from_env({"STRIPE_SECRET_KEY": "   "})


def test_defaults():
    settings = Settings.from_env({"STRIPE_SECRET_KEY": "sk_test_abc"})

    assert settings.port == 3000
    assert settings.host == "0.0.0.0"
    assert settings.frontend_url is None
    assert settings.integrations_mode == "real"
    assert settings.environment_name == "development"
    assert settings.expose_stack_traces is False
    assert settings.log_level == "INFO"


def test_legacy_private_key_variable_is_accepted():
    settings = Settings.from_env({"PRIVATE_KEY": "sk_test_legacy", "FRONTEND_URL": ""})

    assert settings.stripe_secret_key == "sk_test_legacy"
    assert settings.frontend_url is None


def test_values_are_parsed_and_normalized():
    settings = Settings.from_env(
        {
            "STRIPE_SECRET_KEY": "sk_test_abc",
            "PORT": "8080",
            "FRONTEND_URL": "https://app.example.com",
            "APP_ENV": "development",
            "INTEGRATIONS_MODE": "Mock",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.port == 8080
    assert settings.frontend_url == "https://app.example.com"
    assert settings.integrations_mode == "mock"
    assert settings.expose_stack_traces is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [{"PORT": "not-a-port"}, {"PORT": "70000"}, {"INTEGRATIONS_MODE": "sandbox"}, {"LOG_LEVEL": "chatty"}],
)
def test_invalid_values_fail_fast(overrides):
    with pytest.raises(ConfigurationError):
        Settings.from_env({"STRIPE_SECRET_KEY": "sk_test_abc", **overrides})


def test_settings_are_immutable():
    settings = Settings(stripe_secret_key="sk_test_abc")
    with pytest.raises(Exception):
        settings.port = 1


def test_secret_is_not_in_repr():
    assert "sk_test_abc" not in repr(Settings(stripe_secret_key="sk_test_abc"))


def test_startup_exits_non_zero_without_secret(monkeypatch):
    monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
    monkeypatch.delenv("PRIVATE_KEY", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        main.load_settings_or_exit()

    assert exc_info.value.code == 1
