import pytest

from billing_gateway.core import config as config_module
from billing_gateway.core.config import DEFAULT_CORS_ORIGINS, Settings

ENV_KEYS = (
    "STRIPE_PUBLISHABLE_KEY",
    "STRIPE_SECRET_KEY_TEST",
    "STRIPE_SECRET_KEY",
    "STRIPE_API_VERSION",
    "STRIPE_REUSE_CUSTOMERS",
    "CORS_ALLOW_ORIGINS",
    "HOST",
    "PORT",
)


@pytest.fixture(autouse=True)
def dotenv_calls(monkeypatch):
    calls = []
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # A developer's local .env must not leak into these tests.
    monkeypatch.setattr(config_module, "load_dotenv", lambda *args, **kwargs: calls.append(args))
    return calls


def test_defaults_without_environment():
    settings = Settings.from_env()

    assert settings.stripe_publishable_key == ""
    assert settings.stripe_secret_key == ""
    assert settings.stripe_api_version == "2024-06-20"
    assert settings.stripe_reuse_customers is False
    assert settings.cors_allow_origins == DEFAULT_CORS_ORIGINS
    assert settings.port == 4242
    assert settings.apple_pay_enabled is False


def test_test_secret_key_takes_precedence(monkeypatch):
    monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", "pk_test_abc")
    monkeypatch.setenv("STRIPE_SECRET_KEY_TEST", "sk_test_abc")
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_live_abc")

    settings = Settings.from_env()

    assert settings.stripe_secret_key == "sk_test_abc"
    assert settings.apple_pay_enabled is True


def test_falls_back_to_plain_secret_key(monkeypatch):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_live_abc")

    assert Settings.from_env().stripe_secret_key == "sk_live_abc"


def test_cors_origins_are_parsed(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, ,https://b.example")

    assert Settings.from_env().cors_allow_origins == ["https://a.example", "https://b.example"]


@pytest.mark.parametrize("raw, expected", [("true", True), ("1", True), ("no", False), ("", False)])
def test_reuse_customers_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("STRIPE_REUSE_CUSTOMERS", raw)

    assert Settings.from_env().stripe_reuse_customers is expected


def test_invalid_port_is_rejected(monkeypatch):
    monkeypatch.setenv("PORT", "http")

    with pytest.raises(RuntimeError):
        Settings.from_env()


def test_apple_pay_requires_both_keys():
    assert Settings(stripe_publishable_key="pk", stripe_secret_key="").apple_pay_enabled is False
    assert Settings(stripe_publishable_key="", stripe_secret_key="sk").apple_pay_enabled is False
    assert Settings(stripe_publishable_key="pk", stripe_secret_key="sk").apple_pay_enabled is True


def test_from_env_loads_dotenv_first(dotenv_calls):
    Settings.from_env()

    assert len(dotenv_calls) == 1
