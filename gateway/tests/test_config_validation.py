import os

import pytest

os.environ.setdefault("VITA_ENV", "test")
os.environ.setdefault("VITA_X_LOGIN", "bootstrap-login")
os.environ.setdefault("VITA_X_TRANS_KEY", "bootstrap-trans-key")
os.environ.setdefault("VITA_SECRET_KEY", "bootstrap-secret-key")
os.environ.setdefault("VITA_WALLET_UUID", "bootstrap-wallet")

from gateway.config import get_settings
from gateway.config.base import BaseConfig
from gateway.security.errors import MissingCredentialError


def _base_kwargs(**overrides):
    data = {
        "x_login": "login",
        "x_trans_key": "trans-key",
        "secret_key": "secret-key",
        "wallet_uuid": "wallet-uuid",
        "allowed_origins": ["http://localhost:3000"],
    }
    data.update(overrides)
    return data


def test_rejects_blank_credentials():
    with pytest.raises(ValueError):
        BaseConfig(**_base_kwargs(secret_key="   "))


def test_rejects_placeholder_credentials():
    with pytest.raises(ValueError):
        BaseConfig(**_base_kwargs(x_login="your-login"))


def test_rejects_invalid_origin_scheme():
    with pytest.raises(ValueError):
        BaseConfig(**_base_kwargs(allowed_origins=["ftp://example.com"]))


def test_prod_requires_https_base_url():
    with pytest.raises(ValueError):
        BaseConfig(**_base_kwargs(environment="prod", base_url="http://api.example.com"))


def test_secret_is_not_in_repr():
    config = BaseConfig(**_base_kwargs(secret_key="very-private-value"))
    assert "very-private-value" not in repr(config)


def test_credentials_are_built_from_settings():
    credentials = BaseConfig(**_base_kwargs()).credentials()
    assert credentials.login_id == "login"
    assert credentials.trans_key == "trans-key"
    assert credentials.secret_key == "secret-key"


def test_missing_credential_aborts_settings(monkeypatch):
    monkeypatch.setenv("VITA_ENV", "test")
    monkeypatch.delenv("VITA_SECRET_KEY", raising=False)
    get_settings.cache_clear()
    try:
        with pytest.raises(MissingCredentialError) as exc:
            get_settings()
        assert "secret_key" in exc.value.fields
    finally:
        get_settings.cache_clear()
