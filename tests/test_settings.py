from __future__ import annotations

import pytest

from shop_checkin.config import get_settings_module


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ("production", "shop_checkin.config.production"),
        ("PROD", "shop_checkin.config.production"),
        ("testing", "shop_checkin.config.testing"),
        ("test", "shop_checkin.config.testing"),
        ("anything-else", "shop_checkin.config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == expected


def test_settings_module_defaults_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "shop_checkin.config.development"
