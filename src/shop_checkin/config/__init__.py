import os


def get_settings_module() -> str:
    # Settings module is picked from APP_ENV, default 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "shop_checkin.config.production"

    if env in {"test", "testing"}:
        return "shop_checkin.config.testing"

    return "shop_checkin.config.development"
