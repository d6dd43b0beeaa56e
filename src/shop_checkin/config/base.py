"""Settings shared by every environment, read from the process environment."""
import os

from ..core.constants import (
    BUSINESS_UTC_OFFSET_HOURS as _DEFAULT_OFFSET,
    DEFAULT_IPINFO_TIMEOUT_SECONDS,
    DEFAULT_IPINFO_URL,
    DEFAULT_MEAL_ALLOWANCE,
    DEFAULT_SHOP_ASNS,
    DEFAULT_SHOP_ISP_NAMES,
)


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.environ.get(name, default)))


def env_list(name: str, default) -> tuple:
    raw = os.environ.get(name)
    if raw is None:
        return tuple(default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


DB_CONFIG = {
    "host": os.environ.get("DB_HOST", "localhost"),
    "port": int(os.environ.get("DB_PORT", "3306")),
    "user": os.environ.get("DB_USER", "root"),
    "password": os.environ.get("DB_PASSWORD", ""),
    "database": os.environ.get("DB_NAME", "shop_checkin"),
}

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

IPINFO_URL = os.environ.get("IPINFO_URL", DEFAULT_IPINFO_URL)
IPINFO_TOKEN = os.environ.get("IPINFO_TOKEN") or None
IPINFO_TIMEOUT_SECONDS = float(os.environ.get("IPINFO_TIMEOUT_SECONDS", str(DEFAULT_IPINFO_TIMEOUT_SECONDS)))

BUSINESS_UTC_OFFSET_HOURS = int(os.environ.get("BUSINESS_UTC_OFFSET_HOURS", str(_DEFAULT_OFFSET)))
MEAL_ALLOWANCE_AMOUNT = int(os.environ.get("MEAL_ALLOWANCE_AMOUNT", str(DEFAULT_MEAL_ALLOWANCE)))

SHOP_ISP_NAMES = env_list("SHOP_ISP_NAMES", DEFAULT_SHOP_ISP_NAMES)
SHOP_ASNS = env_list("SHOP_ASNS", DEFAULT_SHOP_ASNS)

# Bearer token required by the reporting endpoints; unset disables them.
ADMIN_API_TOKEN = os.environ.get("ADMIN_API_TOKEN") or None
