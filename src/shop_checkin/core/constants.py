"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

BUSINESS_UTC_OFFSET_HOURS = 7

# Weekday index counted from Sunday = 0; offset 4 anchors the week on Wednesday.
WEEK_ANCHOR_OFFSET = 4

PERFECT_ON_TIME_BEFORE_MINUTES = 8 * 60
ON_TIME_BEFORE_MINUTES = 8 * 60 + 10
LATE_10_BEFORE_MINUTES = 8 * 60 + 30

LATE_10_PENALTY = 10
LATE_15_PENALTY = 15

DEFAULT_MEAL_ALLOWANCE = 50

DEFAULT_SHOP_ISP_NAMES = ("AIS Fibre", "Advance Wireless Network", "3BB")
DEFAULT_SHOP_ASNS = ("AS133481", "AS131445")

DEFAULT_IPINFO_URL = "https://ipinfo.io"
DEFAULT_IPINFO_TIMEOUT_SECONDS = 3.0

FALLBACK_CLIENT_IP = "127.0.0.1"

# Width of checkins.user_agent in schema.sql.
MAX_USER_AGENT_LENGTH = 512
