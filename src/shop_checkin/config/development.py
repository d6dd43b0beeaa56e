from .base import *  # noqa: F401,F403
from .base import env_flag

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo employees on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
