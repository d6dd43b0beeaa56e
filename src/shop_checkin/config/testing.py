from .base import *  # noqa: F401,F403

DEBUG = False
TESTING = True

# Tests never touch a real database or ipinfo.io.
AUTO_INIT_DB = False
AUTO_SEED_DB = False
IPINFO_TOKEN = None
