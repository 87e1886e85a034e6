from .base import *  # noqa: F401,F403
from .base import env_bool

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")
