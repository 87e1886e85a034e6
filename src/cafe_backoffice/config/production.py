import os

from .base import *  # noqa: F401,F403

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
