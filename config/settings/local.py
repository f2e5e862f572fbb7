# config/settings/local.py
from .base import *  # noqa

DEBUG = True

if os.getenv("DB_ENGINE", "sqlite").lower() == "sqlite":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "pharmanet.sqlite3",
        }
    }
