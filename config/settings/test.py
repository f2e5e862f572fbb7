# config/settings/test.py
from .base import *  # noqa

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LOGGING["root"]["level"] = "WARNING"  # noqa: F405
LOGGING["handlers"]["default"]["level"] = "WARNING"  # noqa: F405

PHARMA_INVENTORY = {
    **PHARMA_INVENTORY,  # noqa: F405
    "ENABLE_REQUEST_LOGGING": False,
}
