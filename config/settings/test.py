"""
Test settings – SQLite in memory, fast hashing, quiet logging.
Used by pytest-django (see ``[tool.pytest.ini_options]`` in pyproject.toml).
"""
from .base import *  # noqa: F401, F403

DEBUG = False

SECRET_KEY = "test-secret-key"

ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {"min_length": 6},
    },
]

LOGGING["root"]["level"] = "WARNING"  # noqa: F405
