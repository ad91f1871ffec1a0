"""
Development settings – local PostgreSQL, readable console logs and the
browsable API for poking at devices, connections and the topology endpoint.
"""
import structlog
from decouple import config

from .base import *  # noqa: F401, F403

DEBUG = config("DEBUG", default=True, cast=bool)

if DEBUG:
    ALLOWED_HOSTS = ["*"]

SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

# Coloured key=value lines instead of JSON
LOGGING["formatters"]["json_formatter"]["processor"] = structlog.dev.ConsoleRenderer()  # noqa: F405
LOGGING["root"]["level"] = "DEBUG"  # noqa: F405

# Minimum length only
AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {"min_length": 6},
    },
]

# Browsable API with HTML forms for the create/update endpoints
REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = [  # noqa: F405
    "rest_framework.renderers.JSONRenderer",
    "rest_framework.renderers.BrowsableAPIRenderer",
]
REST_FRAMEWORK["DEFAULT_PARSER_CLASSES"] = [  # noqa: F405
    "rest_framework.parsers.JSONParser",
    "rest_framework.parsers.FormParser",
]
