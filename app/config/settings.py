"""
Django settings for the access and notification engine.

This is the single settings file for all environments. Configuration is driven
by environment variables using django-environ, following the 12-factor app
methodology.

Environment files:
    - .env.development: Development settings (DEBUG=True, verbose logging)
    - .env.production: Production settings (DEBUG=False)

The engine keeps no data of its own: roles, overrides and notification
settings are loaded by the persistence collaborator, so no database is
configured here.

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/topics/settings/
"""

import os
from pathlib import Path

import environ

# =============================================================================
# Path Configuration
# =============================================================================
BASE_DIR = Path(__file__).resolve().parent.parent

# =============================================================================
# Environment Configuration
# =============================================================================
env = environ.Env(
    DEBUG=(bool, False),  # Default to False for safety
    ALLOWED_HOSTS=(list, []),
    LOG_LEVEL=(str, "INFO"),
    LOG_TO_FILE=(bool, False),
    TIME_ZONE=(str, "UTC"),
)

# Note: In Docker, env vars are passed directly; .env files are for local dev
env_file = os.environ.get("ENV_FILE", BASE_DIR.parent / ".env.development")
if Path(env_file).exists():
    environ.Env.read_env(env_file)

# =============================================================================
# Core Settings
# =============================================================================
# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY", default="django-insecure-local-development-key")

DEBUG = env("DEBUG")

ALLOWED_HOSTS = env("ALLOWED_HOSTS")

# =============================================================================
# Application Definition
# =============================================================================
INSTALLED_APPS = [
    # Django core apps
    "django.contrib.contenttypes",
    "django.contrib.auth",
    # Third-party apps
    "rest_framework",
    # Local apps
    "core",
    "servers",
    "notifications",
]

# =============================================================================
# Database Configuration
# =============================================================================
# Persistence is an external collaborator; the engine never touches a database
DATABASES = {}

# =============================================================================
# Internationalization
# =============================================================================
LANGUAGE_CODE = "en-us"

# Quiet hours are compared on this clock
TIME_ZONE = env("TIME_ZONE")

USE_I18N = True

USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# =============================================================================
# Django REST Framework Configuration
# =============================================================================
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "UNAUTHENTICATED_USER": None,
}

# =============================================================================
# Logging Configuration
# =============================================================================
LOG_LEVEL = env("LOG_LEVEL")
LOG_DIR = BASE_DIR.parent / "logs"
LOG_FILE_NAME = "engine.log"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
        "file": {
            "format": "[{asctime}] {levelname} {name} {module}:{lineno} - {message}",
            "style": "{",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "servers": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "notifications": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}

if env("LOG_TO_FILE"):
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    # Max 10MB per file, keeps 5 backups
    LOGGING["handlers"]["file"] = {
        "level": "DEBUG",
        "class": "logging.handlers.RotatingFileHandler",
        "filename": LOG_DIR / LOG_FILE_NAME,
        "maxBytes": 10 * 1024 * 1024,
        "backupCount": 5,
        "formatter": "file",
        "encoding": "utf-8",
    }
    LOGGING["root"]["handlers"].append("file")
    for logger_config in LOGGING["loggers"].values():
        logger_config["handlers"].append("file")
