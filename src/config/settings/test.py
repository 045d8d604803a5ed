"""
Django test settings for the Banglong site backend.
"""

from .base import *  # noqa: F403
from .base import BASE_DIR, env

DEBUG = False

SECRET_KEY = "django-insecure-test-key-only"  # noqa: S105

ALLOWED_HOSTS = ["*"]

SITE_URL = "https://testserver"

# Use fast password hasher for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Use in-memory email backend
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

CONTACT_NOTIFICATION_EMAILS = ["team@banglong.test"]

MAIL_RELAY_URL = "https://relay.example.com/send"
MAIL_RELAY_API_KEY = "relay-test-key"  # noqa: S105

BLOB_STORAGE_URL = "https://blob.example.com"
BLOB_READ_WRITE_TOKEN = "blob-test-token"  # noqa: S105

# Use DATABASE_URL if set (Docker), otherwise SQLite
DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR.parent / 'test.sqlite3'}"),
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "banglong-tests",
    },
}

# Use simple static files storage in tests
STORAGES = {
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"null": {"class": "logging.NullHandler"}},
    "root": {"handlers": ["null"]},
}
