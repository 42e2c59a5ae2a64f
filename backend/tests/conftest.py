"""Shared pytest configuration for the lead assignment tests.

Settings are cached per process, so the environment is pinned here before
any test module imports the application.
"""

import os

os.environ.pop("STAFF_DIRECTORY_PATH", None)
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("RATE_LIMIT_ENABLED", "true")
