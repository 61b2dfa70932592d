"""Shared pytest configuration."""

import os

# The web app reads its secret at import time; contact submissions are instant in tests.
os.environ.setdefault("FLASK_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SUBMISSION_DELAY_SECONDS", "0")
