"""
Configuration settings for Social Proof Studio.

Centralized configuration for the review fetcher, HTTP app and CLI.
"""

import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# API Configuration
# API_KEY is the name the original deployment used; GOOGLE_API_KEY wins.
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY", "")

# LLM Model
REVIEWS_MODEL = os.getenv("REVIEWS_MODEL", "gemini-2.5-flash")

# Temperature settings (0.0 for deterministic)
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.0"))

# Review fetching
TARGET_LOCALE = os.getenv("TARGET_LOCALE", "es-MX")
MIN_REVIEWS = int(os.getenv("MIN_REVIEWS", "5"))
REQUEST_TIMEOUT_SECONDS = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "60"))
ENABLE_WEB_SEARCH = _env_bool("ENABLE_WEB_SEARCH", True)

# HTTP server
SERVER_HOST = os.getenv("SERVER_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("SERVER_PORT", "8000"))

# CLI status messages (seconds between rotations)
STATUS_INTERVAL_SECONDS = 2.5

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = os.getenv("LOG_FILE", "social_proof_studio.log")
