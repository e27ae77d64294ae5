"""
Environment-driven configuration. Single point of control for provider,
model names, limits and logging.
"""

import logging
import os

from .models import EmbeddingSettings

# Embedding provider configuration
EMBED_PROVIDER = os.getenv("SIMCHECK_EMBED_PROVIDER", "openai")  # openai|local
EMBED_MODEL = os.getenv("SIMCHECK_EMBED_MODEL", "text-embedding-3-small")
LOCAL_MODEL = os.getenv("SIMCHECK_LOCAL_MODEL", "all-MiniLM-L6-v2")
REQUEST_TIMEOUT_SEC = float(os.getenv("SIMCHECK_REQUEST_TIMEOUT", "30"))

# Input limits
MAX_SAMPLE_CHARS = int(os.getenv("SIMCHECK_MAX_SAMPLE_CHARS", "20000"))

LOG_LEVEL = os.getenv("SIMCHECK_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def openai_api_key():
    """Read the key at call time so a late-loaded environment is honoured."""
    return os.getenv("OPENAI_API_KEY", "")


def embed_provider():
    return os.getenv("SIMCHECK_EMBED_PROVIDER", EMBED_PROVIDER).lower()


def default_embedding_settings(provider: str = None) -> EmbeddingSettings:
    """Build EmbeddingSettings for the given (or configured) provider."""
    provider = (provider or embed_provider()).lower()
    model = LOCAL_MODEL if provider == "local" else EMBED_MODEL
    return EmbeddingSettings(model=model, timeout=REQUEST_TIMEOUT_SEC)


def configure_logging(level: str = None) -> logging.Logger:
    """Attach a stream handler to the package logger once."""
    logger = logging.getLogger("simcheck")
    logger.setLevel((level or LOG_LEVEL).upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
