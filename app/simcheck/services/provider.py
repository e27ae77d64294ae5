"""
Purpose: Pick the embedding backend from configuration.
Imports are local so the optional sentence-transformers extra is only
required when the local provider is selected.
"""

from typing import Optional

from .. import config
from ..interfaces import EmbeddingClient
from ..models import EmbeddingSettings


def build_embedding_client(
    *,
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    settings: Optional[EmbeddingSettings] = None,
) -> EmbeddingClient:
    """Return the configured EmbeddingClient implementation."""
    provider = (provider or config.embed_provider()).lower()
    settings = settings or config.default_embedding_settings(provider)

    if provider == "openai":
        from .embeddings_openai import OpenAIEmbeddingClient

        return OpenAIEmbeddingClient(
            api_key=api_key or config.openai_api_key(), settings=settings
        )
    if provider == "local":
        from .embeddings_local import SentenceTransformerEmbeddingClient

        return SentenceTransformerEmbeddingClient(settings=settings)
    raise ValueError(f"Unknown embedding provider: {provider!r}")
