"""
Purpose: Local embeddings with sentence-transformers, no network or API key.
Default model is all-MiniLM-L6-v2 (384 dimensions).

Install with the `local` extra. The model is loaded lazily on first use.
"""

from __future__ import annotations
import logging
import threading
from typing import Optional

from sentence_transformers import SentenceTransformer

from ..errors import ServiceError
from ..models import EmbeddingSettings
from ..utils.cancel import run_cancellable
from ..utils.vectors import coerce_embeddings

logger = logging.getLogger(__name__)


class SentenceTransformerEmbeddingClient:
    def __init__(self, settings: EmbeddingSettings):
        self.settings = settings
        self._model = None

    @property
    def model(self) -> str:
        return self.settings.model

    @property
    def encoder(self) -> SentenceTransformer:
        if self._model is None:
            logger.info("Loading sentence-transformers model %s", self.settings.model)
            self._model = SentenceTransformer(self.settings.model)
        return self._model

    def embed(
        self,
        texts: list[str],
        *,
        cancel: Optional[threading.Event] = None,
    ) -> tuple[list[list[float]], dict]:
        if not texts:
            return [], {"model": self.settings.model, "tokens_in": 0}

        def call():
            return self.encoder.encode(texts, convert_to_numpy=True)

        try:
            raw = run_cancellable(call, cancel)
        except (OSError, RuntimeError, ValueError) as e:
            if isinstance(e, ServiceError):
                raise
            logger.error("Local embedding failed: %s", e)
            raise ServiceError() from e

        return coerce_embeddings(raw, len(texts)), {
            "model": self.settings.model,
            "tokens_in": 0,
        }
