"""
Purpose: Thin client wrapper around the OpenAI embeddings endpoint.
One place for auth, timeouts, model options, response/usage normalization.

Extensibility:
- Other providers (local sentence-transformers) live beside this one and
  satisfy the same EmbeddingClient interface.

Testing: Inject a fake SDK client; assert ordering, usage mapping and that
every failure surfaces as ServiceError.
"""

from __future__ import annotations
import logging
import threading
from typing import Any, Optional

from openai import OpenAI, OpenAIError

from ..errors import ServiceError
from ..models import EmbeddingSettings
from ..utils.cancel import run_cancellable
from ..utils.vectors import coerce_embeddings

logger = logging.getLogger(__name__)


class OpenAIEmbeddingClient:
    def __init__(
        self,
        api_key: str,
        settings: EmbeddingSettings,
        *,
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.settings = settings
        if client is not None:
            self.client = client
            return
        if not self.api_key:
            raise RuntimeError("Missing OPENAI_API_KEY")
        try:
            # No retry policy: one failure surfaces immediately.
            self.client = OpenAI(
                api_key=self.api_key,
                timeout=settings.timeout,
                max_retries=0,
            )
        except OpenAIError as e:
            raise RuntimeError(f"Failed to initialize OpenAI client: {e}") from e

    @property
    def model(self) -> str:
        return self.settings.model

    def check_credentials(self) -> None:
        """Cheap authenticated call used by the UI when a key is entered."""
        self.client.models.list()

    def _request(self, texts: list[str]):
        kwargs = {"model": self.settings.model, "input": texts}
        if self.settings.dimensions:
            kwargs["dimensions"] = self.settings.dimensions
        return self.client.embeddings.create(**kwargs)

    def embed(
        self,
        texts: list[str],
        *,
        cancel: Optional[threading.Event] = None,
    ) -> tuple[list[list[float]], dict]:
        if not texts:
            return [], {"model": self.settings.model, "tokens_in": 0}

        try:
            resp = run_cancellable(lambda: self._request(texts), cancel)
        except OpenAIError as e:
            logger.error("OpenAI embeddings request failed: %s", e)
            raise ServiceError() from e

        data = getattr(resp, "data", None)
        if not isinstance(data, list):
            raise ServiceError("Malformed embedding response: missing data")

        # The API tags each item with its input position.
        try:
            ordered = sorted(data, key=lambda d: d.index)
            raw = [d.embedding for d in ordered]
        except (AttributeError, TypeError) as e:
            raise ServiceError("Malformed embedding response item") from e

        vectors = coerce_embeddings(raw, len(texts))

        usage = getattr(resp, "usage", None)
        tokens_in = getattr(usage, "prompt_tokens", 0) if usage else 0
        return vectors, {
            "model": getattr(resp, "model", None) or self.settings.model,
            "tokens_in": tokens_in or 0,
        }
