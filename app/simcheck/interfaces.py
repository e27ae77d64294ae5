"""
Abstractions for pluggable services. Inversion of control: the controller
depends on interfaces, not concrete services. Enables fakes in tests and
swapping the embedding backend.

Common protocols:
- EmbeddingClient.embed(texts, cancel=...) -> (vectors, meta)
- SampleGuard.sanitize(text) / validate_sample(sample)

Testing: Use simple fake implementations to test the controller without network calls.
"""

from __future__ import annotations
import threading
from typing import Optional, Protocol
from .models import TextSample


class EmbeddingClient(Protocol):
    model: str

    def embed(
        self,
        texts: list[str],
        *,
        cancel: Optional[threading.Event] = None,
    ) -> tuple[list[list[float]], dict]: ...


class SampleGuard(Protocol):
    def sanitize(self, text: str) -> str: ...

    def validate_sample(self, sample: TextSample) -> None: ...

    def eligible(self, samples: list[TextSample]) -> list[TextSample]: ...
