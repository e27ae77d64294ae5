"""
Purpose: The single orchestration point for an analysis session. Owns the
sample board, the latest results and the request lifecycle.
Prevents UI from knowing how embeddings or scoring work.

Key responsibilities:
- Hold the text samples (add, remove, edit) with a floor of two boxes.
- Filter and validate eligible samples (services.guard).
- Call the embedding backend (via EmbeddingClient interface).
- Rank pairwise similarities (services.similarity).
- Collapse every downstream failure into one ServiceError; no partial results.
- reset() restores the initial board and clears results and token counters.

Testing: Pure unit tests with a fake EmbeddingClient. Verify that validation
happens before any call, and that failures leave no results behind.
"""

from __future__ import annotations
import itertools
import logging
import threading
from typing import Iterable, Mapping, Optional, Union

from .errors import (
    USER_FAILURE_MESSAGE,
    AnalysisCancelled,
    ServiceError,
    ValidationError,
)
from .interfaces import EmbeddingClient, SampleGuard
from .models import AnalysisStatus, AnalysisSummary, SimilarityResult, TextSample
from .services.guard import DefaultSampleGuard, MIN_SAMPLES
from .services.pricing import estimate_tokens_from_text
from .services.risk import summarize
from .services.similarity import rank_pairs

logger = logging.getLogger(__name__)


class AnalysisController:
    def __init__(
        self,
        embedder: EmbeddingClient,
        guard: Optional[SampleGuard] = None,
    ):
        self.embedder: EmbeddingClient = embedder
        self.guard: SampleGuard = guard or DefaultSampleGuard()
        self._lock = threading.Lock()
        self._cancel: Optional[threading.Event] = None
        self.reset()

    def is_ready(self) -> bool:
        """True if the controller has an embedding backend."""
        return self.embedder is not None

    def reset(self) -> None:
        """Two empty boxes, no results, zeroed counters."""
        self._ids = itertools.count(1)
        self.samples: list[TextSample] = []
        for _ in range(MIN_SAMPLES):
            self.add_sample()
        self.results: list[SimilarityResult] = []
        self.summary: Optional[AnalysisSummary] = None
        self.status = AnalysisStatus.IDLE
        self.last_error: Optional[str] = None
        self.tokens_in: int = 0
        self.model_used: Optional[str] = None

    def add_sample(self, content: str = "", label: Optional[str] = None) -> TextSample:
        new_id = str(next(self._ids))
        sample = TextSample(id=new_id, content=content, label=label or f"Text {new_id}")
        self.samples.append(sample)
        return sample

    def remove_sample(self, sample_id: str) -> bool:
        """Remove a sample; refused (False) when only two remain."""
        if len(self.samples) <= MIN_SAMPLES:
            return False
        self._get(sample_id)
        self.samples = [s for s in self.samples if s.id != sample_id]
        return True

    def update_content(self, sample_id: str, content: str) -> None:
        self._get(sample_id).content = content

    def update_label(self, sample_id: str, label: str) -> None:
        self._get(sample_id).label = label

    def _get(self, sample_id: str) -> TextSample:
        for s in self.samples:
            if s.id == sample_id:
                return s
        raise KeyError(sample_id)

    def eligible_samples(self) -> list[TextSample]:
        return [s for s in self.samples if self.guard.sanitize(s.content)]

    def cancel(self) -> None:
        """Abandon the in-flight analysis, if any."""
        if self._cancel is not None:
            self._cancel.set()

    @property
    def in_flight(self) -> bool:
        return self.status == AnalysisStatus.IN_FLIGHT

    def analyze(
        self, cancel: Optional[threading.Event] = None
    ) -> list[SimilarityResult]:
        """
        Run one analysis over the current board.
        Raises ValidationError before any embedding call when fewer than two
        samples have content; ServiceError (or AnalysisCancelled) otherwise.
        """
        if not self._lock.acquire(blocking=False):
            raise ServiceError("An analysis is already running.")
        try:
            return self._analyze(cancel or threading.Event())
        finally:
            self._cancel = None
            self._lock.release()

    def _analyze(self, cancel: threading.Event) -> list[SimilarityResult]:
        try:
            valid = self.guard.eligible(self.samples)
        except ValidationError as e:
            self.last_error = str(e)
            raise

        self._cancel = cancel
        self.status = AnalysisStatus.IN_FLIGHT
        self.last_error = None
        self.results = []
        self.summary = None

        texts = [self.guard.sanitize(s.content) for s in valid]
        labels = [s.label for s in valid]

        try:
            vectors, meta = self.embedder.embed(texts, cancel=cancel)
            if len(vectors) != len(texts):
                raise ServiceError(
                    f"Embedding count mismatch: expected {len(texts)}, got {len(vectors)}"
                )
            results = rank_pairs(vectors, labels)
        except AnalysisCancelled:
            self.status = AnalysisStatus.CANCELLED
            logger.info("Analysis cancelled by caller")
            raise
        except Exception as e:
            self.status = AnalysisStatus.FAILED
            self.last_error = USER_FAILURE_MESSAGE
            logger.exception("Error analyzing similarity")
            raise ServiceError() from e

        self.results = results
        self.summary = summarize(results)
        self.status = AnalysisStatus.SUCCEEDED
        self.tokens_in += int(meta.get("tokens_in") or 0) or sum(
            estimate_tokens_from_text(t) for t in texts
        )
        self.model_used = meta.get("model") or getattr(self.embedder, "model", None)
        logger.info(
            "Analyzed %d samples into %d pairs with %s",
            len(texts),
            len(results),
            self.model_used,
        )
        return results


SampleInput = Union[TextSample, Mapping[str, str]]


def _to_samples(samples: Iterable[SampleInput]) -> list[TextSample]:
    out = []
    for idx, s in enumerate(samples, start=1):
        if isinstance(s, TextSample):
            out.append(s)
            continue
        out.append(
            TextSample(
                id=str(s.get("id") or idx),
                content=s.get("content") or "",
                label=s.get("label") or f"Text {idx}",
            )
        )
    return out


def analyze(
    samples: Iterable[SampleInput],
    embedder: EmbeddingClient,
    *,
    guard: Optional[SampleGuard] = None,
    cancel: Optional[threading.Event] = None,
) -> list[dict]:
    """
    One-shot analysis over `{label, content}` mappings.
    Returns `{label_a, label_b, similarity}` dicts, highest similarity first.
    """
    controller = AnalysisController(embedder, guard=guard)
    controller.samples = _to_samples(samples)
    return [r.to_dict() for r in controller.analyze(cancel=cancel)]
