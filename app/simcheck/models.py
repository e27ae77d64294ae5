"""
Canonical data shapes, shared truth for typing/validation between layers.

Typical contents:
- TextSample (id, content, label): one text box on the board.
- SimilarityResult (pair, similarity, labels): one scored pair.
- RiskLevel: four-level ordinal category for a similarity score.
- EmbeddingSettings (model, timeout, dimensions).

Testing: Trivial; mostly types. Derived properties are covered by risk tests.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from enum import Enum


class RiskLevel(str, Enum):
    HIGH = "High Risk"
    MEDIUM = "Medium Risk"
    LOW = "Low Risk"
    NONE = "No Risk"

    @property
    def color(self) -> str:
        return _RISK_COLORS[self]


_RISK_COLORS = {
    RiskLevel.HIGH: "red",
    RiskLevel.MEDIUM: "orange",
    RiskLevel.LOW: "yellow",
    RiskLevel.NONE: "green",
}


class AnalysisStatus(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class TextSample:
    id: str
    content: str
    label: str

    def is_blank(self) -> bool:
        return not self.content.replace("\x00", "").strip()

    @property
    def char_count(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class SimilarityResult:
    pair: tuple[int, int]
    similarity: float
    labels: tuple[str, str]

    @property
    def percent(self) -> float:
        return self.similarity * 100

    @property
    def risk(self) -> RiskLevel:
        from .services.risk import classify_risk

        return classify_risk(self.similarity)

    @property
    def needs_review(self) -> bool:
        from .services.risk import REVIEW_THRESHOLD

        return self.similarity >= REVIEW_THRESHOLD

    def to_dict(self) -> dict:
        return {
            "label_a": self.labels[0],
            "label_b": self.labels[1],
            "similarity": self.similarity,
        }


@dataclass(frozen=True)
class AnalysisSummary:
    total_pairs: int
    high_risk: int
    medium_risk: int
    top_score: Optional[float]


@dataclass
class EmbeddingSettings:
    model: str
    timeout: float = 30.0
    dimensions: Optional[int] = None


@dataclass(frozen=True)
class Price:
    input_per_1M: float
