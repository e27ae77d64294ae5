import pytest

from simcheck.models import RiskLevel, SimilarityResult
from simcheck.services.risk import classify_risk, summarize


@pytest.mark.parametrize(
    "score, expected",
    [
        (1.0, RiskLevel.HIGH),
        (0.8, RiskLevel.HIGH),
        (0.79, RiskLevel.MEDIUM),
        (0.6, RiskLevel.MEDIUM),
        (0.59, RiskLevel.LOW),
        (0.4, RiskLevel.LOW),
        (0.39, RiskLevel.NONE),
        (-0.5, RiskLevel.NONE),
    ],
)
def test_classify_risk_thresholds(score, expected):
    assert classify_risk(score) is expected


def test_risk_level_labels_and_colors():
    assert RiskLevel.HIGH.value == "High Risk"
    assert RiskLevel.HIGH.color == "red"
    assert RiskLevel.NONE.color == "green"


def test_result_derived_fields():
    r = SimilarityResult(pair=(0, 1), similarity=0.65, labels=("A", "B"))
    assert r.risk is RiskLevel.MEDIUM
    assert r.needs_review
    assert r.percent == pytest.approx(65.0)
    assert r.to_dict() == {"label_a": "A", "label_b": "B", "similarity": 0.65}

    low = SimilarityResult(pair=(0, 2), similarity=0.5, labels=("A", "C"))
    assert not low.needs_review


def test_summarize_counts_high_and_medium():
    results = [
        SimilarityResult((0, 1), 0.95, ("a", "b")),
        SimilarityResult((0, 2), 0.81, ("a", "c")),
        SimilarityResult((1, 2), 0.7, ("b", "c")),
        SimilarityResult((0, 3), 0.1, ("a", "d")),
    ]
    summary = summarize(results)
    assert summary.total_pairs == 4
    assert summary.high_risk == 2
    assert summary.medium_risk == 1
    assert summary.top_score == 0.95


def test_summarize_empty():
    summary = summarize([])
    assert summary.total_pairs == 0
    assert summary.top_score is None
