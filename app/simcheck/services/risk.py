"""
Purpose: Map similarity scores to risk categories and summarise a result set.
Thresholds are fixed constants.
"""

from ..models import AnalysisSummary, RiskLevel, SimilarityResult

HIGH_RISK_THRESHOLD = 0.8
MEDIUM_RISK_THRESHOLD = 0.6
LOW_RISK_THRESHOLD = 0.4

REVIEW_THRESHOLD = MEDIUM_RISK_THRESHOLD


def classify_risk(similarity: float) -> RiskLevel:
    if similarity >= HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    if similarity >= MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    if similarity >= LOW_RISK_THRESHOLD:
        return RiskLevel.LOW
    return RiskLevel.NONE


def summarize(results: list[SimilarityResult]) -> AnalysisSummary:
    levels = [classify_risk(r.similarity) for r in results]
    return AnalysisSummary(
        total_pairs=len(results),
        high_risk=levels.count(RiskLevel.HIGH),
        medium_risk=levels.count(RiskLevel.MEDIUM),
        top_score=max((r.similarity for r in results), default=None),
    )
