"""
Purpose: Token math & cost estimation for embedding calls.
Central pricing logic so UI/controller do not duplicate calculations.
"""

from ..models import Price


PRICE_TABLE = {
    "text-embedding-3-small": Price(0.02),
    "text-embedding-3-large": Price(0.13),
    "text-embedding-ada-002": Price(0.10),
}


def estimate_cost(model: str, tokens_in: int) -> float:
    p = PRICE_TABLE.get(model, Price(0.0))
    return (tokens_in / 1000000) * p.input_per_1M


def estimate_tokens_from_text(text: str) -> int:
    """Fast heuristic: ~4 chars per token."""
    t = (text or "").strip()
    if not t:
        return 0

    return (len(t) + 3) // 4
