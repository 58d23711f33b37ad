"""
Suitability Classifier

A headline is worth blaming on your mother when it mentions at least
one "problem" term. Pure lexical check: no scoring, no dependence on
whether a rewrite rule actually matches.
"""

from __future__ import annotations

PROBLEM_WORDS: tuple[str, ...] = (
    "decline", "crisis", "disaster", "damage", "destroy", "pollution",
    "contamination", "chemicals", "toxic", "harmful", "endangered",
    "threat", "risk", "problem", "issue", "concern", "loss", "death",
)


def is_suitable(headline: str) -> bool:
    """True if the headline contains any problem word (substring match)."""
    if not isinstance(headline, str):
        return False
    lowered = headline.lower()
    return any(word in lowered for word in PROBLEM_WORDS)
