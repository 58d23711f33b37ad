"""
Blame Mom — Satirical Headline Rewriting Engine

Fetches news headlines and rewrites them so that your mother is
responsible. Deterministic rule engine first, tagger-driven rewrite
when no rule recognizes the headline.

Public API:
  - transform:      Rule engine rewrite (passes non-strings through)
  - engine:         HeadlineEngine singleton (apply() also reports the rule)
  - normalize:      Output normalizer (whitespace, capital, terminal punctuation)
  - is_suitable:    Lexical "problem vocabulary" check
  - blame_mother:   Cause-clause rewriter
  - rewrite_content: Reported-content rewriter
  - LinguisticRewriter: Tagger-driven headline/summary rewriter
  - Tagger:         Abstract tagger interface for swapping NLP backends
  - HeadlinePipeline: Per-article composition used by the server

Usage:
    from blamemom import transform, is_suitable
    transform("Forever chemicals found in lemur habitat")
"""

__version__ = "1.0.0"

from blamemom.engine import (
    engine,
    transform,
    normalize,
    HeadlineEngine,
    RewriteOutcome,
    ENGINE_VERSION,
)
from blamemom.rules import HEADLINE_RULES, RewriteRule, FALLBACK_PREFIX
from blamemom.clauses import blame_mother, rewrite_content
from blamemom.suitability import is_suitable, PROBLEM_WORDS
from blamemom.linguistic import Tagger, TaggedText, Token, EntitySpan
from blamemom.linguistic.factory import get_tagger
from blamemom.linguistic.rewriter import (
    LinguisticRewriter,
    rewrite_headline_linguistically,
    rewrite_summary_linguistically,
)
from blamemom.pipeline import HeadlinePipeline

__all__ = [
    "engine",
    "transform",
    "normalize",
    "HeadlineEngine",
    "RewriteOutcome",
    "ENGINE_VERSION",
    "HEADLINE_RULES",
    "RewriteRule",
    "FALLBACK_PREFIX",
    "blame_mother",
    "rewrite_content",
    "is_suitable",
    "PROBLEM_WORDS",
    "Tagger",
    "TaggedText",
    "Token",
    "EntitySpan",
    "get_tagger",
    "LinguisticRewriter",
    "rewrite_headline_linguistically",
    "rewrite_summary_linguistically",
    "HeadlinePipeline",
]
