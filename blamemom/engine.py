"""
Headline Engine — Rule Orchestration and Output Normalization

Runs the static rule set against a headline (first match wins),
normalizes the draft, and falls back to plain responsibility when
no rule recognizes the shape.

The engine holds no mutable state and does no I/O. It is instantiated
once as a singleton and is safe to call from any number of callers.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from blamemom.config import settings
from blamemom.rules import FALLBACK_PREFIX, HEADLINE_RULES, RewriteRule

logger = logging.getLogger(__name__)

ENGINE_VERSION = settings.ENGINE_VERSION

_WHITESPACE = re.compile(r"\s+")
_TERMINAL_PUNCTUATION = (".", "!", "?")


@dataclass(frozen=True)
class RewriteOutcome:
    """Result of running the rule set over one headline."""
    text: str
    rule_id: Optional[str]   # None when the absolute fallback was used

    @property
    def matched(self) -> bool:
        return self.rule_id is not None


def normalize(text: str) -> str:
    """Collapse whitespace, capitalize, and make sure the sentence is terminated."""
    text = _WHITESPACE.sub(" ", text).strip()
    text = text[:1].upper() + text[1:]
    if not text.endswith(_TERMINAL_PUNCTUATION):
        text += "."
    return text


class HeadlineEngine:
    """
    Deterministic headline rewriter.

    Rules are evaluated in list order; the first whose pattern matches
    produces the draft. Headlines no rule recognizes get the fallback
    prefix.
    """

    def __init__(self, rules: Optional[list[RewriteRule]] = None):
        self._rules = list(rules) if rules is not None else list(HEADLINE_RULES)

    @property
    def rules(self) -> list[RewriteRule]:
        return list(self._rules)

    def apply(self, headline: str) -> RewriteOutcome:
        """
        Rewrite a headline and report which rule fired.

        Args:
            headline: A non-empty headline string.

        Returns:
            RewriteOutcome with the normalized text and the rule id
            (None if the fallback was used).
        """
        for rule in self._rules:
            match = rule.match(headline)
            if match:
                logger.debug("Rule matched", extra={"rule_id": rule.id})
                return RewriteOutcome(text=normalize(rule.rewrite(match)), rule_id=rule.id)

        return RewriteOutcome(text=normalize(FALLBACK_PREFIX + headline), rule_id=None)

    def transform(self, headline: Any) -> Any:
        """
        Rewrite a headline to blame your mother.

        Anything that is not a usable string (None, non-str, empty)
        is returned unchanged.
        """
        if not isinstance(headline, str) or not headline:
            return headline
        return self.apply(headline).text


# ============================================================
# SINGLETON: instantiated once, never mutated
# ============================================================

engine = HeadlineEngine()


def transform(headline: Any) -> Any:
    """Module-level shortcut for engine.transform."""
    return engine.transform(headline)
