"""
Headline Pipeline — Per-Article Composition

Combines the pieces for one headline:
  1. Suitability check (lexical, independent of the rewrite)
  2. Rule engine rewrite
  3. Linguistic rewrite, only when no rule matched
  4. Linguistic summary rewrite (always, when a tagger is available)

Batches never abort: an article that fails to process is logged and
skipped.
"""

from __future__ import annotations

import logging
from typing import Optional

import diff_match_patch as dmp_module

from blamemom.config import settings
from blamemom.engine import HeadlineEngine, engine as default_engine, normalize
from blamemom.fetcher import Article
from blamemom.linguistic.factory import get_tagger
from blamemom.linguistic.rewriter import LinguisticRewriter
from blamemom.rules import FALLBACK_PREFIX
from blamemom.suitability import is_suitable

logger = logging.getLogger(__name__)

# Shared diff engine; diff_main keeps no state between calls
_dmp = dmp_module.diff_match_patch()

_SPAN_TYPES = {
    _dmp.DIFF_EQUAL: "equal",
    _dmp.DIFF_DELETE: "delete",
    _dmp.DIFF_INSERT: "insert",
}


def compute_diff_spans(original: str, transformed: str) -> list[dict]:
    """
    Which parts of a headline survived the rewrite and what your mother
    brought along.

    Each span carries its text and offsets: orig_start/orig_end into the
    headline as published, new_start/new_end into the rewrite. Cut text
    only has the former, added text only the latter.
    """
    diffs = _dmp.diff_main(original, transformed)
    _dmp.diff_cleanupSemantic(diffs)

    spans = []
    in_headline = 0
    in_rewrite = 0

    for op, chunk in diffs:
        span = {"type": _SPAN_TYPES[op], "text": chunk}
        if op != _dmp.DIFF_INSERT:
            span["orig_start"] = in_headline
            span["orig_end"] = in_headline + len(chunk)
            in_headline += len(chunk)
        if op != _dmp.DIFF_DELETE:
            span["new_start"] = in_rewrite
            span["new_end"] = in_rewrite + len(chunk)
            in_rewrite += len(chunk)
        spans.append(span)

    return spans


class HeadlinePipeline:
    """Turns headlines (or fetched articles) into display records."""

    def __init__(
        self,
        engine: Optional[HeadlineEngine] = None,
        linguistic: Optional[LinguisticRewriter] = None,
    ):
        self._engine = engine or default_engine
        self._linguistic = linguistic

    @property
    def linguistic_enabled(self) -> bool:
        return self._linguistic is not None

    def rewrite_title(self, headline: str) -> tuple[str, Optional[str]]:
        """
        Rewrite a headline, escalating to the linguistic layer when no
        rule matched. Returns (transformed, rule_id) where rule_id is
        "linguistic" for an escalated rewrite and None for the fallback.
        """
        outcome = self._engine.apply(headline)
        if outcome.matched or self._linguistic is None:
            return outcome.text, outcome.rule_id

        rewritten = self._linguistic.rewrite_headline(headline)
        if rewritten != headline and not rewritten.startswith(FALLBACK_PREFIX):
            return normalize(rewritten), "linguistic"
        return outcome.text, None

    def rewrite_summary(self, summary: str) -> Optional[str]:
        if self._linguistic is None:
            return None
        return self._linguistic.rewrite_summary(summary)

    def process_headline(self, headline: str, summary: str = "") -> dict:
        """Ad-hoc transform of a single headline (with diff spans)."""
        transformed, rule_id = self.rewrite_title(headline)
        return {
            "original": headline,
            "transformed": transformed,
            "funny_summary": self.rewrite_summary(summary),
            "suitable": is_suitable(headline),
            "rule": rule_id,
            "diff_spans": compute_diff_spans(headline, transformed),
        }

    def process_article(self, article: Article) -> dict:
        transformed, rule_id = self.rewrite_title(article.title)
        return {
            "original": article.to_dict(),
            "transformed": transformed,
            "funny_summary": self.rewrite_summary(article.summary),
            "suitable": is_suitable(article.title),
            "rule": rule_id,
        }

    def process_batch(self, articles: list[Article]) -> list[dict]:
        records = []
        for article in articles:
            try:
                records.append(self.process_article(article))
            except Exception as e:
                logger.warning(
                    "Article processing failed",
                    extra={"error": str(e), "error_type": type(e).__name__,
                           "source": article.source},
                )
        return records


def build_pipeline() -> HeadlinePipeline:
    """Rule engine plus, when the configured tagger can load, the linguistic layer."""
    linguistic = None
    try:
        tagger = get_tagger(settings.TAGGER, model=settings.SPACY_MODEL)
        if tagger is not None:
            tagger.load()
            linguistic = LinguisticRewriter(tagger)
    except OSError as e:
        logger.warning(
            "Tagger unavailable, continuing without the linguistic layer",
            extra={"tagger": settings.TAGGER, "error": str(e)},
        )
    return HeadlinePipeline(engine=default_engine, linguistic=linguistic)
