"""
Linguistic Rewriter — Tagger-Driven Mother Substitution

Secondary rewrite path for headlines the rule set does not recognize,
and the only rewrite path for article summaries. Works on the tagger's
view of the sentence (entities, noun phrases, verbs) rather than on
fixed surface shapes.

Headline, first applicable step wins:
  1. Leading person + verb       -> "Your mother ..."
  2. Leading organization + verb -> "Your mother's bridge club ..."
  3. First noun phrase of the first clause -> "Your mother"
  4. "Your mother is responsible for: <headline>"

Summary, every step best-effort and independent:
  person -> your mother, organization -> your mother's bridge club,
  place -> your mother's basement, "clumsily" before a verb, and a
  closing line unless someone already mentions fault.
"""

from __future__ import annotations

import logging
from typing import Optional

from blamemom.linguistic import (
    ADJECTIVE,
    DETERMINER,
    NOUN,
    ORGANIZATION,
    PERSON,
    PLACE,
    PUNCTUATION,
    VERB,
    EntitySpan,
    TaggedText,
    Tagger,
    Token,
)
from blamemom.rules import FALLBACK_PREFIX

logger = logging.getLogger(__name__)

HEADLINE_PERSON = "Your mother"
HEADLINE_ORGANIZATION = "Your mother's bridge club"

SUMMARY_PERSON = "your mother"
SUMMARY_ORGANIZATION = "your mother's bridge club"
SUMMARY_PLACE = "your mother's basement"
ADVERB = "clumsily"
CLOSING_LINE = "And frankly, it's all your mother's fault."

CLAUSE_BREAKS = frozenset({",", ";", ":", "-", "--", "–", "—"})
PASSIVE_AUXILIARIES = frozenset({"is", "was", "are", "were"})

# (start, end, replacement); start == end is an insertion
Edit = tuple[int, int, str]


def _is_mother_reference(text: str) -> bool:
    return "mother" in text.lower()


def _splice(text: str, start: int, end: int, replacement: str) -> str:
    return text[:start] + replacement + text[end:]


def _apply_edits(text: str, edits: list[Edit]) -> str:
    for start, end, replacement in sorted(edits, key=lambda e: e[0], reverse=True):
        text = _splice(text, start, end, replacement)
    return text


def _overlaps(position: int, edits: list[Edit]) -> bool:
    return any(start <= position < end for start, end, _ in edits)


def _is_word_hyphen(tagged: TaggedText, token: Token) -> bool:
    """A hyphen inside a compound ("Long-awaited"), not a dash between clauses."""
    text = tagged.text
    return (
        token.text == "-"
        and token.start > 0
        and token.end < len(text)
        and not text[token.start - 1].isspace()
        and not text[token.end].isspace()
    )


class LinguisticRewriter:
    """Rewrites headlines and summaries using a pluggable Tagger."""

    def __init__(self, tagger: Tagger):
        self._tagger = tagger

    @property
    def tagger(self) -> Tagger:
        return self._tagger

    # --------------------------------------------------------
    # Headlines
    # --------------------------------------------------------

    def rewrite_headline(self, headline: str) -> str:
        if not isinstance(headline, str) or not headline.strip():
            return headline

        tagged = self._tagger.tag(headline)
        if not tagged.tokens:
            return FALLBACK_PREFIX + headline

        for label, replacement in (
            (PERSON, HEADLINE_PERSON),
            (ORGANIZATION, HEADLINE_ORGANIZATION),
        ):
            entity = self._leading_entity(tagged, label)
            if entity is not None:
                return _splice(headline, entity.start, entity.end, replacement)

        phrase = self._subject_phrase(tagged)
        if phrase is not None:
            start, end = phrase
            if not _is_mother_reference(headline[start:end]):
                if self._is_passive(tagged, end):
                    logger.debug("Passive subject replaced")
                return _splice(headline, start, end, HEADLINE_PERSON)

        return FALLBACK_PREFIX + headline

    @staticmethod
    def _leading_entity(tagged: TaggedText, label: str) -> Optional[EntitySpan]:
        """Entity of this label that opens the text and is followed by a verb."""
        first = tagged.tokens[0]
        for entity in tagged.entities:
            if entity.label != label or entity.start != first.start:
                continue
            following = tagged.token_after(entity.end)
            if following is not None and following.pos == VERB:
                return entity
        return None

    @staticmethod
    def _first_clause(tagged: TaggedText) -> list[Token]:
        start, end = tagged.sentence_spans()[0]
        clause = []
        for token in tagged.tokens_between(start, end):
            if (
                token.pos == PUNCTUATION
                and token.text in CLAUSE_BREAKS
                and not _is_word_hyphen(tagged, token)
            ):
                break
            clause.append(token)
        return clause

    def _subject_phrase(self, tagged: TaggedText) -> Optional[tuple[int, int]]:
        """
        Character span of the first noun phrase in the first clause.

        A noun phrase is a run of nouns plus the determiners and
        adjectives directly in front of it. Hyphenated compounds count
        as one word, so "Long-awaited report" is a single phrase.
        """
        words = self._words(tagged, self._first_clause(tagged))
        for i, (_, _, pos) in enumerate(words):
            if pos != NOUN:
                continue
            j = i
            while j + 1 < len(words) and words[j + 1][2] == NOUN:
                j += 1
            k = i
            while k > 0 and words[k - 1][2] in (DETERMINER, ADJECTIVE):
                k -= 1
            return words[k][0], words[j][1]
        return None

    @staticmethod
    def _words(tagged: TaggedText, tokens: list[Token]) -> list[tuple[int, int, str]]:
        """
        Merge hyphen-joined tokens into (start, end, pos) words.

        A compound ending in a noun is a noun ("Ex-president"); any other
        compound built from content words modifies what follows
        ("Long-awaited", "Storm-hit", "Covid-19").
        """
        words = []
        i = 0
        while i < len(tokens):
            parts = [tokens[i]]
            while i + 2 < len(tokens) and _is_word_hyphen(tagged, tokens[i + 1]):
                parts.append(tokens[i + 2])
                i += 2
            i += 1

            pos = parts[-1].pos
            if len(parts) > 1 and pos != NOUN and any(
                p.pos in (NOUN, VERB, ADJECTIVE) for p in parts
            ):
                pos = ADJECTIVE
            words.append((parts[0].start, parts[-1].end, pos))
        return words

    @staticmethod
    def _is_passive(tagged: TaggedText, phrase_end: int) -> bool:
        """NP (is|was|are|were) [adjective] past-participle."""
        following = [t for t in tagged.tokens if t.start >= phrase_end][:3]
        if not following or following[0].text.lower() not in PASSIVE_AUXILIARIES:
            return False
        rest = following[1:]
        if rest and rest[0].pos == ADJECTIVE:
            rest = rest[1:]
        return bool(rest) and rest[0].past

    # --------------------------------------------------------
    # Summaries
    # --------------------------------------------------------

    def rewrite_summary(self, summary: str) -> str:
        if not isinstance(summary, str) or not summary.strip():
            return ""

        tagged = self._tagger.tag(summary)
        sentence_starts = {start for start, _ in tagged.sentence_spans()}
        edits: list[Edit] = []

        person = tagged.first_entity(PERSON)
        if person is not None and not _is_mother_reference(tagged.span_text(person.start, person.end)):
            edits.append((person.start, person.end, SUMMARY_PERSON))

        for label, replacement in ((ORGANIZATION, SUMMARY_ORGANIZATION), (PLACE, SUMMARY_PLACE)):
            entity = tagged.first_entity(label)
            if entity is not None:
                edits.append((entity.start, entity.end, replacement))

        # Capitalize replacements that open a sentence
        edits = [
            (start, end, replacement[:1].upper() + replacement[1:] if start in sentence_starts else replacement)
            for start, end, replacement in edits
        ]

        verb = self._adverb_target(tagged)
        if verb is not None and not _overlaps(verb.start, edits):
            edits.append((verb.start, verb.start, f"{ADVERB} "))

        text = _apply_edits(summary, edits)

        if "fault" not in text.lower():
            text = f"{text.rstrip()} {CLOSING_LINE}"

        return text

    @staticmethod
    def _adverb_target(tagged: TaggedText) -> Optional[Token]:
        """First verb of the second sentence (or the first), unless already clumsy."""
        spans = tagged.sentence_spans()
        start, end = spans[1] if len(spans) > 1 else spans[0]
        if ADVERB in tagged.span_text(start, end).lower():
            return None
        for token in tagged.tokens_between(start, end):
            if token.pos == VERB:
                return token
        return None


def rewrite_headline_linguistically(headline: str, tagger: Tagger) -> str:
    return LinguisticRewriter(tagger).rewrite_headline(headline)


def rewrite_summary_linguistically(summary: str, tagger: Tagger) -> str:
    return LinguisticRewriter(tagger).rewrite_summary(summary)
