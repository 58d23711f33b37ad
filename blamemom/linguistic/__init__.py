"""
Tagger — Abstract Interface

The linguistic layer never talks to an NLP library directly. It asks a
Tagger for a TaggedText: tokens with coarse grammatical classes, entity
spans (person, organization, place) and sentence boundaries. Swap
taggers by changing BLAMEMOM_TAGGER in env.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

# Coarse grammatical classes a tagger maps its own tag set onto
NOUN = "noun"
VERB = "verb"
ADJECTIVE = "adjective"
DETERMINER = "determiner"
PUNCTUATION = "punctuation"
OTHER = "other"

# Entity categories
PERSON = "person"
ORGANIZATION = "organization"
PLACE = "place"


@dataclass(frozen=True)
class Token:
    """A single token with its character offset into the tagged text."""
    text: str
    start: int
    pos: str = OTHER
    past: bool = False     # past tense or past participle

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True)
class EntitySpan:
    """A named-entity mention, as character offsets."""
    label: str
    start: int
    end: int


@dataclass
class TaggedText:
    """Tagger output for one piece of text."""
    text: str
    tokens: list[Token] = field(default_factory=list)
    entities: list[EntitySpan] = field(default_factory=list)
    sentences: list[tuple[int, int]] = field(default_factory=list)

    def span_text(self, start: int, end: int) -> str:
        return self.text[start:end]

    def first_entity(self, label: str) -> Optional[EntitySpan]:
        for entity in self.entities:
            if entity.label == label:
                return entity
        return None

    def token_after(self, offset: int) -> Optional[Token]:
        """First token starting at or after a character offset."""
        for token in self.tokens:
            if token.start >= offset:
                return token
        return None

    def sentence_spans(self) -> list[tuple[int, int]]:
        """Sentence boundaries, or the whole text when the tagger gave none."""
        return self.sentences or [(0, len(self.text))]

    def tokens_between(self, start: int, end: int) -> list[Token]:
        return [t for t in self.tokens if t.start >= start and t.end <= end]


class Tagger(ABC):
    """Abstract base for part-of-speech/entity taggers."""

    name: str = "abstract"

    def load(self) -> None:
        """Prepare any models up front. Taggers without models need not override."""

    @abstractmethod
    def tag(self, text: str) -> TaggedText:
        """Tag a piece of text."""
        ...
