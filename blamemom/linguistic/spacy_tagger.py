"""
spaCy Tagger

Maps a spaCy Doc onto the TaggedText interface. The pipeline is loaded
lazily on first use so that importing this module stays cheap.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import spacy

from blamemom.config import settings
from blamemom.linguistic import (
    ADJECTIVE,
    DETERMINER,
    NOUN,
    ORGANIZATION,
    OTHER,
    PERSON,
    PLACE,
    PUNCTUATION,
    VERB,
    EntitySpan,
    TaggedText,
    Tagger,
    Token,
)

logger = logging.getLogger(__name__)

# Universal POS tags -> coarse classes
POS_MAP: dict[str, str] = {
    "NOUN": NOUN,
    "PROPN": NOUN,
    "PRON": NOUN,
    "VERB": VERB,
    "AUX": VERB,
    "ADJ": ADJECTIVE,
    "DET": DETERMINER,
    "PUNCT": PUNCTUATION,
}

# OntoNotes entity labels -> entity categories
ENTITY_MAP: dict[str, str] = {
    "PERSON": PERSON,
    "ORG": ORGANIZATION,
    "GPE": PLACE,
    "LOC": PLACE,
    "FAC": PLACE,
}

PAST_TAGS = frozenset({"VBD", "VBN"})


class SpacyTagger(Tagger):
    """Tagger backed by a spaCy pipeline."""

    name = "spacy"

    def __init__(self, model_name: Optional[str] = None, nlp: Any = None):
        self.model_name = model_name or settings.SPACY_MODEL
        self._nlp = nlp
        self._lock = threading.Lock()

    def _get_nlp(self):
        if self._nlp is None:
            with self._lock:
                if self._nlp is None:
                    logger.info("Loading spaCy model", extra={"tagger": self.model_name})
                    self._nlp = spacy.load(self.model_name)
        return self._nlp

    def load(self) -> None:
        """Load the model eagerly (raises OSError if it is not installed)."""
        self._get_nlp()

    def tag(self, text: str) -> TaggedText:
        doc = self._get_nlp()(text)

        tokens = [
            Token(
                text=t.text,
                start=t.idx,
                pos=POS_MAP.get(t.pos_, OTHER),
                past=t.tag_ in PAST_TAGS,
            )
            for t in doc
        ]
        entities = [
            EntitySpan(label=ENTITY_MAP[ent.label_], start=ent.start_char, end=ent.end_char)
            for ent in doc.ents
            if ent.label_ in ENTITY_MAP
        ]
        sentences = [(s.start_char, s.end_char) for s in doc.sents]

        return TaggedText(text=text, tokens=tokens, entities=entities, sentences=sentences)
