"""
Shared fixtures: a scripted tagger so the linguistic layer can be
tested without an NLP model.
"""

from __future__ import annotations

from typing import Optional

import pytest

from blamemom.linguistic import EntitySpan, TaggedText, Tagger, Token


def build_tagged(
    text: str,
    tags: list[tuple],
    entities: Optional[list[tuple[str, str]]] = None,
    sentences: Optional[list[str]] = None,
) -> TaggedText:
    """
    Build a TaggedText by locating each token/entity/sentence substring
    in order. tags are (text, pos) or (text, pos, past).
    """
    tokens = []
    cursor = 0
    for tag in tags:
        word, pos = tag[0], tag[1]
        past = tag[2] if len(tag) > 2 else False
        start = text.index(word, cursor)
        tokens.append(Token(text=word, start=start, pos=pos, past=past))
        cursor = start + len(word)

    spans = []
    for substring, label in entities or []:
        start = text.index(substring)
        spans.append(EntitySpan(label=label, start=start, end=start + len(substring)))

    sentence_spans = []
    cursor = 0
    for sentence in sentences or []:
        start = text.index(sentence, cursor)
        sentence_spans.append((start, start + len(sentence)))
        cursor = start + len(sentence)

    return TaggedText(text=text, tokens=tokens, entities=spans, sentences=sentence_spans)


class FakeTagger(Tagger):
    """Returns pre-scripted TaggedText; unknown text gets no tokens."""

    name = "fake"

    def __init__(self, scripted: Optional[dict[str, TaggedText]] = None):
        self._scripted = dict(scripted or {})
        self.calls: list[str] = []

    def add(self, tagged: TaggedText) -> "FakeTagger":
        self._scripted[tagged.text] = tagged
        return self

    def tag(self, text: str) -> TaggedText:
        self.calls.append(text)
        return self._scripted.get(text, TaggedText(text=text))


@pytest.fixture
def make_tagged():
    return build_tagged


@pytest.fixture
def fake_tagger():
    return FakeTagger()
