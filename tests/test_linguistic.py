"""
Linguistic Layer Tests

Exercises the tagger-driven rewriter against scripted tagger output:
  1. Headline: leading person / organization / noun phrase / fallback
  2. Summary: entity swaps, adverb insertion, closing line
  3. spaCy adapter mapping (duck-typed fake pipeline, no model needed)
  4. Tagger factory
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

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
    TaggedText,
)
from blamemom.linguistic.factory import get_tagger
from blamemom.linguistic.rewriter import (
    CLOSING_LINE,
    LinguisticRewriter,
    rewrite_headline_linguistically,
    rewrite_summary_linguistically,
)
from blamemom.linguistic.spacy_tagger import SpacyTagger


# ============================================================
# HEADLINES
# ============================================================

class TestHeadlineEntities:
    def test_leading_person_followed_by_verb(self, fake_tagger, make_tagged):
        headline = "Boris Johnson says pollution is fine"
        fake_tagger.add(make_tagged(
            headline,
            [("Boris", NOUN), ("Johnson", NOUN), ("says", VERB), ("pollution", NOUN),
             ("is", VERB), ("fine", ADJECTIVE)],
            entities=[("Boris Johnson", PERSON)],
        ))
        result = rewrite_headline_linguistically(headline, fake_tagger)
        assert result == "Your mother says pollution is fine"

    def test_leading_organization_followed_by_verb(self, fake_tagger, make_tagged):
        headline = "Greenpeace warns of plastic crisis"
        fake_tagger.add(make_tagged(
            headline,
            [("Greenpeace", NOUN), ("warns", VERB), ("of", OTHER), ("plastic", ADJECTIVE),
             ("crisis", NOUN)],
            entities=[("Greenpeace", ORGANIZATION)],
        ))
        result = LinguisticRewriter(fake_tagger).rewrite_headline(headline)
        assert result == "Your mother's bridge club warns of plastic crisis"

    def test_person_wins_over_organization(self, fake_tagger, make_tagged):
        headline = "Musk slams Tesla critics"
        fake_tagger.add(make_tagged(
            headline,
            [("Musk", NOUN), ("slams", VERB), ("Tesla", NOUN), ("critics", NOUN)],
            entities=[("Musk", PERSON), ("Tesla", ORGANIZATION)],
        ))
        assert rewrite_headline_linguistically(headline, fake_tagger) == "Your mother slams Tesla critics"

    def test_person_not_followed_by_verb_uses_noun_phrase(self, fake_tagger, make_tagged):
        headline = "Obama's dog dies"
        fake_tagger.add(make_tagged(
            headline,
            [("Obama", NOUN), ("'s", OTHER), ("dog", NOUN), ("dies", VERB)],
            entities=[("Obama", PERSON)],
        ))
        assert rewrite_headline_linguistically(headline, fake_tagger) == "Your mother's dog dies"


class TestHeadlineNounPhrase:
    def test_determiners_and_adjectives_included(self, fake_tagger, make_tagged):
        headline = "The polar bear population declining due to melting ice caps"
        fake_tagger.add(make_tagged(
            headline,
            [("The", DETERMINER), ("polar", ADJECTIVE), ("bear", NOUN), ("population", NOUN),
             ("declining", VERB), ("due", ADJECTIVE), ("to", OTHER), ("melting", VERB),
             ("ice", NOUN), ("caps", NOUN)],
        ))
        result = rewrite_headline_linguistically(headline, fake_tagger)
        assert result == "Your mother declining due to melting ice caps"

    def test_passive_gets_same_substitution(self, fake_tagger, make_tagged):
        headline = "The body was found in the river"
        fake_tagger.add(make_tagged(
            headline,
            [("The", DETERMINER), ("body", NOUN), ("was", VERB), ("found", VERB, True),
             ("in", OTHER), ("the", DETERMINER), ("river", NOUN)],
        ))
        assert rewrite_headline_linguistically(headline, fake_tagger) == (
            "Your mother was found in the river"
        )

    def test_clause_without_noun_falls_back(self, fake_tagger, make_tagged):
        headline = "Shockingly, experts disagree"
        fake_tagger.add(make_tagged(
            headline,
            [("Shockingly", OTHER), (",", PUNCTUATION), ("experts", NOUN), ("disagree", VERB)],
        ))
        assert rewrite_headline_linguistically(headline, fake_tagger) == (
            "Your mother is responsible for: Shockingly, experts disagree"
        )

    def test_only_first_sentence_considered(self, fake_tagger, make_tagged):
        headline = "Wow! Fish vanish"
        fake_tagger.add(make_tagged(
            headline,
            [("Wow", OTHER), ("!", PUNCTUATION), ("Fish", NOUN), ("vanish", VERB)],
            sentences=["Wow!", "Fish vanish"],
        ))
        assert rewrite_headline_linguistically(headline, fake_tagger).startswith(
            "Your mother is responsible for:"
        )

    def test_existing_mother_reference_falls_back(self, fake_tagger, make_tagged):
        headline = "Mother of three wins lottery"
        fake_tagger.add(make_tagged(
            headline,
            [("Mother", NOUN), ("of", OTHER), ("three", OTHER), ("wins", VERB), ("lottery", NOUN)],
        ))
        assert rewrite_headline_linguistically(headline, fake_tagger) == (
            "Your mother is responsible for: Mother of three wins lottery"
        )


class TestHeadlineEdgeCases:
    def test_untaggable_text_falls_back(self, fake_tagger):
        assert rewrite_headline_linguistically("Zzz", fake_tagger) == "Your mother is responsible for: Zzz"

    def test_non_string_passthrough(self, fake_tagger):
        rewriter = LinguisticRewriter(fake_tagger)
        assert rewriter.rewrite_headline(None) is None
        assert rewriter.rewrite_headline("") == ""
        assert fake_tagger.calls == []


class TestHeadlineHyphens:
    def test_hyphenated_modifier_joins_phrase(self, fake_tagger, make_tagged):
        headline = "Long-awaited report blames drivers"
        fake_tagger.add(make_tagged(
            headline,
            [("Long", ADJECTIVE), ("-", PUNCTUATION), ("awaited", VERB, True), ("report", NOUN),
             ("blames", VERB), ("drivers", NOUN)],
        ))
        assert rewrite_headline_linguistically(headline, fake_tagger) == "Your mother blames drivers"

    def test_hyphenated_noun(self, fake_tagger, make_tagged):
        headline = "Ex-president admits fraud"
        fake_tagger.add(make_tagged(
            headline,
            [("Ex", OTHER), ("-", PUNCTUATION), ("president", NOUN), ("admits", VERB),
             ("fraud", NOUN)],
        ))
        assert rewrite_headline_linguistically(headline, fake_tagger) == "Your mother admits fraud"

    def test_compound_with_number(self, fake_tagger, make_tagged):
        headline = "Covid-19 cases rise sharply"
        fake_tagger.add(make_tagged(
            headline,
            [("Covid", NOUN), ("-", PUNCTUATION), ("19", OTHER), ("cases", NOUN),
             ("rise", VERB), ("sharply", OTHER)],
        ))
        assert rewrite_headline_linguistically(headline, fake_tagger) == "Your mother rise sharply"

    def test_spaced_dash_still_ends_clause(self, fake_tagger, make_tagged):
        headline = "Breaking - ministers resign"
        fake_tagger.add(make_tagged(
            headline,
            [("Breaking", VERB), ("-", PUNCTUATION), ("ministers", NOUN), ("resign", VERB)],
        ))
        assert rewrite_headline_linguistically(headline, fake_tagger) == (
            "Your mother is responsible for: Breaking - ministers resign"
        )


# ============================================================
# SUMMARIES
# ============================================================

class TestSummary:
    def test_all_edits_applied(self, fake_tagger, make_tagged):
        summary = "John Smith met Acme Corp officials in Paris. They signed a deal."
        fake_tagger.add(make_tagged(
            summary,
            [("John", NOUN), ("Smith", NOUN), ("met", VERB, True), ("Acme", NOUN), ("Corp", NOUN),
             ("officials", NOUN), ("in", OTHER), ("Paris", NOUN), (".", PUNCTUATION),
             ("They", NOUN), ("signed", VERB, True), ("a", DETERMINER), ("deal", NOUN),
             (".", PUNCTUATION)],
            entities=[("John Smith", PERSON), ("Acme Corp", ORGANIZATION), ("Paris", PLACE)],
            sentences=["John Smith met Acme Corp officials in Paris.", "They signed a deal."],
        ))
        result = rewrite_summary_linguistically(summary, fake_tagger)
        assert result == (
            "Your mother met your mother's bridge club officials in your mother's basement. "
            "They clumsily signed a deal. And frankly, it's all your mother's fault."
        )

    def test_single_sentence_adverb(self, fake_tagger, make_tagged):
        summary = "Officials say the river is safe."
        fake_tagger.add(make_tagged(
            summary,
            [("Officials", NOUN), ("say", VERB), ("the", DETERMINER), ("river", NOUN),
             ("is", VERB), ("safe", ADJECTIVE), (".", PUNCTUATION)],
            sentences=[summary],
        ))
        assert rewrite_summary_linguistically(summary, fake_tagger) == (
            "Officials clumsily say the river is safe. " + CLOSING_LINE
        )

    def test_mid_sentence_person_stays_lowercase(self, fake_tagger, make_tagged):
        summary = "Police questioned Jane Doe yesterday."
        fake_tagger.add(make_tagged(
            summary,
            [("Police", NOUN), ("questioned", VERB, True), ("Jane", NOUN), ("Doe", NOUN),
             ("yesterday", NOUN), (".", PUNCTUATION)],
            entities=[("Jane Doe", PERSON)],
            sentences=[summary],
        ))
        assert rewrite_summary_linguistically(summary, fake_tagger) == (
            "Police clumsily questioned your mother yesterday. " + CLOSING_LINE
        )

    def test_existing_clumsily_and_fault_leave_text_alone(self, fake_tagger, make_tagged):
        summary = "The minister clumsily blamed a fault in the grid."
        fake_tagger.add(make_tagged(
            summary,
            [("The", DETERMINER), ("minister", NOUN), ("clumsily", OTHER), ("blamed", VERB, True),
             ("a", DETERMINER), ("fault", NOUN), ("in", OTHER), ("the", DETERMINER),
             ("grid", NOUN), (".", PUNCTUATION)],
            sentences=[summary],
        ))
        assert rewrite_summary_linguistically(summary, fake_tagger) == summary

    def test_mother_person_is_not_replaced(self, fake_tagger, make_tagged):
        summary = "Mother Teresa was remembered"
        fake_tagger.add(make_tagged(
            summary,
            [("Mother", NOUN), ("Teresa", NOUN), ("was", VERB), ("remembered", VERB, True)],
            entities=[("Mother Teresa", PERSON)],
        ))
        result = rewrite_summary_linguistically(summary, fake_tagger)
        assert result.startswith("Mother Teresa clumsily was remembered")

    def test_nothing_detected_only_appends(self, fake_tagger):
        assert rewrite_summary_linguistically("Nothing to see", fake_tagger) == (
            "Nothing to see " + CLOSING_LINE
        )

    def test_verb_tagged_on_replaced_entity_gets_no_adverb(self, fake_tagger, make_tagged):
        # Tagger mislabels the company name as a verb
        summary = "Uber raises prices."
        fake_tagger.add(make_tagged(
            summary,
            [("Uber", VERB), ("raises", VERB), ("prices", NOUN), (".", PUNCTUATION)],
            entities=[("Uber", ORGANIZATION)],
            sentences=[summary],
        ))
        assert rewrite_summary_linguistically(summary, fake_tagger) == (
            "Your mother's bridge club raises prices. " + CLOSING_LINE
        )

    def test_empty_summary(self, fake_tagger):
        assert rewrite_summary_linguistically("", fake_tagger) == ""
        assert rewrite_summary_linguistically(None, fake_tagger) == ""


# ============================================================
# SPACY ADAPTER
# ============================================================

class _FakeDoc:
    def __init__(self, tokens, ents, sents):
        self._tokens = tokens
        self.ents = ents
        self.sents = sents

    def __iter__(self):
        return iter(self._tokens)


def _fake_nlp(text):
    tokens = [
        SimpleNamespace(text="Greta", idx=0, pos_="PROPN", tag_="NNP"),
        SimpleNamespace(text="Thunberg", idx=6, pos_="PROPN", tag_="NNP"),
        SimpleNamespace(text="visited", idx=15, pos_="VERB", tag_="VBD"),
        SimpleNamespace(text="Oslo", idx=23, pos_="PROPN", tag_="NNP"),
        SimpleNamespace(text=".", idx=27, pos_="PUNCT", tag_="."),
    ]
    ents = [
        SimpleNamespace(label_="PERSON", start_char=0, end_char=14),
        SimpleNamespace(label_="GPE", start_char=23, end_char=27),
        SimpleNamespace(label_="DATE", start_char=0, end_char=0),
    ]
    sents = [SimpleNamespace(start_char=0, end_char=28)]
    return _FakeDoc(tokens, ents, sents)


class TestSpacyTagger:
    def test_maps_doc_to_tagged_text(self):
        tagger = SpacyTagger(nlp=_fake_nlp)
        tagged = tagger.tag("Greta Thunberg visited Oslo.")

        assert isinstance(tagged, TaggedText)
        assert [t.pos for t in tagged.tokens] == [NOUN, NOUN, VERB, NOUN, PUNCTUATION]
        assert tagged.tokens[2].past is True
        assert tagged.tokens[0].past is False
        assert [(e.label, e.start, e.end) for e in tagged.entities] == [
            (PERSON, 0, 14),
            (PLACE, 23, 27),
        ]
        assert tagged.sentences == [(0, 28)]

    def test_rewriter_on_spacy_output(self):
        tagger = SpacyTagger(nlp=_fake_nlp)
        result = LinguisticRewriter(tagger).rewrite_headline("Greta Thunberg visited Oslo.")
        assert result == "Your mother visited Oslo."

    def test_model_name_from_settings(self):
        tagger = SpacyTagger(nlp=_fake_nlp)
        assert tagger.model_name == settings.SPACY_MODEL


class TestTaggerFactory:
    def test_spacy_is_lazy(self):
        tagger = get_tagger("spacy", model="some_model_that_is_not_installed")
        assert isinstance(tagger, SpacyTagger)
        assert tagger.model_name == "some_model_that_is_not_installed"

    def test_none_disables(self):
        assert get_tagger("none") is None

    def test_unknown_raises(self):
        with pytest.raises(ValueError):
            get_tagger("telepathy")
