from typing import Optional

from blamemom.linguistic import Tagger


def get_tagger(tagger_name: str = "spacy", model: Optional[str] = None) -> Optional[Tagger]:
    """Factory — returns the configured tagger, or None when disabled."""
    if tagger_name == "spacy":
        from blamemom.linguistic.spacy_tagger import SpacyTagger
        return SpacyTagger(model_name=model)
    elif tagger_name == "none":
        return None
    else:
        raise ValueError(f"Unknown tagger: {tagger_name}")
