"""
Clause Rewriters

Helpers invoked by the headline rules to recast a subordinate clause
into a form that reads naturally after "your mother":

  - blame_mother:    the cause clause of a decline/rise headline
  - rewrite_content: the reported content of a "<source> reports ..." headline
"""

from __future__ import annotations

import re

# --- blame_mother ---

_LEADING_CONNECTIVE = re.compile(
    r"^(?:after|due\s+to|because\s+of|when|as)\s+", re.IGNORECASE,
)
_PASSIVE_FOUND = re.compile(r"\b(?:are|were|is|was)\s+found\b", re.IGNORECASE)
# Prefix match on purpose: "causes", "released", "makes" all count
_ACTION_VERB_START = re.compile(
    r"^(?:put|pour|spread|release|dump|throw|cause|create|make)", re.IGNORECASE,
)
_PARTICIPLE_START = re.compile(r"^[a-z]+ing\s", re.IGNORECASE)

# --- rewrite_content ---

_LEADING_THAT = re.compile(r"^that\s+", re.IGNORECASE)
_CONTENT_ACTION_VERB = re.compile(
    r"\s(?:threatens|damaging|destroying|killing|harming)\s", re.IGNORECASE,
)
_PASSIVE_CONSTRUCTION = re.compile(
    r"(?P<subject>.+?)\s+(?:is|are|was|were|has\s+been|have\s+been)\s+"
    r"(?P<stem>.+?)(?P<ending>ing|ed)\s+(?P<object>.+)",
    re.IGNORECASE,
)
_LINKED_TO = re.compile(r"(?P<subject>.+?)\s+linked\s+to\s+(?P<target>.+)", re.IGNORECASE)
_LEADING_ARTICLE = re.compile(r"^(?:the|a|an)\s+", re.IGNORECASE)


def blame_mother(clause: str) -> str:
    """
    Recast a cause clause so it can follow "because your mother".

      "after heavy rainfall"          -> "caused heavy rainfall"
      "chemicals are found in water"  -> "caused chemicals put in water"
      "dumping waste in rivers"       -> "dumping waste in rivers"
    """
    clause = clause.strip()
    clause = _LEADING_CONNECTIVE.sub("", clause, count=1)

    if _PASSIVE_FOUND.search(clause):
        clause = _PASSIVE_FOUND.sub("put", clause, count=1)

    if not _ACTION_VERB_START.match(clause) and not _PARTICIPLE_START.match(clause):
        clause = f"caused {clause}".strip()

    return clause


def rewrite_content(content: str) -> str:
    """
    Recast reported content so it can follow "reports that your mother".

    Tried in order: existing action verb, passive flip, "X linked to Y",
    leading article, and finally plain responsibility.
    """
    content = _LEADING_THAT.sub("", content.strip(), count=1)

    if _CONTENT_ACTION_VERB.search(content):
        return f"is {content}"

    passive = _PASSIVE_CONSTRUCTION.search(content)
    if passive:
        action = passive.group("stem") + passive.group("ending")
        flipped = f"{action} {passive.group('subject')} {passive.group('object')}"
        return re.sub(r"\s+", " ", flipped).strip()

    linked = _LINKED_TO.search(content)
    if linked:
        return f"linked her {linked.group('subject')} to {linked.group('target')}"

    if _LEADING_ARTICLE.match(content):
        return f"caused {content}"

    return f"is responsible for {content}"
