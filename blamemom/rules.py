"""
Headline Rules — The Static Rule Set

Each rule recognizes one headline shape and knows how to recast it
so that your mother ends up responsible. Rules overlap on purpose:
they are evaluated in the order they appear in HEADLINE_RULES and
only the first match fires.

The rule set does not learn or change at runtime. Adding a shape
means adding a RewriteRule here, in the right priority slot.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from blamemom.clauses import blame_mother, rewrite_content

FALLBACK_PREFIX = "Your mother is responsible for: "


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class RewriteRule:
    """
    A headline shape and its rewrite.

    The pattern is matched case-insensitively with named groups;
    the rewriter receives the match and returns a draft sentence
    (normalization happens later, in the engine).
    """
    id: str
    description: str
    pattern: re.Pattern
    rewrite: Callable[[re.Match], str]

    def match(self, headline: str) -> Optional[re.Match]:
        return self.pattern.search(headline)


def _compile(regex: str) -> re.Pattern:
    return re.compile(regex, re.IGNORECASE)


# ============================================================
# REWRITERS
# ============================================================

def _rewrite_decline_because(m: re.Match) -> str:
    cause = blame_mother(m.group("cause"))
    return f"{m.group('source')} {m.group('verb')} {m.group('state')} because your mother {cause}"


def _rewrite_found_in(m: re.Match) -> str:
    return (
        f"Your mother {m.group('verb')} {m.group('subject')} "
        f"{m.group('prep')} {m.group('location')}"
    )


def _rewrite_causes(m: re.Match) -> str:
    # The original cause is dropped: mother is the sole agent
    return f"Your mother {m.group('verb')} {m.group('effect')}"


def _rewrite_reports_action(m: re.Match) -> str:
    return (
        f"{m.group('source')} reports that your mother's {m.group('subject')} "
        f"{m.group('action')} {m.group('object')}"
    )


def _rewrite_reports_content(m: re.Match) -> str:
    return f"{m.group('source')} reports that your mother {rewrite_content(m.group('content'))}"


def _rewrite_generic_event(m: re.Match) -> str:
    rest = m.group("rest") or ""
    return f"Your mother makes {m.group('subject')} {m.group('verb')} {rest}".strip()


# ============================================================
# THE RULE SET (priority order matters)
# ============================================================

HEADLINE_RULES: list[RewriteRule] = [
    RewriteRule(
        id="decline_because",
        description="<source> is/are declining|rising|... [after|due to|because of] <cause>",
        pattern=_compile(
            r"(?P<source>.+?)\s+(?P<verb>is|are|has|have)\s+"
            r"(?P<state>declining|increasing|rising|falling|in\s+decline|on\s+the\s+rise|"
            r"happening|occurring)"
            r"(?:\s+after|\s+due\s+to|\s+because\s+of)?\s+(?P<cause>.+)"
        ),
        rewrite=_rewrite_decline_because,
    ),
    RewriteRule(
        id="found_in",
        description="<subject> found|discovered|detected|identified in|at|near <location>",
        pattern=_compile(
            r"(?P<subject>.+?)\s+(?P<verb>found|discovered|detected|identified)\s+"
            r"(?P<prep>in|at|near)\s+(?P<location>.+)"
        ),
        rewrite=_rewrite_found_in,
    ),
    RewriteRule(
        id="causes",
        description="<cause> causes|leads to|results in <effect>",
        pattern=_compile(
            r"(?P<cause>.+?)\s+(?P<verb>causes?|leads?\s+to|results?\s+in)\s+(?P<effect>.+)"
        ),
        rewrite=_rewrite_causes,
    ),
    RewriteRule(
        id="reports_action",
        description="<source> reports [that] <subject> linked to|threatens|... <object>",
        pattern=_compile(
            r"(?P<source>.+?)\s+reports?\s+(?:that\s+)?(?P<subject>.+?)\s+"
            r"(?P<action>linked\s+to|threatens|causing|destroying|damaging)\s+(?P<object>.+)"
        ),
        rewrite=_rewrite_reports_action,
    ),
    RewriteRule(
        id="reports_content",
        description="<source> reports [that] <content>",
        pattern=_compile(r"(?P<source>.+?)\s+reports?\s+(?:that\s+)?(?P<content>.+)"),
        rewrite=_rewrite_reports_content,
    ),
    RewriteRule(
        id="generic_event",
        description="<subject> happens|occurs|emerges|appears [rest]",
        pattern=_compile(
            r"(?P<subject>.+?)\s+(?P<verb>happens?|occurs?|emerges?|appears?)\b"
            r"(?:\s+(?P<rest>.+))?"
        ),
        rewrite=_rewrite_generic_event,
    ),
]
