import re
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple


class RequirementKind(Enum):
    PREREQUISITE = "prerequisite"
    COREQUISITE = "corequisite"


class RequirementSpan(NamedTuple):
    kind: RequirementKind
    text: str


# Every pattern except the negation must start a sentence: start of text, or
# right after "." or ":". The keyword phrase is captured as "kind" and the
# rest of the sentence as "data".
COREQUISITE_PATTERN = r"""
    (^|\.|:)\s*
    (?P<kind>(pre-(and/or)?\sor\s | pre-?requisite((\(s\))|s)?\sor\s)?co-?requisite((\(s\))|s)?
        | (préalable(\s?(\(s\))|s)?\sou\s)?concomitant(\s?(\(s\))|s)?)
    \s?
    (:|;|.)?
    \s+
    (?P<data>[^.]*)?
    (\.|$)
"""

PREREQUISITE_PATTERN = r"""
    (^|\.|:)\s*
    (?P<kind>(pre-?requisite((\(s\))|s)?
        | préalable(\s?(\(s\))|s)?)
        | prérequis)
    \s?
    (:|;|.)?
    \s+
    (?P<data>[^.]*?)
    (\.|$)
"""

NO_PREREQUISITE_PATTERN = r"""
    no\s(?P<kind>pre-?requisite)((\(s\))|s)?
"""

PATTERN_FLAGS = re.IGNORECASE | re.VERBOSE

# Declaration order is the last tie-break: corequisite > prerequisite > negation
DEFAULT_PATTERNS: Tuple[Tuple[str, Optional[RequirementKind]], ...] = (
    (COREQUISITE_PATTERN, RequirementKind.COREQUISITE),
    (PREREQUISITE_PATTERN, RequirementKind.PREREQUISITE),
    (NO_PREREQUISITE_PATTERN, None),
)


class RequirementExtractor:
    """
    Finds prerequisite and corequisite sentences in a course description.

    Patterns are compiled once, when the extractor is created. A pattern
    whose kind is None (the "no prerequisite" negation) consumes its match
    without producing a span.
    """

    def __init__(self, patterns: Sequence[Tuple[str, Optional[RequirementKind]]] = DEFAULT_PATTERNS):
        self._patterns: List[Tuple["re.Pattern[str]", Optional[RequirementKind]]] = [
            (re.compile(source, PATTERN_FLAGS), kind) for source, kind in patterns
        ]

    def extract(self, description: str) -> List[RequirementSpan]:
        spans: List[RequirementSpan] = []
        i = 0
        while True:
            # Search a fresh suffix, not description[i:] through pos=i: the
            # sentence anchors must see the suffix as a new string, so that "^"
            # matches right after the previous sentence was consumed.
            rest = description[i:]
            best = None
            for priority, (pattern, kind) in enumerate(self._patterns):
                m = pattern.search(rest)
                if m is None:
                    continue
                key = (m.start(), -len(m.group("kind")), priority)
                if best is None or key < best[0]:
                    best = (key, m, kind)
            if best is None:
                return spans
            _, m, kind = best
            if kind is not None:
                spans.append(RequirementSpan(kind, m.group("data") or ""))
            if m.end() == 0:
                return spans
            i += m.end()
