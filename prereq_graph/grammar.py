"""
Grammar for the requirement sublanguage of course descriptions.

    top        := NONE | semi_list
    semi_list  := clist (";" [and] clist)* [";" or ALTERNATIVE]
    clist      := item ("," [and] item)*
    item       := any_list | all_list | one_of_list | unit | conj
    any_list   := [ONE_OF] unit ("," unit)* [","] or or_tail
    all_list   := [BOTH] unit ("," unit)* [","] and and_tail
    one_of_list:= ONE_OF unit ("," unit)*
    conj       := disj (and disj)+
    disj       := any_list | one_of_list | unit
    or_tail    := unit | ALTERNATIVE | any_list (without ONE_OF)
    and_tail   := unit | ALTERNATIVE
    unit       := base [or EQUIVALENT]
    base       := MIN_GRADE unit | BOTH unit | EITHER unit or unit | EITHER unit
                | TOPIC NUM ("," NUM)* [","] (and | or) NUM (same-connective NUM)*
                | TOPIC NUM ("/" NUM)+
                | TOPIC NUM ("," NUM)+
                | TOPIC NUM

Lists joined by "," and ";" at the top level are conjunctions. A list that
ends in "or" is a disjunction, one that ends in "and" a conjunction.

The grammar is ambiguous. Every rule returns all of its derivations starting
at a position, and only the first derivation for each end position is kept;
alternatives are tried in the order written above and shorter separated
lists before longer ones. The parse is the first derivation of `top` that
consumes every token.
"""

import functools
import re
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple

from .errors import RequirementParseError
from .expr import EMPTY, Expr, course, expr_all, expr_any


class Token(NamedTuple):
    kind: str
    value: str
    pos: int


# Order matters: phrases before the words they start with, keywords before TOPIC.
TOKEN_PATTERNS: List[Tuple[str, str, int]] = [
    ("SKIP", r"\s+|\([^()]*\)", 0),
    ("ALTERNATIVE", r"(?:the\s+)?(?:consent|permission|approval)\s+of\s+(?:the\s+)?(?:instructor|department)\b", re.IGNORECASE),
    ("MIN_GRADE", r"a\s+minimum\s+grade\s+of\s+[A-F][+-]?\s+in\b", re.IGNORECASE),
    ("ONE_OF", r"(?:one|any)\s+of\b", re.IGNORECASE),
    ("EITHER", r"either\b", re.IGNORECASE),
    ("BOTH", r"both\b", re.IGNORECASE),
    ("NONE", r"none\b", re.IGNORECASE),
    ("OR", r"and/or\b", re.IGNORECASE),
    ("AND", r"and\b", re.IGNORECASE),
    ("AND", r"et\b", 0),
    ("OR", r"or\b", re.IGNORECASE),
    ("OR", r"ou\b", 0),
    ("EQUIVALENT", r"(?:l['’])?[eé]quivalent\b", re.IGNORECASE),
    ("TOPIC", r"[A-Z]+(?:[ ][A-Z]+)*(?=\s*\d)", 0),
    ("NUM", r"\d+", 0),
    ("COMMA", r",", 0),
    ("SEMI", r";", 0),
    ("SLASH", r"/", 0),
]

_COMPILED = [(kind, re.compile(pattern, flags)) for kind, pattern, flags in TOKEN_PATTERNS]


def tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        for kind, pattern in _COMPILED:
            m = pattern.match(text, pos)
            if m and m.end() > pos:
                if kind != "SKIP":
                    tokens.append(Token(kind, m.group(0), pos))
                pos = m.end()
                break
        else:
            raise RequirementParseError("unexpected text", text, pos)
    return tokens


Derivations = List[Tuple[object, int]]


def _first_by_end(derivations: Iterable[Tuple[object, int]]) -> Derivations:
    seen = set()
    out: Derivations = []
    for value, end in derivations:
        if end not in seen:
            seen.add(end)
            out.append((value, end))
    return out


def _rule(method: Callable[["_Derivation", int], Derivations]):
    name = method.__name__

    @functools.wraps(method)
    def wrapper(self: "_Derivation", pos: int) -> Derivations:
        key = (name, pos)
        if key not in self.memo:
            self.memo[key] = _first_by_end(method(self, pos))
            for _, end in self.memo[key]:
                self.furthest = max(self.furthest, end)
        return self.memo[key]

    return wrapper


class _Derivation:
    """Derivations of one token list; discarded after a single parse."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.memo: Dict[Tuple[str, int], Derivations] = {}
        # end of the longest run of tokens any rule consumed
        self.furthest = 0

    def kind_at(self, pos: int) -> Optional[str]:
        if pos < len(self.tokens):
            return self.tokens[pos].kind
        return None

    def value_at(self, pos: int) -> str:
        return self.tokens[pos].value

    def optional(self, kind: str, pos: int) -> List[int]:
        if self.kind_at(pos) == kind:
            return [pos + 1, pos]
        return [pos]

    def separated(
        self,
        element: Callable[[int], Derivations],
        pos: int,
        separator: Callable[[int], List[int]],
    ) -> List[Tuple[List[object], int]]:
        results: List[Tuple[List[object], int]] = []
        frontier = [([value], end) for value, end in element(pos)]
        while frontier:
            results.extend(frontier)
            grown = []
            for values, end in frontier:
                for sep_end in separator(end):
                    for value, elem_end in element(sep_end):
                        grown.append((values + [value], elem_end))
            frontier = _first_by_end(grown)
        return _first_by_end(results)

    # separators

    def comma(self, pos: int) -> List[int]:
        return [pos + 1] if self.kind_at(pos) == "COMMA" else []

    def comma_and(self, pos: int) -> List[int]:
        if self.kind_at(pos) != "COMMA":
            return []
        return self.optional("AND", pos + 1)

    def semi_and(self, pos: int) -> List[int]:
        if self.kind_at(pos) != "SEMI":
            return []
        return self.optional("AND", pos + 1)

    def and_sep(self, pos: int) -> List[int]:
        return [pos + 1] if self.kind_at(pos) == "AND" else []

    # rules

    @_rule
    def top(self, pos: int) -> Derivations:
        out: Derivations = []
        if self.kind_at(pos) == "NONE":
            out.append((EMPTY, pos + 1))
        out.extend(self.semi_list(pos))
        return out

    @_rule
    def semi_list(self, pos: int) -> Derivations:
        out: Derivations = []
        for parts, end in self.separated(self.clist, pos, self.semi_and):
            group = expr_all(parts)
            out.append((group, end))
            if (self.kind_at(end), self.kind_at(end + 1), self.kind_at(end + 2)) == ("SEMI", "OR", "ALTERNATIVE"):
                out.append((group, end + 3))
        return out

    @_rule
    def clist(self, pos: int) -> Derivations:
        return [(expr_all(parts), end) for parts, end in self.separated(self.item, pos, self.comma_and)]

    @_rule
    def item(self, pos: int) -> Derivations:
        return self.any_list(pos) + self.all_list(pos) + self.one_of_list(pos) + self.unit(pos) + self.conj(pos)

    def _list_with_tail(self, pos, prefix, connective, tail, combine) -> Derivations:
        if prefix is not None and self.kind_at(pos) == prefix:
            pos += 1
        out: Derivations = []
        for units, end in self.separated(self.unit, pos, self.comma):
            for p in self.optional("COMMA", end):
                if self.kind_at(p) != connective:
                    continue
                for value, tail_end in tail(p + 1):
                    out.append((combine(units + [value]), tail_end))
        return out

    @_rule
    def any_list(self, pos: int) -> Derivations:
        return self._list_with_tail(pos, "ONE_OF", "OR", self.or_tail, expr_any)

    @_rule
    def plain_any_list(self, pos: int) -> Derivations:
        return self._list_with_tail(pos, None, "OR", self.or_tail, expr_any)

    @_rule
    def all_list(self, pos: int) -> Derivations:
        return self._list_with_tail(pos, "BOTH", "AND", self.and_tail, expr_all)

    @_rule
    def one_of_list(self, pos: int) -> Derivations:
        if self.kind_at(pos) != "ONE_OF":
            return []
        return [(expr_any(units), end) for units, end in self.separated(self.unit, pos + 1, self.comma)]

    @_rule
    def conj(self, pos: int) -> Derivations:
        return [
            (expr_all(parts), end)
            for parts, end in self.separated(self.disj, pos, self.and_sep)
            if len(parts) > 1
        ]

    @_rule
    def disj(self, pos: int) -> Derivations:
        return self.any_list(pos) + self.one_of_list(pos) + self.unit(pos)

    @_rule
    def or_tail(self, pos: int) -> Derivations:
        out = self.unit(pos)
        if self.kind_at(pos) == "ALTERNATIVE":
            out = out + [(EMPTY, pos + 1)]
        return out + self.plain_any_list(pos)

    @_rule
    def and_tail(self, pos: int) -> Derivations:
        out = self.unit(pos)
        if self.kind_at(pos) == "ALTERNATIVE":
            out = out + [(EMPTY, pos + 1)]
        return out

    @_rule
    def unit(self, pos: int) -> Derivations:
        out: Derivations = []
        for value, end in self.base(pos):
            out.append((value, end))
            if self.kind_at(end) == "OR" and self.kind_at(end + 1) == "EQUIVALENT":
                out.append((value, end + 2))
        return out

    @_rule
    def base(self, pos: int) -> Derivations:
        kind = self.kind_at(pos)
        if kind in ("MIN_GRADE", "BOTH"):
            return list(self.unit(pos + 1))
        if kind == "EITHER":
            out: Derivations = []
            for lhs, end in self.unit(pos + 1):
                if self.kind_at(end) == "OR":
                    out.extend((expr_any([lhs, rhs]), rhs_end) for rhs, rhs_end in self.unit(end + 1))
            return out + list(self.unit(pos + 1))
        if kind == "TOPIC" and self.kind_at(pos + 1) == "NUM":
            return self._shared_topic(pos)
        return []

    def _number_run(self, pos: int, separator: str) -> Tuple[List[int], int]:
        numbers: List[int] = []
        while self.kind_at(pos) == separator and self.kind_at(pos + 1) == "NUM":
            numbers.append(int(self.value_at(pos + 1)))
            pos += 2
        return numbers, pos

    def _shared_topic(self, pos: int) -> Derivations:
        topic = self.value_at(pos)
        first = int(self.value_at(pos + 1))
        out: Derivations = []

        def courses(numbers):
            return [course(topic, number) for number in numbers]

        # TOPIC N1, N2 and N3 / TOPIC N1, N2, or N3 / TOPIC N1 and N2 and N3
        commas, end = self._number_run(pos + 2, "COMMA")
        for p in self.optional("COMMA", end):
            connective = self.kind_at(p)
            if connective in ("AND", "OR") and self.kind_at(p + 1) == "NUM":
                numbers = [first] + commas + [int(self.value_at(p + 1))]
                combine = expr_all if connective == "AND" else expr_any
                out.append((combine(courses(numbers)), p + 2))
                q = p + 2
                while self.kind_at(q) == connective and self.kind_at(q + 1) == "NUM":
                    numbers = numbers + [int(self.value_at(q + 1))]
                    q += 2
                    out.append((combine(courses(numbers)), q))

        # TOPIC N1/N2/N3
        slashes, slash_end = self._number_run(pos + 2, "SLASH")
        if slashes:
            out.append((expr_any(courses([first] + slashes)), slash_end))

        # TOPIC N1, N2, N3
        if commas:
            out.append((expr_any(courses([first] + commas)), end))

        out.append((course(topic, first), pos + 2))
        return out


class RequirementGrammarParser:
    """Parses one requirement span into an `Expr`."""

    def parse(self, text: str) -> Expr:
        tokens = tokenize(text)
        if not tokens:
            raise RequirementParseError("empty requirement", text)
        derivation = _Derivation(tokens)
        for value, end in derivation.top(0):
            if end == len(tokens):
                return value
        if derivation.furthest < len(tokens):
            bad = tokens[derivation.furthest]
            raise RequirementParseError(f"unexpected {bad.kind.lower()} {bad.value!r}", text, bad.pos)
        raise RequirementParseError("incomplete requirement", text, len(text))
