"""
Description text to requirement trees.

    parse_description(text)  -> (prereqs Expr, coreqs Expr, dropped spans)
    requirement_tree(prereqs, coreqs) -> RequirementTree or None

Spans the grammar cannot parse, and spans naming a class number outside the
course id range, are dropped, not raised: a description with one unreadable
sentence still yields whatever the other sentences say.
"""

from typing import List, NamedTuple, Optional

from .catalog import Coreq, CourseId, Prereq, ReqAnd, ReqOr, Requirement
from .errors import CourseIdError, PrereqGraphError, RequirementParseError
from .expr import EMPTY, Expr, ExprAll, ExprAny, ExprCourse, ExprEmpty, expr_all, iter_courses
from .extractor import RequirementExtractor, RequirementKind, RequirementSpan
from .grammar import RequirementGrammarParser


class DroppedSpan(NamedTuple):
    span: RequirementSpan
    error: PrereqGraphError


class ParsedDescription(NamedTuple):
    prereqs: Expr
    coreqs: Expr
    dropped: List[DroppedSpan]


def parse_description(
    description: str,
    extractor: Optional[RequirementExtractor] = None,
    parser: Optional[RequirementGrammarParser] = None,
) -> ParsedDescription:
    """
    Extract requirement sentences and parse each one.

    Pass a shared extractor when parsing many descriptions so its patterns
    are compiled once.
    """
    extractor = extractor or RequirementExtractor()
    parser = parser or RequirementGrammarParser()
    prereqs: Expr = EMPTY
    coreqs: Expr = EMPTY
    dropped: List[DroppedSpan] = []
    for span in extractor.extract(description):
        try:
            expr = parser.parse(span.text)
            _check_course_ids(expr)
        except (RequirementParseError, CourseIdError) as e:
            dropped.append(DroppedSpan(span, e))
            continue
        if span.kind is RequirementKind.PREREQUISITE:
            prereqs = expr_all([prereqs, expr])
        else:
            coreqs = expr_all([coreqs, expr])
    return ParsedDescription(prereqs, coreqs, dropped)


def _check_course_ids(expr: Expr) -> None:
    for leaf in iter_courses(expr):
        CourseId(leaf.topic, leaf.number)


def _convert(expr: Expr, leaf) -> Optional[Requirement]:
    if isinstance(expr, ExprEmpty):
        return None
    if isinstance(expr, ExprCourse):
        return leaf(CourseId(expr.topic, expr.number))
    items = tuple(item for item in (_convert(child, leaf) for child in expr.items) if item is not None)
    if isinstance(expr, ExprAll):
        return ReqAnd(items)
    if isinstance(expr, ExprAny):
        return ReqOr(items)
    raise TypeError(f"not an expression: {expr!r}")


def requirement_tree(prereqs: Expr, coreqs: Expr = EMPTY) -> Optional[Requirement]:
    """
    Convert parsed expressions into one requirement tree.

    Raises CourseIdError for a course number outside the catalog range.
    """
    parts = [req for req in (_convert(prereqs, Prereq), _convert(coreqs, Coreq)) if req is not None]
    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]
    return ReqAnd(tuple(parts))

