"""
Course prerequisite graph.

Reads requirement sentences out of course descriptions, builds a dependency
graph over a course catalog and splits the courses a student needs into
ordered terms.
"""

from .catalog import Coreq, Course, CourseId, Prereq, ReqAnd, ReqOr, load_catalog, validate_catalog
from .errors import (
    CatalogError,
    CourseIdError,
    GraphBuildError,
    PrereqGraphError,
    RequirementParseError,
    SchedulingError,
)
from .expr import EMPTY, Expr, expr_all, expr_any, expr_from_json
from .extractor import RequirementExtractor, RequirementKind, RequirementSpan
from .grammar import RequirementGrammarParser
from .graph import CourseGraph, Relation
from .requirements import parse_description, requirement_tree
from .scheduler import (
    CourseSet,
    Dependency,
    build_sets,
    count_dependents,
    course_dependency,
    plan_terms,
    set_dependency,
    swap_course,
    swap_set,
)

__all__ = [
    "CatalogError",
    "Coreq",
    "Course",
    "CourseGraph",
    "CourseId",
    "CourseIdError",
    "CourseSet",
    "Dependency",
    "EMPTY",
    "Expr",
    "GraphBuildError",
    "Prereq",
    "PrereqGraphError",
    "Relation",
    "ReqAnd",
    "ReqOr",
    "RequirementExtractor",
    "RequirementGrammarParser",
    "RequirementKind",
    "RequirementParseError",
    "RequirementSpan",
    "SchedulingError",
    "build_sets",
    "count_dependents",
    "course_dependency",
    "expr_all",
    "expr_any",
    "expr_from_json",
    "load_catalog",
    "parse_description",
    "plan_terms",
    "requirement_tree",
    "set_dependency",
    "swap_course",
    "swap_set",
    "validate_catalog",
]
