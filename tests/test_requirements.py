import pytest

from prereq_graph.catalog import Coreq, CourseId, Prereq, ReqAnd, ReqOr
from prereq_graph.errors import CourseIdError
from prereq_graph.expr import EMPTY, course, expr_any
from prereq_graph.extractor import RequirementKind
from prereq_graph.requirements import parse_description, requirement_tree


def _cid(text):
    return CourseId.parse(text)


def test_prerequisites_and_corequisites_are_separated():
    parsed = parse_description(
        "Introductory physics. Prerequisite: PHYS 124 (see Note following) or 144. "
        "Corequisite: MATH 118 or 146. Note: MATH 115 is not acceptable as a co-requisite."
    )
    assert str(parsed.prereqs) == "(any (PHYS 124) (PHYS 144))"
    assert str(parsed.coreqs) == "(any (MATH 118) (MATH 146))"
    assert parsed.dropped == []


def test_unparseable_span_is_dropped_not_raised():
    parsed = parse_description(
        "Prerequisites: Mathematics 30-1 and Physics 30. Corequisites: MATH 117 or 144."
    )
    assert parsed.prereqs is EMPTY
    assert str(parsed.coreqs) == "(any (MATH 117) (MATH 144))"
    assert len(parsed.dropped) == 1
    assert parsed.dropped[0].span.kind is RequirementKind.PREREQUISITE
    assert parsed.dropped[0].span.text == "Mathematics 30-1 and Physics 30"


def test_several_prerequisite_sentences_are_conjoined():
    parsed = parse_description("Prerequisite: CMPUT 174. Prerequisite: MATH 125.")
    assert str(parsed.prereqs) == "(all (CMPUT 174) (MATH 125))"
    assert parsed.coreqs is EMPTY


def test_description_without_requirements():
    parsed = parse_description("A survey of the field. No prerequisites.")
    assert parsed.prereqs is EMPTY
    assert parsed.coreqs is EMPTY
    assert parsed.dropped == []


def test_requirement_tree_of_both_kinds():
    prereqs = expr_any([course("PHYS", 124), course("PHYS", 144)])
    tree = requirement_tree(prereqs, course("MATH", 118))
    assert tree == ReqAnd((
        ReqOr((Prereq(_cid("PHYS 124")), Prereq(_cid("PHYS 144")))),
        Coreq(_cid("MATH 118")),
    ))


def test_requirement_tree_of_one_kind():
    assert requirement_tree(course("LAW", 524)) == Prereq(_cid("LAW 524"))
    assert requirement_tree(EMPTY, course("EN PH", 131)) == Coreq(CourseId("EN PH", 131))


def test_requirement_tree_of_nothing():
    assert requirement_tree(EMPTY, EMPTY) is None


def test_requirement_tree_rejects_out_of_range_numbers():
    with pytest.raises(CourseIdError):
        requirement_tree(course("MATH", 30))


def test_out_of_range_span_is_dropped_and_corequisite_kept():
    parsed = parse_description("Prerequisite: MATH 31 or CMPUT 174. Corequisite: STAT 151.")
    assert parsed.prereqs is EMPTY
    assert str(parsed.coreqs) == "(STAT 151)"
    assert len(parsed.dropped) == 1
    assert parsed.dropped[0].span.kind is RequirementKind.PREREQUISITE
    assert isinstance(parsed.dropped[0].error, CourseIdError)
    assert requirement_tree(parsed.prereqs, parsed.coreqs) == Coreq(_cid("STAT 151"))
