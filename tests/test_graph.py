import pytest

from prereq_graph.catalog import Coreq, Course, CourseId, Prereq, ReqAnd, ReqOr
from prereq_graph.errors import GraphBuildError
from prereq_graph.graph import CourseGraph, Relation


def _course(text, requirements=None, name=""):
    return Course(CourseId.parse(text), name, "", requirements)


def _pre(text):
    return Prereq(CourseId.parse(text))


def _co(text):
    return Coreq(CourseId.parse(text))


def _node(graph, text):
    node = graph.index_of(CourseId.parse(text))
    assert node is not None, f"{text} not in the graph"
    return node


def _targets(graph, node):
    return sorted((graph.label(t), r) for t, r in graph.requirements_of(node))


CMPUT_SMALL = [
    _course("CMPUT 101"),
    _course("CMPUT 102", ReqAnd((_pre("CMPUT 101"), _pre("MATH 112")))),
    _course("MATH 111"),
    _course("MATH 112", _pre("MATH 111")),
]


def test_small_catalog():
    graph = CourseGraph(CMPUT_SMALL)
    assert len(graph) == 4
    assert graph.requirements_of(_node(graph, "CMPUT 101")) == []
    assert _targets(graph, _node(graph, "CMPUT 102")) == [
        ("CMPUT 101", Relation.PREREQ),
        ("MATH 112", Relation.PREREQ),
    ]
    assert _targets(graph, _node(graph, "MATH 112")) == [("MATH 111", Relation.PREREQ)]


def test_forward_reference_resolves_to_one_edge():
    # AAA 200 sorts first, so its requirement is queued until ZZZ 100 arrives
    graph = CourseGraph([_course("AAA 200", _pre("ZZZ 100")), _course("ZZZ 100")])
    assert graph.graph.number_of_edges() == 1
    assert _targets(graph, _node(graph, "AAA 200")) == [("ZZZ 100", Relation.PREREQ)]

    reordered = CourseGraph([_course("ZZZ 100"), _course("AAA 200", _pre("ZZZ 100"))])
    assert reordered.graph.number_of_edges() == 1


def test_unknown_reference_fails_the_build():
    with pytest.raises(GraphBuildError) as info:
        CourseGraph([_course("CMPUT 201", _pre("CMPUT 175"))])
    assert info.value.missing == "CMPUT 175"
    assert info.value.referenced_by == ["CMPUT 201"]


def test_duplicate_ids_keep_the_first_course():
    graph = CourseGraph([_course("CMPUT 101", name="first"), _course("CMPUT 101", name="second")])
    assert len(graph) == 1
    assert graph.course_at(0).name == "first"


def test_or_group_gets_a_marker_node():
    graph = CourseGraph([
        _course("MATH 100"),
        _course("MATH 114"),
        _course("PHYS 124", ReqOr((_pre("MATH 100"), _pre("MATH 114")))),
    ])
    phys = _node(graph, "PHYS 124")
    [(marker, relation)] = graph.requirements_of(phys)
    assert graph.is_or(marker)
    assert relation is Relation.PREREQ
    assert graph.course_at(marker) is None
    assert _targets(graph, marker) == [("MATH 100", Relation.PREREQ), ("MATH 114", Relation.PREREQ)]


def test_corequisite_or_group_keeps_the_relation():
    graph = CourseGraph([
        _course("MATH 117"),
        _course("MATH 144"),
        _course("PHYS 124", ReqOr((_co("MATH 117"), _co("MATH 144")))),
    ])
    [(marker, relation)] = graph.requirements_of(_node(graph, "PHYS 124"))
    assert graph.is_or(marker)
    assert relation is Relation.COREQ


def test_single_choice_or_needs_no_marker():
    graph = CourseGraph([_course("MATH 100"), _course("MATH 101", ReqOr((_pre("MATH 100"),)))])
    assert len(graph) == 2
    assert _targets(graph, _node(graph, "MATH 101")) == [("MATH 100", Relation.PREREQ)]


def test_corequisites_stay_directional():
    graph = CourseGraph([_course("MATH 117"), _course("PHYS 124", _co("MATH 117"))])
    assert _targets(graph, _node(graph, "PHYS 124")) == [("MATH 117", Relation.COREQ)]
    assert graph.requirements_of(_node(graph, "MATH 117")) == []


def test_from_catalog_json():
    graph = CourseGraph.from_catalog([
        {"id": "CMPUT 101"},
        {"id": "CMPUT 102", "requirements": {"prereq": "CMPUT 101"}},
    ])
    assert _targets(graph, _node(graph, "CMPUT 102")) == [("CMPUT 101", Relation.PREREQ)]


def test_json_export():
    graph = CourseGraph([
        _course("MATH 100", name="Calculus I"),
        _course("MATH 114"),
        _course("PHYS 124", ReqOr((_pre("MATH 100"), _pre("MATH 114")))),
    ])
    data = graph.to_json()
    nodes = {n["id"]: n for n in data["nodes"]}
    assert nodes["MATH 100"] == {"id": "MATH 100", "label": "Calculus I", "kind": "course", "subject": "MATH"}
    assert nodes["MATH 114"]["label"] == "MATH 114"
    [marker] = [n for n in data["nodes"] if n["kind"] == "or"]
    assert {"source": "PHYS 124", "target": marker["id"], "kind": "prereq"} in data["edges"]
    assert {"source": marker["id"], "target": "MATH 100", "kind": "prereq"} in data["edges"]
    assert len(data["edges"]) == 3


def test_dot_export():
    graph = CourseGraph([_course("MATH 100"), _course("PHYS 124", _co("MATH 100"))])
    dot = graph.to_dot()
    assert dot.startswith("digraph {\n")
    assert '    0 [ label = "MATH 100" ]' in dot
    assert '    1 -> 0 [ label = "Coreq" ]' in dot


def test_reset_weights():
    graph = CourseGraph(CMPUT_SMALL)
    graph.weights[0] = 3
    graph.reset_weights()
    assert graph.weights == [0, 0, 0, 0]


def test_index_of_ignores_subject_case():
    graph = CourseGraph(CMPUT_SMALL)
    assert graph.index_of(CourseId("cmput", 101)) == _node(graph, "CMPUT 101")
