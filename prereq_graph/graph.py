"""
Course dependency graph.

Nodes are integer handles into a networkx MultiDiGraph. A node is either a
course or a synthetic "or" marker standing for "one of my children". Edges
point from a course to what it requires and carry a Relation.

Scheduling weights live in `CourseGraph.weights`, a list indexed by node
handle, so traversals read the graph and write the weights separately.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

import networkx as nx

from .catalog import Coreq, Course, CourseId, Prereq, ReqAnd, ReqOr, Requirement, iter_leaves, load_catalog
from .errors import GraphBuildError


class Relation(Enum):
    PREREQ = "prereq"
    COREQ = "coreq"

    def __str__(self) -> str:
        return self.name.capitalize()


COURSE_NODE = "course"
OR_NODE = "or"


def _group_relation(req: ReqOr) -> Relation:
    # An "or" group reads as a corequisite only when every choice is one.
    if all(isinstance(leaf, Coreq) for leaf in iter_leaves(req)):
        return Relation.COREQ
    return Relation.PREREQ


class CourseGraph:
    def __init__(self, catalog: Iterable[Course]):
        """
        Build the graph from catalog courses.

        Courses are deduplicated by id (first occurrence wins) and inserted
        in id order. A requirement on a course that has not been inserted yet
        waits in a pending queue until that course arrives; anything left in
        the queue at the end names a course missing from the catalog and
        raises GraphBuildError.
        """
        self.graph = nx.MultiDiGraph()
        self.weights: List[int] = []
        self._index: Dict[CourseId, int] = {}
        self._pending: Dict[CourseId, List[Tuple[int, Relation, CourseId]]] = {}

        unique: List[Course] = []
        seen = set()
        for course in sorted(catalog, key=lambda c: c.id):
            if course.id not in seen:
                seen.add(course.id)
                unique.append(course)

        for course in unique:
            node = self._add_node(COURSE_NODE, course)
            self._index[course.id] = node
            for source, relation, _ in self._pending.pop(course.id, []):
                self._add_edge(source, node, relation)
            if course.requirements is not None:
                self._descend(node, course.requirements, course.id)

        if self._pending:
            missing, waiting = next(iter(self._pending.items()))
            raise GraphBuildError(str(missing), sorted({str(owner) for _, _, owner in waiting}))

    @classmethod
    def from_catalog(cls, data: Any) -> "CourseGraph":
        """Validate and build from catalog JSON data."""
        return cls(load_catalog(data))

    def _add_node(self, kind: str, course: Optional[Course] = None) -> int:
        node = len(self.weights)
        self.graph.add_node(node, kind=kind, course=course)
        self.weights.append(0)
        return node

    def _add_edge(self, source: int, target: int, relation: Relation) -> None:
        self.graph.add_edge(source, target, relation=relation)

    def _descend(self, node: int, req: Requirement, owner: CourseId) -> None:
        if isinstance(req, ReqOr) and len(req.items) > 1:
            marker = self._add_node(OR_NODE)
            self._add_edge(node, marker, _group_relation(req))
            for item in req.items:
                self._descend(marker, item, owner)
        elif isinstance(req, (ReqAnd, ReqOr)):
            for item in req.items:
                self._descend(node, item, owner)
        else:
            relation = Relation.PREREQ if isinstance(req, Prereq) else Relation.COREQ
            target = self._index.get(req.course)
            if target is None:
                self._pending.setdefault(req.course, []).append((node, relation, owner))
            else:
                self._add_edge(node, target, relation)

    # lookups

    def __len__(self) -> int:
        return len(self.weights)

    def index_of(self, course_id: CourseId) -> Optional[int]:
        return self._index.get(course_id)

    def is_or(self, node: int) -> bool:
        return self.graph.nodes[node]["kind"] == OR_NODE

    def course_at(self, node: int) -> Optional[Course]:
        return self.graph.nodes[node]["course"]

    def requirements_of(self, node: int) -> List[Tuple[int, Relation]]:
        """Outgoing (target, relation) pairs, in insertion order."""
        return [(target, data["relation"]) for _, target, data in self.graph.out_edges(node, data=True)]

    def reset_weights(self) -> None:
        self.weights = [0] * len(self.weights)

    def label(self, node: int) -> str:
        course = self.course_at(node)
        return str(course.id) if course is not None else "OR"

    # export

    def node_key(self, node: int) -> str:
        course = self.course_at(node)
        return str(course.id) if course is not None else f"or:{node}"

    def to_json(self) -> Dict[str, List[Dict[str, Any]]]:
        nodes: List[Dict[str, Any]] = []
        for node in self.graph.nodes:
            course = self.course_at(node)
            nodes.append({
                "id": self.node_key(node),
                "label": (course.name or str(course.id)) if course is not None else "or",
                "kind": self.graph.nodes[node]["kind"],
                "subject": course.id.subject_id if course is not None else None,
            })
        edges = [
            {"source": self.node_key(u), "target": self.node_key(v), "kind": data["relation"].value}
            for u, v, data in self.graph.edges(data=True)
        ]
        return {"nodes": nodes, "edges": edges}

    def to_dot(self) -> str:
        lines = ["digraph {"]
        for node in self.graph.nodes:
            lines.append(f'    {node} [ label = "{self.label(node)}" ]')
        for u, v, data in self.graph.edges(data=True):
            lines.append(f'    {u} -> {v} [ label = "{data["relation"]}" ]')
        lines.append("}")
        return "\n".join(lines) + "\n"
