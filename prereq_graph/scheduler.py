"""
Turning a set of desired courses into ordered, capacity-bounded terms.

    count_dependents  weight every node by the desired-course demand flowing through it
    build_sets        walk each desired course's requirements into CourseSets
    plan_terms        the whole flow for a list of CourseIds

Weights are additive: call `graph.reset_weights()` between independent runs
(plan_terms does).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

import networkx as nx

from .catalog import CourseId
from .config import DEFAULT_TERM_CAPACITY, MAX_SET_CAPACITY
from .errors import CourseIdError, SchedulingError
from .graph import CourseGraph, Relation


class Dependency(Enum):
    TOGETHER = "together"  # reserved, never returned
    BEFORE = "before"
    AFTER = "after"
    INDEPENDENT = "independent"


@dataclass
class CourseSet:
    """One term's worth of course nodes."""

    nodes: List[int] = field(default_factory=list)
    capacity: int = MAX_SET_CAPACITY

    def __post_init__(self) -> None:
        if not 1 <= self.capacity <= MAX_SET_CAPACITY:
            raise SchedulingError(f"set capacity must be within [1, {MAX_SET_CAPACITY}], got {self.capacity}")

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.nodes)

    def __contains__(self, node: object) -> bool:
        return node in self.nodes

    def is_full(self) -> bool:
        return len(self.nodes) >= self.capacity


@dataclass
class Schedule:
    terms: List[List[CourseId]]
    unknown: List[str]


def _check_desired(graph: CourseGraph, desired: Sequence[int]) -> None:
    for node in desired:
        if not 0 <= node < len(graph):
            raise SchedulingError(f"no node {node} in the graph")
        if graph.is_or(node):
            raise SchedulingError(f"node {node} is an or marker, not a course")
    reachable = set(desired)
    for node in desired:
        reachable |= nx.descendants(graph.graph, node)
    sub = graph.graph.subgraph(reachable)
    if not nx.is_directed_acyclic_graph(sub):
        cycle = [graph.label(u) for u, _, _ in nx.find_cycle(sub)]
        raise SchedulingError("requirement cycle: " + " -> ".join(cycle))


def count_dependents(graph: CourseGraph, desired: Sequence[int]) -> None:
    """
    Add one to each desired node, then push every node's weight down to each
    requirement it reaches, once per path. A node shared by several desired
    courses ends up counting all of them.
    """
    _check_desired(graph, desired)
    weights = graph.weights

    def descend(parent: int) -> None:
        for target, _ in graph.requirements_of(parent):
            weights[target] += weights[parent]
            descend(target)

    for node in desired:
        weights[node] += 1
        descend(node)


def _heaviest_choice(graph: CourseGraph, marker: int) -> Optional[int]:
    best, best_weight = None, 0
    for target, _ in graph.requirements_of(marker):
        if graph.weights[target] > best_weight:
            best, best_weight = target, graph.weights[target]
    return best


def build_sets(graph: CourseGraph, desired: Sequence[int], capacity: int = DEFAULT_TERM_CAPACITY) -> List[CourseSet]:
    """
    Place each desired course and everything it requires into CourseSets.

    Sets are ordered latest term first: a prerequisite lands at least one set
    after the course that needs it, a corequisite in the same set or later.
    An or marker follows only its heaviest choice, and nothing when no choice
    has any weight. A course reached twice keeps the later of its two places.
    Run count_dependents first so or markers have weights to go by.
    """
    _check_desired(graph, desired)
    sets: List[CourseSet] = []
    placed: Dict[int, int] = {}

    def place(node: int, depth: int) -> None:
        if graph.is_or(node):
            choice = _heaviest_choice(graph, node)
            if choice is not None:
                place(choice, depth)
            return
        if node in placed:
            if placed[node] >= depth:
                return
            sets[placed[node]].nodes.remove(node)
        while True:
            if len(sets) <= depth:
                sets.append(CourseSet(capacity=capacity))
            if not sets[depth].is_full():
                break
            depth += 1
        sets[depth].nodes.append(node)
        placed[node] = depth
        for target, relation in graph.requirements_of(node):
            place(target, depth + 1 if relation is Relation.PREREQ else depth)

    for node in desired:
        place(node, 0)
    return [s for s in sets if len(s)]


def course_dependency(graph: CourseGraph, lhs: int, rhs: int) -> Dependency:
    """
    AFTER when lhs requires rhs (directly or not), BEFORE when rhs requires
    lhs, INDEPENDENT otherwise. Weights only pick which direction to test
    first; reachability decides.
    """
    if graph.is_or(lhs) or graph.is_or(rhs):
        raise SchedulingError("course_dependency compares courses, not or markers")
    if lhs == rhs:
        return Dependency.INDEPENDENT
    checks = [(lhs, rhs, Dependency.AFTER), (rhs, lhs, Dependency.BEFORE)]
    if graph.weights[lhs] > graph.weights[rhs]:
        checks.reverse()
    for source, target, result in checks:
        if nx.has_path(graph.graph, source, target):
            return result
    return Dependency.INDEPENDENT


def _reaches_any(graph: CourseGraph, sources: Iterable[int], targets: CourseSet) -> bool:
    wanted = set(targets)
    return any(nx.descendants(graph.graph, source) & wanted for source in sources)


def set_dependency(graph: CourseGraph, lhs: CourseSet, rhs: CourseSet) -> Dependency:
    """
    Like course_dependency for whole sets; never TOGETHER. Assumes the sets
    do not depend on each other in both directions.
    """
    if _reaches_any(graph, lhs, rhs):
        return Dependency.AFTER
    if _reaches_any(graph, rhs, lhs):
        return Dependency.BEFORE
    return Dependency.INDEPENDENT


def swap_course(graph: CourseGraph, lhs: CourseSet, fst: int, rhs: CourseSet, snd: int) -> bool:
    """Swap lhs.nodes[fst] and rhs.nodes[snd] if they are independent."""
    if course_dependency(graph, lhs.nodes[fst], rhs.nodes[snd]) is not Dependency.INDEPENDENT:
        return False
    lhs.nodes[fst], rhs.nodes[snd] = rhs.nodes[snd], lhs.nodes[fst]
    return True


def swap_set(graph: CourseGraph, ordered_sets: List[CourseSet], fst: int, snd: int) -> bool:
    if set_dependency(graph, ordered_sets[fst], ordered_sets[snd]) is not Dependency.INDEPENDENT:
        return False
    ordered_sets[fst], ordered_sets[snd] = ordered_sets[snd], ordered_sets[fst]
    return True


def plan_terms(graph: CourseGraph, desired_ids: Iterable[str], capacity: int = DEFAULT_TERM_CAPACITY) -> Schedule:
    """
    Schedule courses given as "SUBJECT NUMBER" strings.

    Ids that do not parse or are not in the graph are returned in
    `Schedule.unknown`. Terms come out in the order they should be taken.
    """
    desired: List[int] = []
    unknown: List[str] = []
    for text in desired_ids:
        try:
            node = graph.index_of(CourseId.parse(text))
        except CourseIdError:
            node = None
        if node is None:
            unknown.append(text)
        elif node not in desired:
            desired.append(node)

    graph.reset_weights()
    if not desired:
        return Schedule(terms=[], unknown=unknown)
    count_dependents(graph, desired)
    sets = build_sets(graph, desired, capacity)
    terms = [[graph.course_at(node).id for node in term] for term in reversed(sets)]
    return Schedule(terms=terms, unknown=unknown)
