"""
Boolean requirement expressions produced by the grammar parser.

Lists are normalized on construction through `Expr.all` / `Expr.any`:
empty members are dropped, a single remaining member stands for the whole
list and an empty list becomes `EMPTY`. No single-child group ever exists.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Tuple, Union


@dataclass(frozen=True)
class ExprEmpty:
    def __str__(self) -> str:
        return "()"

    def to_json(self) -> Dict[str, Any]:
        return {}


@dataclass(frozen=True)
class ExprCourse:
    topic: str
    number: int

    def __str__(self) -> str:
        return f"({self.topic} {self.number})"

    def to_json(self) -> Dict[str, Any]:
        return {"course": {"topic": self.topic, "number": str(self.number)}}


@dataclass(frozen=True)
class ExprAll:
    items: Tuple["Expr", ...]

    def __str__(self) -> str:
        return "(all " + " ".join(str(item) for item in self.items) + ")"

    def to_json(self) -> Dict[str, Any]:
        return {"all": [item.to_json() for item in self.items]}


@dataclass(frozen=True)
class ExprAny:
    items: Tuple["Expr", ...]

    def __str__(self) -> str:
        return "(any " + " ".join(str(item) for item in self.items) + ")"

    def to_json(self) -> Dict[str, Any]:
        return {"any": [item.to_json() for item in self.items]}


Expr = Union[ExprAll, ExprAny, ExprCourse, ExprEmpty]

EMPTY = ExprEmpty()


def _normalized(items: Iterable[Expr]) -> List[Expr]:
    return [item for item in items if not isinstance(item, ExprEmpty)]


def expr_all(items: Iterable[Expr]) -> Expr:
    kept = _normalized(items)
    if not kept:
        return EMPTY
    if len(kept) == 1:
        return kept[0]
    return ExprAll(tuple(kept))


def expr_any(items: Iterable[Expr]) -> Expr:
    kept = _normalized(items)
    if not kept:
        return EMPTY
    if len(kept) == 1:
        return kept[0]
    return ExprAny(tuple(kept))


def course(topic: str, number: int) -> ExprCourse:
    return ExprCourse(topic, int(number))


def iter_courses(expr: Expr) -> Iterator[ExprCourse]:
    """Yield every course leaf, left to right."""
    if isinstance(expr, ExprCourse):
        yield expr
    elif isinstance(expr, (ExprAll, ExprAny)):
        for item in expr.items:
            yield from iter_courses(item)


def expr_from_json(node: Dict[str, Any]) -> Expr:
    if not node:
        return EMPTY
    if "all" in node:
        return expr_all(expr_from_json(item) for item in node["all"])
    if "any" in node:
        return expr_any(expr_from_json(item) for item in node["any"])
    if "course" in node:
        data = node["course"]
        return course(data["topic"], int(data["number"]))
    raise ValueError(f"not an expression: {node!r}")
