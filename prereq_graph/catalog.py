"""
Catalog data model: course ids, courses and their requirement trees.

Structured catalogs are JSON documents validated against CATALOG_SCHEMA:

    [{"id": {"subject_id": "CMPUT", "class_id": 102} | "CMPUT 102",
      "name": "...", "description": "...",
      "requirements": null | {"and": [...]} | {"or": [...]}
                           | {"prereq": "CMPUT 101"} | {"coreq": "MATH 100"}}]
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from jsonschema import Draft202012Validator

from .config import MAX_CLASS_ID, MIN_CLASS_ID
from .errors import CatalogError, CourseIdError


@dataclass(frozen=True, order=True)
class CourseId:
    subject_id: str
    class_id: int

    def __post_init__(self) -> None:
        if not self.subject_id:
            raise CourseIdError("course id has no subject")
        object.__setattr__(self, "subject_id", self.subject_id.upper())
        if not MIN_CLASS_ID <= self.class_id < MAX_CLASS_ID:
            raise CourseIdError(
                f"class id {self.class_id} of {self.subject_id} outside [{MIN_CLASS_ID}, {MAX_CLASS_ID})"
            )

    @classmethod
    def parse(cls, text: str) -> "CourseId":
        """Parse "SUBJECT NUMBER"; multi-word subjects such as "EN PH 131" are allowed."""
        parts = text.split()
        if len(parts) < 2:
            raise CourseIdError(f"expected 'SUBJECT NUMBER', got {text!r}")
        number = parts[-1]
        if not number.isdigit():
            raise CourseIdError(f"class id {number!r} of {text!r} is not a number")
        return cls(" ".join(parts[:-1]).upper(), int(number))

    def __str__(self) -> str:
        return f"{self.subject_id} {self.class_id}"

    def to_json(self) -> Dict[str, Any]:
        return {"subject_id": self.subject_id, "class_id": self.class_id}


# Requirement tree


@dataclass(frozen=True)
class Prereq:
    course: CourseId


@dataclass(frozen=True)
class Coreq:
    course: CourseId


@dataclass(frozen=True)
class ReqAnd:
    items: Tuple["Requirement", ...]


@dataclass(frozen=True)
class ReqOr:
    items: Tuple["Requirement", ...]


Requirement = Union[ReqAnd, ReqOr, Prereq, Coreq]


def iter_leaves(req: Requirement) -> Iterator[Union[Prereq, Coreq]]:
    if isinstance(req, (ReqAnd, ReqOr)):
        for item in req.items:
            yield from iter_leaves(item)
    else:
        yield req


def requirement_to_json(req: Requirement) -> Dict[str, Any]:
    if isinstance(req, ReqAnd):
        return {"and": [requirement_to_json(item) for item in req.items]}
    if isinstance(req, ReqOr):
        return {"or": [requirement_to_json(item) for item in req.items]}
    if isinstance(req, Prereq):
        return {"prereq": str(req.course)}
    return {"coreq": str(req.course)}


def course_id_from_json(node: Union[str, Dict[str, Any]]) -> CourseId:
    if isinstance(node, str):
        return CourseId.parse(node)
    return CourseId(node["subject_id"].upper(), int(node["class_id"]))


def requirement_from_json(node: Dict[str, Any]) -> Requirement:
    if "and" in node:
        return ReqAnd(tuple(requirement_from_json(item) for item in node["and"]))
    if "or" in node:
        return ReqOr(tuple(requirement_from_json(item) for item in node["or"]))
    if "prereq" in node:
        return Prereq(course_id_from_json(node["prereq"]))
    return Coreq(course_id_from_json(node["coreq"]))


@dataclass
class Course:
    id: CourseId
    name: str = ""
    description: str = ""
    requirements: Optional[Requirement] = field(default=None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Course):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id.to_json(),
            "name": self.name,
            "description": self.description,
            "requirements": requirement_to_json(self.requirements) if self.requirements is not None else None,
        }


# =============================================================================
# JSON SCHEMA
# =============================================================================

CATALOG_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {"$ref": "#/$defs/course"},
    "$defs": {
        "courseId": {
            "oneOf": [
                {"type": "string", "pattern": r"^[A-Za-z]+( [A-Za-z]+)* [1-9]\d{2}$"},
                {
                    "type": "object",
                    "properties": {
                        "subject_id": {"type": "string", "minLength": 1},
                        "class_id": {"type": "integer", "minimum": MIN_CLASS_ID, "exclusiveMaximum": MAX_CLASS_ID},
                    },
                    "required": ["subject_id", "class_id"],
                    "additionalProperties": False,
                },
            ]
        },
        "requirement": {
            "oneOf": [
                {
                    "type": "object",
                    "properties": {"and": {"type": "array", "items": {"$ref": "#/$defs/requirement"}}},
                    "required": ["and"],
                    "additionalProperties": False,
                },
                {
                    "type": "object",
                    "properties": {"or": {"type": "array", "items": {"$ref": "#/$defs/requirement"}}},
                    "required": ["or"],
                    "additionalProperties": False,
                },
                {
                    "type": "object",
                    "properties": {"prereq": {"$ref": "#/$defs/courseId"}},
                    "required": ["prereq"],
                    "additionalProperties": False,
                },
                {
                    "type": "object",
                    "properties": {"coreq": {"$ref": "#/$defs/courseId"}},
                    "required": ["coreq"],
                    "additionalProperties": False,
                },
            ]
        },
        "course": {
            "type": "object",
            "properties": {
                "id": {"$ref": "#/$defs/courseId"},
                "name": {"type": "string"},
                "description": {"type": "string"},
                "requirements": {"oneOf": [{"type": "null"}, {"$ref": "#/$defs/requirement"}]},
            },
            "required": ["id"],
        },
    },
}


def validate_catalog(data: Any) -> List[str]:
    """Return one message per schema violation, empty when the catalog is valid."""
    validator = Draft202012Validator(CATALOG_SCHEMA)
    return [f"{err.message} at {list(err.path)}" for err in validator.iter_errors(data)]


def load_catalog(data: Any) -> List[Course]:
    errors = validate_catalog(data)
    if errors:
        raise CatalogError(errors)
    courses: List[Course] = []
    for item in data:
        req = item.get("requirements")
        courses.append(Course(
            id=course_id_from_json(item["id"]),
            name=item.get("name", ""),
            description=item.get("description", ""),
            requirements=requirement_from_json(req) if req is not None else None,
        ))
    return courses
