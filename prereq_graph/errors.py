"""
Exceptions raised by the pipeline.

Extraction and grammar failures are recoverable (the span is dropped);
catalog and graph failures are fatal to the build that raised them.
"""

from typing import List, Optional


class PrereqGraphError(Exception):
    """Base class for every error raised by this package."""


class CourseIdError(PrereqGraphError, ValueError):
    """A course id is missing its subject or number, or the number is out of range."""


class RequirementParseError(PrereqGraphError, ValueError):
    def __init__(self, message: str, text: str = "", position: Optional[int] = None):
        self.text = text
        self.position = position
        if position is not None:
            message = f"{message} at {position}: ...{text[position:position + 20]!r}"
        super().__init__(message)


class CatalogError(PrereqGraphError):
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("invalid catalog: " + "; ".join(self.errors))


class GraphBuildError(PrereqGraphError):
    """A requirement references a course that is not in the catalog."""

    def __init__(self, missing: str, referenced_by: List[str]):
        self.missing = missing
        self.referenced_by = list(referenced_by)
        super().__init__(
            f"unknown course {missing} required by {', '.join(self.referenced_by) or '?'}"
        )


class SchedulingError(PrereqGraphError):
    """Scheduling was asked to do something the graph cannot support."""
