#!/usr/bin/env python3
import argparse
import json
import os
from typing import Any, Dict, List, Optional, Set

from prereq_graph.catalog import Course, CourseId, ReqAnd, ReqOr, Requirement
from prereq_graph.config import CATALOG_PATH, PARSED_PATH
from prereq_graph.errors import CourseIdError
from prereq_graph.expr import expr_from_json
from prereq_graph.requirements import requirement_tree


def prune_unknown(req: Requirement, known: Set[CourseId], dropped: List[str]) -> Optional[Requirement]:
    """Remove references to courses outside the catalog; empty groups disappear."""
    if isinstance(req, (ReqAnd, ReqOr)):
        items = [r for r in (prune_unknown(item, known, dropped) for item in req.items) if r is not None]
        if not items:
            return None
        if len(items) == 1:
            return items[0]
        return type(req)(tuple(items))
    if req.course not in known:
        dropped.append(str(req.course))
        return None
    return req


def main() -> int:
    ap = argparse.ArgumentParser(description="Build the course catalog from parsed course records")
    ap.add_argument("input", nargs="?", default=str(PARSED_PATH), help="Input parsed courses JSON")
    ap.add_argument("--output", default=str(CATALOG_PATH), help="Output catalog JSON path")
    args = ap.parse_args()

    with open(args.input, "r", encoding="utf-8") as f:
        records = json.load(f)

    courses: List[Course] = []
    stats = {"total": 0, "bad_id": 0, "bad_requirement": 0, "with_requirements": 0, "dropped_refs": 0}
    for r in records:
        stats["total"] += 1
        try:
            course_id = CourseId.parse(r.get("index") or "")
        except CourseIdError as e:
            stats["bad_id"] += 1
            print(f"[warn] skip {r.get('index')!r}: {e}")
            continue
        try:
            req = requirement_tree(expr_from_json(r.get("prereqs") or {}), expr_from_json(r.get("coreqs") or {}))
        except CourseIdError as e:
            stats["bad_requirement"] += 1
            print(f"[warn] {course_id}: requirements dropped: {e}")
            req = None
        courses.append(Course(course_id, r.get("name") or "", r.get("description") or "", req))

    known = {c.id for c in courses}
    for c in courses:
        if c.requirements is None:
            continue
        dropped: List[str] = []
        c.requirements = prune_unknown(c.requirements, known, dropped)
        if dropped:
            stats["dropped_refs"] += len(dropped)
            print(f"[warn] {c.id}: not in catalog: {', '.join(dropped)}")
        if c.requirements is not None:
            stats["with_requirements"] += 1

    out: List[Dict[str, Any]] = [c.to_json() for c in courses]
    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(out, f, ensure_ascii=False, indent=2)

    print(json.dumps(stats))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
