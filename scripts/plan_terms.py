#!/usr/bin/env python3
import argparse
import json

from prereq_graph.config import CATALOG_PATH, DEFAULT_TERM_CAPACITY, MAX_SET_CAPACITY
from prereq_graph.errors import CatalogError, GraphBuildError, SchedulingError
from prereq_graph.graph import CourseGraph
from prereq_graph.scheduler import plan_terms


def main() -> int:
    ap = argparse.ArgumentParser(description="Plan the terms needed to take a set of desired courses")
    ap.add_argument("courses", nargs="+", help='Desired courses, e.g. "CMPUT 201" "MATH 125"')
    ap.add_argument("--catalog", default=str(CATALOG_PATH), help="Catalog JSON")
    ap.add_argument("--capacity", type=int, default=DEFAULT_TERM_CAPACITY, help=f"Courses per term (1-{MAX_SET_CAPACITY})")
    ap.add_argument("--json", action="store_true", help="Print the plan as JSON")
    args = ap.parse_args()

    with open(args.catalog, "r", encoding="utf-8") as f:
        catalog = json.load(f)

    try:
        graph = CourseGraph.from_catalog(catalog)
        schedule = plan_terms(graph, args.courses, args.capacity)
    except (CatalogError, GraphBuildError, SchedulingError) as e:
        print(f"[error] {e}")
        return 1

    for text in schedule.unknown:
        print(f"[warn] not in catalog: {text}")

    if args.json:
        print(json.dumps({
            "terms": [[str(cid) for cid in term] for term in schedule.terms],
            "unknown": schedule.unknown,
        }, indent=2))
        return 0

    for i, term in enumerate(schedule.terms, start=1):
        print(f"term {i}: {', '.join(str(cid) for cid in term)}")
    print(f"[done] {sum(len(t) for t in schedule.terms)} courses in {len(schedule.terms)} terms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
