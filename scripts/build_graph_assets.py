#!/usr/bin/env python3
import argparse
import json
import os
from collections import Counter

from prereq_graph.config import CATALOG_PATH, GRAPH_PATH
from prereq_graph.errors import CatalogError, GraphBuildError
from prereq_graph.graph import CourseGraph


def main() -> int:
    ap = argparse.ArgumentParser(description="Build the course dependency graph from a catalog")
    ap.add_argument("input", nargs="?", default=str(CATALOG_PATH), help="Input catalog JSON")
    ap.add_argument("--graph-out", default=str(GRAPH_PATH), help="Output graph JSON (nodes, edges)")
    ap.add_argument("--dot-out", default=None, help="Also write the graph as Graphviz dot")
    ap.add_argument("--hard-only", action="store_true", help="Only include prerequisite edges (exclude coreq)")
    args = ap.parse_args()

    with open(args.input, "r", encoding="utf-8") as f:
        catalog = json.load(f)

    try:
        graph = CourseGraph.from_catalog(catalog)
    except CatalogError as e:
        for err in e.errors:
            print(f"[error] {err}")
        return 1
    except GraphBuildError as e:
        print(f"[error] {e}")
        return 1

    data = graph.to_json()
    if args.hard_only:
        data["edges"] = [e for e in data["edges"] if e["kind"] == "prereq"]

    os.makedirs(os.path.dirname(args.graph_out) or ".", exist_ok=True)
    with open(args.graph_out, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    if args.dot_out:
        with open(args.dot_out, "w", encoding="utf-8") as f:
            f.write(graph.to_dot())
        print(f"[info] wrote {args.dot_out}")

    kinds = Counter(n["kind"] for n in data["nodes"])
    edge_kinds = Counter(e["kind"] for e in data["edges"])
    print(f"nodes: {len(data['nodes'])} (courses={kinds['course']}, or={kinds['or']}), "
          f"edges: {len(data['edges'])} (prereq={edge_kinds['prereq']}, coreq={edge_kinds['coreq']})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
