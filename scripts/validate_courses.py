#!/usr/bin/env python3
import json
import sys

from prereq_graph.catalog import validate_catalog


def main() -> int:
    if len(sys.argv) != 2:
        print("usage: validate_courses.py <catalog.json>")
        return 2

    with open(sys.argv[1], "r", encoding="utf-8") as f:
        data = json.load(f)

    errors = validate_catalog(data)
    if errors:
        for err in errors:
            print(f"error: {err}")
        return 1
    print(f"ok: {len(data)} courses")
    return 0


if __name__ == "__main__":
    sys.exit(main())
