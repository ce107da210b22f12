#!/usr/bin/env python3
import argparse
import json
import os
from typing import Any, Dict, List

from prereq_graph.config import COURSES_PATH, PARSED_PATH, UNPARSED_PATH
from prereq_graph.extractor import RequirementExtractor
from prereq_graph.grammar import RequirementGrammarParser
from prereq_graph.requirements import parse_description


def parse_record(item: Dict[str, Any], extractor: RequirementExtractor, parser: RequirementGrammarParser) -> Dict[str, Any]:
    parsed = parse_description(item.get("description") or "", extractor, parser)
    return {
        "index": item.get("index"),
        "name": item.get("name"),
        "description": item.get("description"),
        "prereqs": parsed.prereqs.to_json(),
        "coreqs": parsed.coreqs.to_json(),
        "dropped": [
            {"kind": d.span.kind.value, "text": d.span.text, "error": str(d.error)}
            for d in parsed.dropped
        ],
    }


def main() -> int:
    ap = argparse.ArgumentParser(description="Parse prerequisite/corequisite sentences of course descriptions")
    ap.add_argument("input", nargs="?", default=str(COURSES_PATH), help="Input JSON array of {index, name, description}")
    ap.add_argument("--output", default=str(PARSED_PATH), help="Output JSON path")
    ap.add_argument("--unparsed-output", default=str(UNPARSED_PATH), help="Courses with at least one unreadable requirement sentence")
    args = ap.parse_args()

    with open(args.input, "r", encoding="utf-8") as f:
        data = json.load(f)

    extractor = RequirementExtractor()
    parser = RequirementGrammarParser()

    parsed: List[Dict[str, Any]] = []
    unparsed: List[Dict[str, Any]] = []
    stats = {"total": 0, "with_prereqs": 0, "with_coreqs": 0, "dropped_spans": 0}

    for item in data:
        stats["total"] += 1
        record = parse_record(item, extractor, parser)
        if record["prereqs"]:
            stats["with_prereqs"] += 1
        if record["coreqs"]:
            stats["with_coreqs"] += 1
        if record["dropped"]:
            stats["dropped_spans"] += len(record["dropped"])
            unparsed.append(record)
        parsed.append(record)

    for path in (args.output, args.unparsed_output):
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(parsed, f, ensure_ascii=False, indent=2)
    with open(args.unparsed_output, "w", encoding="utf-8") as f:
        json.dump(unparsed, f, ensure_ascii=False, indent=2)

    print(f"parsed: {len(parsed)}")
    print(f"unparsed: {len(unparsed)}")
    print(json.dumps(stats))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
