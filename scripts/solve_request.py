#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from typing import Iterable

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ErrandTSP import ErrandTSPError, TspSolver, solve_request


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plan the visiting order for an errand request.")
    parser.add_argument(
        "request",
        type=pathlib.Path,
        nargs="?",
        help="JSON request file (default: read from stdin).",
    )
    parser.add_argument(
        "--output",
        type=pathlib.Path,
        help="Write the ordered route here instead of stdout.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return parser.parse_args(raw_args)


def main(raw_args: Iterable[str] | None = None) -> int:
    args = parse_args(raw_args)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.request is None:
        request = json.load(sys.stdin)
    else:
        with args.request.open("r", encoding="utf-8") as fh:
            request = json.load(fh)

    try:
        route = solve_request(request, solver=TspSolver())
    except ErrandTSPError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    payload = json.dumps(route, indent=2)
    if args.output is None:
        print(payload)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
