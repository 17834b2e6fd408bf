#!/usr/bin/env python3
from __future__ import annotations

import argparse
import hashlib
import json
import logging
import pathlib
import sys
from dataclasses import asdict
from typing import Iterable, Iterator

import numpy as np

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ErrandTSP import CostMatrix, ErrandTSPError, TspSolver
from ErrandTSP.solvers import SOLVER_SPECS, AlgorithmResult

AUTO = "auto"
RUNNABLE = sorted(name for name in SOLVER_SPECS if name != "genetic_algorithm")


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run TSP algorithms on generated problem instances.")
    parser.add_argument(
        "--problems",
        type=pathlib.Path,
        default=pathlib.Path("data/problems.jsonl"),
        help="JSONL file containing problem instances.",
    )
    parser.add_argument(
        "--results",
        type=pathlib.Path,
        default=pathlib.Path("data/results.jsonl"),
        help="Destination JSONL file for algorithm outcomes.",
    )
    parser.add_argument(
        "--algorithms",
        nargs="+",
        choices=RUNNABLE + [AUTO],
        help="Subset of algorithms to execute (default: all).",
    )
    parser.add_argument(
        "--start",
        type=int,
        default=0,
        help="Starting node for every instance.",
    )
    parser.add_argument(
        "--max-backtracking-nodes",
        type=int,
        default=10,
        help="Skip backtracking above this many cities.",
    )
    parser.add_argument(
        "--max-held-karp-nodes",
        type=int,
        default=20,
        help="Skip Held-Karp above this many cities.",
    )
    parser.add_argument(
        "--prune",
        action="store_true",
        help="Let backtracking cut branches that cannot beat the best tour.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return parser.parse_args(raw_args)


def iter_jsonl(path: pathlib.Path) -> Iterator[dict]:
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            yield json.loads(line)


def ensure_problem_id(problem: dict) -> str:
    if "problem_id" in problem:
        return problem["problem_id"]
    costs = np.asarray(problem.get("cost_matrix"), dtype=float)
    digest = hashlib.sha1(costs.tobytes()).hexdigest()
    problem["problem_id"] = digest
    return digest


def load_matrix(problem: dict) -> CostMatrix:
    if problem.get("cost_matrix") is not None:
        return CostMatrix.from_array(problem["cost_matrix"])
    if problem.get("coordinates") is not None:
        return CostMatrix.from_coordinates(problem["coordinates"], metric=problem.get("metric", "euclidean"))
    raise ValueError("Problem data must contain either 'cost_matrix' or 'coordinates'.")


def size_limits(args: argparse.Namespace) -> dict[str, int]:
    return {"backtracking": args.max_backtracking_nodes, "held_karp": args.max_held_karp_nodes}


def serialize_result(problem: dict, algorithm: str, result: AlgorithmResult) -> dict:
    record = asdict(result)
    record.update(
        {
            "algorithm": algorithm,
            "problem_id": problem["problem_id"],
            "num_cities": problem.get("num_cities"),
        }
    )
    return record


def main(raw_args: Iterable[str] | None = None) -> int:
    args = parse_args(raw_args)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    if not args.problems.exists():
        raise SystemExit(f"Problem file not found: {args.problems}")

    selected_algorithms = args.algorithms or RUNNABLE + [AUTO]
    limits = size_limits(args)
    solver = TspSolver(solver_kwargs={"backtracking": {"prune": args.prune}})
    appended = 0
    skipped = 0
    args.results.parent.mkdir(parents=True, exist_ok=True)

    with args.results.open("a", encoding="utf-8") as out:
        for problem in iter_jsonl(args.problems):
            problem_id = ensure_problem_id(problem)
            solver.load_matrix(load_matrix(problem))
            solver.set_starting_point(args.start)
            num_cities = solver.node_count
            for algo_name in selected_algorithms:
                limit = limits.get(algo_name)
                if limit is not None and num_cities > limit:
                    skipped += 1
                    print(f"{algo_name} on problem {problem_id} (cities={num_cities}) -> skipped")
                    continue
                try:
                    result = solver.run(None if algo_name == AUTO else algo_name)
                except ErrandTSPError as exc:
                    record = {
                        "algorithm": algo_name,
                        "problem_id": problem_id,
                        "num_cities": num_cities,
                        "status": "infeasible",
                        "reason": type(exc).__name__,
                        "error": str(exc),
                    }
                else:
                    record = serialize_result(problem, algo_name, result)
                out.write(json.dumps(record))
                out.write("\n")
                appended += 1
                print(f"{algo_name} on problem {problem_id} (cities={num_cities}) -> {record.get('status')}")

    print(f"Completed {appended} runs. Skipped {skipped} oversized runs.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
