#!/usr/bin/env python3
from __future__ import annotations

import argparse
import hashlib
import json
import pathlib
from datetime import datetime, timezone
from typing import Iterable

import numpy as np

# Sizes straddling the dispatch thresholds (8 and 20 nodes).
DEFAULT_SIZES = [5, 7, 8, 12, 19, 20, 40]


def errand_costs(num_nodes: int, rng: np.random.Generator, block_km: float, detour: float) -> np.ndarray:
    """Travel costs between random stops in a ``block_km`` square.

    Each directed leg is stretched by its own factor in ``[1, 1 + detour)``,
    so ``a -> b`` and ``b -> a`` differ when ``detour > 0``.
    """
    stops = rng.random((num_nodes, 2)) * block_km
    costs = np.linalg.norm(stops[:, None, :] - stops[None, :, :], axis=-1)
    if detour > 0:
        costs *= 1.0 + rng.random(costs.shape) * detour
    np.fill_diagonal(costs, 0.0)
    return costs


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write random cost matrices for run_algorithms.py.")
    parser.add_argument(
        "--sizes",
        nargs="+",
        type=int,
        default=DEFAULT_SIZES,
        help="Node counts to generate (default: sizes around the dispatch thresholds).",
    )
    parser.add_argument("--per-size", type=int, default=3, help="Matrices per node count.")
    parser.add_argument("--block-km", type=float, default=5.0, help="Side of the area the stops are drawn from.")
    parser.add_argument(
        "--detour",
        type=float,
        default=0.0,
        help="Maximum extra fraction added to each directed leg; 0 keeps costs symmetric.",
    )
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--output", type=pathlib.Path, default=pathlib.Path("data/problems.jsonl"))
    return parser.parse_args(raw_args)


def main(raw_args: Iterable[str] | None = None) -> None:
    args = parse_args(raw_args)
    rng = np.random.default_rng(args.seed)
    created_at = datetime.now(timezone.utc).isoformat()
    args.output.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    with args.output.open("w", encoding="utf-8") as fh:
        for size in args.sizes:
            for _ in range(args.per_size):
                costs = errand_costs(size, rng, args.block_km, args.detour)
                record = {
                    "problem_id": hashlib.sha1(costs.tobytes()).hexdigest(),
                    "num_cities": size,
                    "cost_matrix": costs.tolist(),
                    "symmetric": args.detour == 0,
                    "seed": args.seed,
                    "created_at": created_at,
                }
                fh.write(json.dumps(record) + "\n")
                written += 1
    print(f"Wrote {written} problems to {args.output}")


if __name__ == "__main__":
    main()
