"""Entry point for running stratified T-count benchmarks."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from benchmark_zx.config import SUITES, BenchConfig, load_config
from benchmark_zx.errors import BenchmarkError
from benchmark_zx.pipeline import bench


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Benchmark decomposition drivers over random circuits.")
    parser.add_argument("--config", type=str, help="YAML config file (see configs/).")
    parser.add_argument("--results-dir", type=str, help="Override the results directory.")
    parser.add_argument(
        "--suite",
        choices=sorted(SUITES),
        help="Run a built-in variant suite instead of the configured drivers.",
    )
    parser.add_argument("--seed", type=int)
    parser.add_argument("--min-tcount", type=int)
    parser.add_argument("--max-tcount", type=int)
    parser.add_argument("--samples-per-tcount", type=int)
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output.")
    return parser


def _resolve_config(args: argparse.Namespace) -> BenchConfig:
    config = load_config(args.config) if args.config else BenchConfig()
    overrides = {
        "seed": args.seed,
        "min_tcount": args.min_tcount,
        "max_tcount": args.max_tcount,
        "samples_per_tcount": args.samples_per_tcount,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if args.results_dir:
        overrides["results_dir"] = Path(args.results_dir)
    if args.suite:
        overrides["drivers"] = SUITES[args.suite]
    return replace(config, **overrides).validate()


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    try:
        config = _resolve_config(args)
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    try:
        result = bench(config, verbose=not args.quiet)
    except BenchmarkError as exc:
        raise SystemExit(exc.describe()) from exc

    print(f"Wrote {len(result.manifest)} tables for {result.corpus_size} samples to {config.results_dir}")


if __name__ == "__main__":
    main()
