"""Benchmark harness: time each driver over the stratified corpus."""

from __future__ import annotations

import time
from typing import Callable, Iterable

from benchmark_zx.benchmarks.schema import Corpus, TableRef
from benchmark_zx.circuits.generate import Circuit
from benchmark_zx.circuits.simplify import SimpFunc
from benchmark_zx.config import BenchConfig, DriverSpec
from benchmark_zx.decompose.decomposer import Decomposer
from benchmark_zx.decompose.drivers import Driver, driver_from_name
from benchmark_zx.io.output import ResultTableWriter, table_path


def _time_ns(fn: Callable, *args, **kwargs):
    start = time.perf_counter_ns()
    result = fn(*args, **kwargs)
    return result, time.perf_counter_ns() - start


def _decompose(graph: Circuit, driver: Driver, simp: SimpFunc) -> Decomposer:
    return Decomposer(graph).with_simp(simp).with_split_graphs_components(True).decompose(driver)


def run_variant(
    corpus: Corpus,
    spec: DriverSpec,
    config: BenchConfig,
    verbose: bool = True,
) -> list[TableRef]:
    """Benchmark one variant on every bin below its bound.

    Writes ``benchmark_alpha_<name>.csv`` (term counts) and
    ``benchmark_times_<name>.csv`` (nanoseconds) under ``config.results_dir``
    and returns their manifest entries.
    """
    driver = driver_from_name(spec.driver, random_t=spec.random_t, seed=config.seed)
    alpha_path = table_path(config.results_dir, "alpha", spec.name)
    times_path = table_path(config.results_dir, "times", spec.name)
    bound = config.bound_for(spec)

    with ResultTableWriter(alpha_path, "alpha") as nterms_table, ResultTableWriter(
        times_path, "times"
    ) as times_table:
        for t_count in range(config.min_tcount, bound):
            if verbose:
                print(f"Benchmarking {spec.name} with t_count={t_count}")
            for graph in corpus.bin(t_count):
                decomposer, elapsed = _time_ns(_decompose, graph, driver, spec.simp)
                nterms_table.append(t_count, decomposer.nterms)
                times_table.append(t_count, elapsed)

    return [
        TableRef(kind="alpha", variant=spec.name, path=alpha_path),
        TableRef(kind="times", variant=spec.name, path=times_path),
    ]


def run_all(
    corpus: Corpus,
    config: BenchConfig,
    specs: Iterable[DriverSpec] | None = None,
    verbose: bool = True,
) -> list[TableRef]:
    manifest: list[TableRef] = []
    for spec in specs if specs is not None else config.drivers:
        manifest.extend(run_variant(corpus, spec, config, verbose=verbose))
    return manifest
