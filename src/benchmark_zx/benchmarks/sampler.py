"""Stratified sampling of random circuits by t-count."""

from __future__ import annotations

from benchmark_zx.benchmarks.schema import Corpus
from benchmark_zx.circuits.generate import BasisElem, Circuit, RandomCircuitBuilder
from benchmark_zx.circuits.simplify import full_simp
from benchmark_zx.config import BenchConfig
from benchmark_zx.errors import CorpusGenerationExhausted


def default_builder(config: BenchConfig) -> RandomCircuitBuilder:
    return RandomCircuitBuilder().seed(config.seed).qubits(config.qubits).clifford_t(config.clifford_t)


def normalize(graph: Circuit) -> Circuit:
    """Plug |0> on every boundary and fully simplify, in place."""
    graph.plug_inputs([BasisElem.Z0] * graph.qubits)
    graph.plug_outputs([BasisElem.Z0] * graph.qubits)
    full_simp(graph)
    return graph


def build_corpus(
    config: BenchConfig,
    builder: RandomCircuitBuilder | None = None,
    verbose: bool = True,
) -> Corpus:
    """Fill one bin per t-count in ``config.bin_keys``.

    Depth sweeps run from ``min_tcount`` to ``depth_sweep_factor * max_tcount``
    and repeat until every bin holds ``samples_per_tcount`` circuits. After
    ``max_sweeps`` sweeps the remaining empty slots are reported as
    :class:`CorpusGenerationExhausted`.
    """
    builder = builder or default_builder(config)
    corpus = Corpus.empty(config.min_tcount, config.max_tcount, config.samples_per_tcount)
    depths = range(config.min_tcount, config.depth_sweep_factor * config.max_tcount)

    for _ in range(config.max_sweeps):
        for depth in depths:
            graph = normalize(builder.depth(depth).build())
            t_count = graph.tcount()
            if t_count not in corpus:
                continue
            graph_bin = corpus.bin(t_count)
            if graph_bin.add(graph) and graph_bin.is_full and verbose:
                print(f"Full: {t_count}")
        if corpus.is_complete:
            if verbose:
                print("Full!")
            return corpus

    missing = corpus.incomplete_keys()
    raise CorpusGenerationExhausted(
        f"{len(missing)} bin(s) still short after {config.max_sweeps} sweep(s)",
        target=missing,
    )
