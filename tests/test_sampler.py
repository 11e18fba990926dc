"""Tests for the stratified corpus sampler."""

from __future__ import annotations

from dataclasses import replace

import pytest

from benchmark_zx.benchmarks.sampler import build_corpus
from benchmark_zx.benchmarks.schema import Bin, Corpus
from benchmark_zx.circuits.generate import Circuit
from benchmark_zx.config import BenchConfig
from benchmark_zx.errors import CorpusGenerationExhausted


def test_corpus_is_complete_and_stratified(small_config: BenchConfig) -> None:
    corpus = build_corpus(small_config, verbose=False)
    capacity = small_config.samples_per_tcount

    assert corpus.is_complete
    assert len(corpus) == small_config.corpus_size == 8

    flat = corpus.flatten()
    assert len(flat) == small_config.corpus_size
    chunk_keys = []
    for start in range(0, len(flat), capacity):
        counts = {sample.tcount() for sample in flat[start:start + capacity]}
        assert len(counts) == 1
        chunk_keys.append(counts.pop())
    assert chunk_keys == sorted(set(chunk_keys))
    assert chunk_keys == list(small_config.bin_keys)


def test_corpus_is_reproducible(small_config: BenchConfig) -> None:
    first = build_corpus(small_config, verbose=False).flatten()
    second = build_corpus(small_config, verbose=False).flatten()
    assert first == second


def test_different_seed_changes_corpus(small_config: BenchConfig) -> None:
    first = build_corpus(small_config, verbose=False).flatten()
    other = build_corpus(replace(small_config, seed=small_config.seed + 1), verbose=False).flatten()
    assert first != other


def test_sampler_reports_progress(small_config: BenchConfig, capsys: pytest.CaptureFixture[str]) -> None:
    build_corpus(small_config, verbose=True)
    out = capsys.readouterr().out
    assert "Full: 2" in out
    assert out.rstrip().endswith("Full!")


def test_unreachable_bins_exhaust_attempts() -> None:
    config = BenchConfig(
        qubits=3,
        min_tcount=200,
        max_tcount=202,
        samples_per_tcount=1,
        depth_sweep_factor=1,
        max_sweeps=2,
    )
    with pytest.raises(CorpusGenerationExhausted) as excinfo:
        build_corpus(config, verbose=False)
    assert excinfo.value.target == [200, 201]
    assert excinfo.value.phase == "corpus"


def test_bin_never_exceeds_capacity() -> None:
    graph_bin = Bin(key=3, capacity=1)
    assert graph_bin.add(Circuit(1))
    assert graph_bin.is_full
    assert not graph_bin.add(Circuit(1))
    assert len(graph_bin) == 1


def test_corpus_rejects_out_of_range_key() -> None:
    corpus = Corpus.empty(2, 4, 1)
    assert 4 not in corpus
    with pytest.raises(KeyError):
        corpus.bin(4)
