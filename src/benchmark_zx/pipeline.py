"""End-to-end benchmark pipeline: corpus, runs, aggregation, charts."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from benchmark_zx.benchmarks.harness import run_all
from benchmark_zx.benchmarks.sampler import build_corpus
from benchmark_zx.benchmarks.schema import BenchResult, TableRef
from benchmark_zx.config import BenchConfig, load_config
from benchmark_zx.errors import CorpusGenerationExhausted, DirectoryUnavailable
from benchmark_zx.io.output import (
    MANIFEST_NAME,
    discover_tables,
    read_manifest,
    read_manifest_config,
    write_manifest,
)
from benchmark_zx.metrics.aggregate import aggregate
from benchmark_zx.plotting.svg import PLOT_FILES, plot_spec_for, write_svg


def ensure_results_dir(path: str | Path) -> Path:
    results_dir = Path(path)
    try:
        results_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryUnavailable(f"Failed to create results directory: {exc}", target=results_dir) from exc
    return results_dir


def render_plots(
    manifest: Iterable[TableRef],
    config: BenchConfig,
    results_dir: str | Path,
) -> dict[str, Path]:
    manifest = list(manifest)
    plots: dict[str, Path] = {}
    for kind, filename in PLOT_FILES.items():
        series = aggregate(manifest, kind)
        plots[kind] = write_svg(plot_spec_for(kind, config), series, Path(results_dir) / filename)
    return plots


def load_run(
    results_dir: str | Path,
    config_path: str | Path | None = None,
) -> tuple[list[TableRef], BenchConfig]:
    """Tables and config of a finished run, for re-rendering its charts.

    An explicit ``config_path`` wins over the config recorded in the manifest.
    Directories without a manifest fall back to file-name discovery and the
    default config.
    """
    results_dir = Path(results_dir)
    manifest_path = results_dir / MANIFEST_NAME
    if manifest_path.exists():
        manifest = read_manifest(manifest_path)
        recorded = read_manifest_config(manifest_path)
    else:
        manifest = [ref for kind in PLOT_FILES for ref in discover_tables(results_dir, kind)]
        recorded = None
    if config_path is not None:
        return manifest, load_config(config_path)
    return manifest, recorded or BenchConfig()


def bench(config: BenchConfig | None = None, verbose: bool = True) -> BenchResult:
    config = (config or BenchConfig()).validate()
    results_dir = ensure_results_dir(config.results_dir)

    if verbose:
        print("Generating test set...")
    corpus = build_corpus(config, verbose=verbose)
    if len(corpus) != config.corpus_size:
        raise CorpusGenerationExhausted(
            f"Corpus holds {len(corpus)} samples, expected {config.corpus_size}",
            target=corpus.incomplete_keys(),
        )

    # Every variant finishes writing before any table is read back.
    if verbose:
        print("Running Driver benchmarks...")
    manifest = run_all(corpus, config, verbose=verbose)
    write_manifest(results_dir / MANIFEST_NAME, manifest, config)

    if verbose:
        print("Generating plots...")
    plots = render_plots(manifest, config, results_dir)

    if verbose:
        print(f"Benchmarking complete! Plots saved to {results_dir}/")
    return BenchResult(corpus_size=len(corpus), manifest=manifest, plots=plots)
