"""Re-render benchmark charts from an existing results directory."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from benchmark_zx.benchmarks.schema import Series
from benchmark_zx.errors import BenchmarkError
from benchmark_zx.metrics.aggregate import aggregate
from benchmark_zx.pipeline import load_run, render_plots
from benchmark_zx.plotting.svg import PlotSpec, plot_spec_for


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot benchmark result tables.")
    parser.add_argument("--results-dir", type=Path, default=Path("benches/results"))
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML config used for the run (sets the x range). Defaults to the config recorded in the manifest.",
    )
    parser.add_argument("--png", action="store_true", help="Also write matplotlib PNG figures.")
    return parser.parse_args()


def _plot_png(spec: PlotSpec, series: dict[str, Series], out: Path) -> None:
    fig, ax = plt.subplots(figsize=(spec.width / 100, spec.height / 100))
    for name, data in series.items():
        if not len(data):
            continue
        ax.plot(data.xs, data.ys, marker="o", label=name)

    ax.set_title(spec.title)
    ax.set_xlabel(spec.x_label)
    ax.set_ylabel(spec.y_label)
    ax.set_xlim(*spec.x_range)
    ax.legend(loc="best", fontsize=8)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(out)
    plt.close(fig)


def main() -> None:
    args = _parse_args()

    try:
        manifest, config = load_run(args.results_dir, args.config)
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc
    except BenchmarkError as exc:
        raise SystemExit(exc.describe()) from exc

    try:
        plots = render_plots(manifest, config, args.results_dir)
        if args.png:
            for kind, svg_path in list(plots.items()):
                png_path = svg_path.with_suffix(".png")
                _plot_png(plot_spec_for(kind, config), aggregate(manifest, kind), png_path)
                plots[f"{kind}_png"] = png_path
    except BenchmarkError as exc:
        raise SystemExit(exc.describe()) from exc

    for path in plots.values():
        print(f"Wrote {path}")


if __name__ == "__main__":
    main()
