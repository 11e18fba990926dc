"""Shared fixtures for the benchmark test-suite."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT / "src"))

from benchmark_zx.circuits.generate import Circuit, h_gate, t_gate
from benchmark_zx.config import BenchConfig, DriverSpec


def build_chain(t_count: int, qubit: int = 0, circuit: Circuit | None = None) -> Circuit:
    """T gates on one wire separated by Hadamards, so nothing folds."""
    circuit = circuit if circuit is not None else Circuit(qubit + 1)
    for idx in range(t_count):
        circuit.add(t_gate(qubit))
        if idx < t_count - 1:
            circuit.add(h_gate(qubit))
    return circuit


@pytest.fixture
def small_config(tmp_path: Path) -> BenchConfig:
    return BenchConfig(
        seed=3,
        qubits=4,
        clifford_t=0.3,
        min_tcount=2,
        max_tcount=6,
        samples_per_tcount=2,
        results_dir=tmp_path / "results",
        drivers=(
            DriverSpec("TOnly", "t_only", max_tcount=5),
            DriverSpec("DynamicT", "dynamic_t"),
        ),
    )
