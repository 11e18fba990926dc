"""Circuits subpackage."""

from benchmark_zx.circuits.generate import (
    BasisElem,
    Circuit,
    Gate,
    RandomCircuitBuilder,
    cnot_gate,
    cz_gate,
    h_gate,
    s_gate,
    t_gate,
    z_phase,
)
from benchmark_zx.circuits.simplify import SimpFunc, clifford_simp, full_simp, simplify

__all__ = [
    "BasisElem",
    "Circuit",
    "Gate",
    "RandomCircuitBuilder",
    "SimpFunc",
    "clifford_simp",
    "cnot_gate",
    "cz_gate",
    "full_simp",
    "h_gate",
    "s_gate",
    "simplify",
    "t_gate",
    "z_phase",
]
