"""Tests for the random circuit builder and simplification passes."""

from __future__ import annotations

import pytest

from benchmark_zx.circuits.generate import (
    BasisElem,
    Circuit,
    RandomCircuitBuilder,
    cnot_gate,
    cz_gate,
    h_gate,
    s_gate,
    t_gate,
)
from benchmark_zx.circuits.simplify import SimpFunc, clifford_simp, full_simp, simplify


# ---------------------------------------------------------------------------
# Builder


def test_builder_is_reproducible() -> None:
    first = RandomCircuitBuilder().seed(11).qubits(5).clifford_t(0.3).depth(40).build()
    second = RandomCircuitBuilder().seed(11).qubits(5).clifford_t(0.3).depth(40).build()
    assert first == second
    assert len(first) == 40


def test_builder_advances_between_builds() -> None:
    builder = RandomCircuitBuilder().seed(11).qubits(5).clifford_t(0.3).depth(40)
    assert builder.build() != builder.build()


def test_builder_all_t_fraction() -> None:
    circuit = RandomCircuitBuilder().seed(0).qubits(3).clifford_t(1.0).depth(12).build()
    assert circuit.tcount() == 12


def test_builder_rejects_bad_fraction() -> None:
    with pytest.raises(ValueError):
        RandomCircuitBuilder().clifford_t(1.5)


def test_plug_inputs_checks_width() -> None:
    circuit = Circuit(2)
    with pytest.raises(ValueError):
        circuit.plug_inputs([BasisElem.Z0])


def test_cz_is_symmetric() -> None:
    assert cz_gate(1, 0) == cz_gate(0, 1)


def test_add_rejects_out_of_range_qubit() -> None:
    with pytest.raises(ValueError):
        Circuit(1).add(cnot_gate(0, 1))


# ---------------------------------------------------------------------------
# Simplification


def test_adjacent_t_gates_fold_into_s() -> None:
    circuit = Circuit(1, [t_gate(0), t_gate(0)])
    full_simp(circuit)
    assert circuit.gates == [s_gate(0)]
    assert circuit.tcount() == 0


def test_phases_fold_across_diagonal_gates() -> None:
    circuit = Circuit(2, [t_gate(0), cz_gate(0, 1), cnot_gate(0, 1), t_gate(0)])
    full_simp(circuit)
    assert circuit.tcount() == 0
    assert circuit.gates[0] == s_gate(0)


def test_cnot_target_blocks_folding() -> None:
    circuit = Circuit(2, [t_gate(1), cnot_gate(0, 1), t_gate(1)])
    full_simp(circuit)
    assert circuit.tcount() == 2


def test_hadamard_pairs_cancel() -> None:
    gates = [t_gate(0), h_gate(0), h_gate(0), t_gate(0)]

    clifford = Circuit(1, list(gates))
    clifford_simp(clifford)
    assert clifford.gates == [t_gate(0), t_gate(0)]

    full = Circuit(1, list(gates))
    full_simp(full)
    assert full.gates == [s_gate(0)]


def test_plugged_boundaries_drop_outer_phases() -> None:
    gates = [t_gate(0), h_gate(0), t_gate(0), h_gate(0), t_gate(0)]

    open_circuit = Circuit(1, list(gates))
    full_simp(open_circuit)
    assert open_circuit.tcount() == 3

    plugged = Circuit(1, list(gates))
    plugged.plug_inputs([BasisElem.Z0])
    plugged.plug_outputs([BasisElem.Z0])
    full_simp(plugged)
    assert plugged.gates == [h_gate(0), t_gate(0), h_gate(0)]


def test_x_basis_boundary_keeps_phases() -> None:
    circuit = Circuit(1, [t_gate(0), h_gate(0)])
    circuit.plug_inputs([BasisElem.X0])
    full_simp(circuit)
    assert circuit.tcount() == 1


def test_no_simp_leaves_circuit_untouched() -> None:
    circuit = Circuit(1, [t_gate(0), t_gate(0)])
    simplify(circuit, SimpFunc.NO_SIMP)
    assert circuit.tcount() == 2
