"""In-place circuit simplification passes."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from benchmark_zx.circuits.generate import (
    CNOT,
    CZ,
    HADAMARD,
    PHASE_MOD,
    Z_PHASE,
    BasisElem,
    Circuit,
    Gate,
)

SELF_INVERSE = (HADAMARD, CNOT, CZ)


class SimpFunc(Enum):
    NO_SIMP = "no_simp"
    CLIFFORD_SIMP = "clifford_simp"
    FULL_SIMP = "full_simp"


def _commutes_with_z(gate: Gate, qubit: int) -> bool:
    """Whether a Z-phase on ``qubit`` can be moved across ``gate``."""
    if gate.name in (Z_PHASE, CZ):
        return True
    if gate.name == CNOT:
        return gate.qubits[0] == qubit
    return False


def _z_plugged(states: Optional[Sequence[BasisElem]], qubit: int) -> bool:
    return states is not None and states[qubit].is_z


def cancel_inverse_pairs(graph: Circuit) -> int:
    """Remove adjacent pairs of equal self-inverse gates. Returns gates removed."""
    kept: list[Optional[Gate]] = []
    stacks: dict[int, list[int]] = {qubit: [] for qubit in range(graph.qubits)}
    removed = 0
    for gate in graph.gates:
        if gate.name in SELF_INVERSE:
            tops = {stacks[q][-1] if stacks[q] else None for q in gate.qubits}
            if len(tops) == 1:
                (top,) = tops
                if top is not None and kept[top] == gate:
                    kept[top] = None
                    for qubit in gate.qubits:
                        stacks[qubit].pop()
                    removed += 2
                    continue
        kept.append(gate)
        for qubit in gate.qubits:
            stacks[qubit].append(len(kept) - 1)
    graph.gates = [gate for gate in kept if gate is not None]
    return removed


def _strip_boundary_phases(gates: list[Gate], states: Optional[Sequence[BasisElem]]) -> list[Gate]:
    """Drop phases that act directly on a plugged Z-basis boundary."""
    out: list[Gate] = []
    sealed: set[int] = set()
    for gate in gates:
        if gate.name == Z_PHASE:
            qubit = gate.qubits[0]
            if qubit not in sealed and _z_plugged(states, qubit):
                continue
        else:
            for qubit in gate.qubits:
                if not _commutes_with_z(gate, qubit):
                    sealed.add(qubit)
        out.append(gate)
    return out


def fold_phases(graph: Circuit) -> int:
    """Merge Z-phases that meet across commuting gates. Returns gates removed."""
    before = len(graph.gates)
    gates = _strip_boundary_phases(graph.gates, graph.inputs)
    gates = _strip_boundary_phases(gates[::-1], graph.outputs)[::-1]

    merged: list[Gate] = []
    open_slots: dict[int, int] = {}
    for gate in gates:
        if gate.name == Z_PHASE:
            qubit = gate.qubits[0]
            slot = open_slots.get(qubit)
            if slot is not None:
                merged[slot] = merged[slot].with_phase(merged[slot].phase + gate.phase)
                continue
            open_slots[qubit] = len(merged)
        else:
            for qubit in gate.qubits:
                if not _commutes_with_z(gate, qubit):
                    open_slots.pop(qubit, None)
        merged.append(gate)

    graph.gates = [
        gate for gate in merged if not (gate.name == Z_PHASE and gate.phase % PHASE_MOD == 0)
    ]
    return before - len(graph.gates)


def clifford_simp(graph: Circuit) -> None:
    while cancel_inverse_pairs(graph):
        pass


def full_simp(graph: Circuit) -> None:
    while cancel_inverse_pairs(graph) + fold_phases(graph):
        pass


def simplify(graph: Circuit, simp: SimpFunc) -> None:
    if simp is SimpFunc.FULL_SIMP:
        full_simp(graph)
    elif simp is SimpFunc.CLIFFORD_SIMP:
        clifford_simp(graph)
