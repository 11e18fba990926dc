"""Random Clifford+T circuit instances."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Sequence

import numpy as np

# Phases are stored in units of pi/4, so a T gate has phase 1 and S has phase 2.
PHASE_MOD = 8

Z_PHASE = "z_phase"
HADAMARD = "h"
CNOT = "cnot"
CZ = "cz"

CLIFFORD_GATES = ("s", HADAMARD, CNOT, CZ)


class BasisElem(Enum):
    Z0 = "z0"
    Z1 = "z1"
    X0 = "x0"
    X1 = "x1"

    @property
    def is_z(self) -> bool:
        return self in (BasisElem.Z0, BasisElem.Z1)


@dataclass(frozen=True)
class Gate:
    name: str
    qubits: tuple[int, ...]
    phase: int = 0

    @property
    def is_phase(self) -> bool:
        return self.name == Z_PHASE

    @property
    def is_t(self) -> bool:
        return self.is_phase and self.phase % 2 == 1

    def with_phase(self, phase: int) -> Gate:
        return replace(self, phase=phase % PHASE_MOD)


def z_phase(qubit: int, phase: int) -> Gate:
    return Gate(Z_PHASE, (qubit,), phase % PHASE_MOD)


def t_gate(qubit: int) -> Gate:
    return z_phase(qubit, 1)


def s_gate(qubit: int) -> Gate:
    return z_phase(qubit, 2)


def h_gate(qubit: int) -> Gate:
    return Gate(HADAMARD, (qubit,))


def cnot_gate(control: int, target: int) -> Gate:
    return Gate(CNOT, (control, target))


def cz_gate(a: int, b: int) -> Gate:
    # CZ is symmetric; sort so equal gates compare equal.
    return Gate(CZ, tuple(sorted((a, b))))


@dataclass
class Circuit:
    """Gate list over ``qubits`` wires, optionally plugged with basis states."""

    qubits: int
    gates: list[Gate] = field(default_factory=list)
    inputs: tuple[BasisElem, ...] | None = None
    outputs: tuple[BasisElem, ...] | None = None

    def __len__(self) -> int:
        return len(self.gates)

    def __iter__(self) -> Iterator[Gate]:
        return iter(self.gates)

    def add(self, gate: Gate) -> Circuit:
        for qubit in gate.qubits:
            if not 0 <= qubit < self.qubits:
                raise ValueError(f"Qubit {qubit} out of range for {self.qubits}-qubit circuit.")
        self.gates.append(gate)
        return self

    def copy(self) -> Circuit:
        return Circuit(self.qubits, list(self.gates), self.inputs, self.outputs)

    def plug_inputs(self, states: Sequence[BasisElem]) -> None:
        if len(states) != self.qubits:
            raise ValueError(f"Expected {self.qubits} input states, got {len(states)}.")
        self.inputs = tuple(states)

    def plug_outputs(self, states: Sequence[BasisElem]) -> None:
        if len(states) != self.qubits:
            raise ValueError(f"Expected {self.qubits} output states, got {len(states)}.")
        self.outputs = tuple(states)

    def t_gates(self) -> list[int]:
        return [idx for idx, gate in enumerate(self.gates) if gate.is_t]

    def tcount(self) -> int:
        return sum(1 for gate in self.gates if gate.is_t)


class RandomCircuitBuilder:
    """Chained builder for random Clifford+T circuits.

    Each ``build`` call draws from one generator seeded by ``seed``, so a
    sequence of builds is reproducible but successive circuits differ.
    """

    def __init__(self) -> None:
        self._seed = 0
        self._qubits = 1
        self._depth = 0
        self._clifford_t = 0.0
        self._rng = np.random.default_rng(self._seed)

    def seed(self, seed: int) -> RandomCircuitBuilder:
        self._seed = seed
        self._rng = np.random.default_rng(seed)
        return self

    def qubits(self, qubits: int) -> RandomCircuitBuilder:
        if qubits < 1:
            raise ValueError("qubits must be >= 1")
        self._qubits = qubits
        return self

    def depth(self, depth: int) -> RandomCircuitBuilder:
        if depth < 0:
            raise ValueError("depth must be >= 0")
        self._depth = depth
        return self

    def clifford_t(self, fraction: float) -> RandomCircuitBuilder:
        if not 0.0 <= fraction <= 1.0:
            raise ValueError("clifford_t fraction must lie in [0, 1]")
        self._clifford_t = fraction
        return self

    def _random_clifford(self, qubit: int) -> Gate:
        kind = CLIFFORD_GATES[int(self._rng.integers(len(CLIFFORD_GATES)))]
        if kind in (CNOT, CZ) and self._qubits > 1:
            first, second = (int(q) for q in self._rng.choice(self._qubits, size=2, replace=False))
            return cnot_gate(first, second) if kind == CNOT else cz_gate(first, second)
        if kind == "s":
            return s_gate(qubit)
        return h_gate(qubit)

    def build(self) -> Circuit:
        circuit = Circuit(self._qubits)
        for _ in range(self._depth):
            qubit = int(self._rng.integers(self._qubits))
            if self._rng.random() < self._clifford_t:
                circuit.add(t_gate(qubit))
            else:
                circuit.add(self._random_clifford(qubit))
        return circuit
