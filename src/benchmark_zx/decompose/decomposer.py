"""Stabiliser-rank decomposition of Clifford+T circuits."""

from __future__ import annotations

from benchmark_zx.circuits.generate import Circuit
from benchmark_zx.circuits.simplify import SimpFunc, simplify
from benchmark_zx.decompose.drivers import Driver


def split_components(graph: Circuit) -> list[Circuit]:
    """Split into circuits over qubit sets joined by two-qubit gates.

    Components without gates are dropped; each remaining component keeps the
    full register width so plugged boundaries still line up.
    """
    parent = list(range(graph.qubits))

    def find(qubit: int) -> int:
        while parent[qubit] != qubit:
            parent[qubit] = parent[parent[qubit]]
            qubit = parent[qubit]
        return qubit

    for gate in graph.gates:
        roots = [find(q) for q in gate.qubits]
        for root in roots[1:]:
            parent[root] = roots[0]

    members: dict[int, list] = {}
    for gate in graph.gates:
        members.setdefault(find(gate.qubits[0]), []).append(gate)
    return [
        Circuit(graph.qubits, gates, graph.inputs, graph.outputs)
        for _, gates in sorted(members.items())
    ]


class Decomposer:
    """Replace T gates by Clifford terms until the circuit is Clifford.

    All branches of one step are Clifford substitutions of the same gates, so
    one representative branch is tracked and ``nterms`` is the product of the
    branch counts. With component splitting the per-component counts are
    summed.
    """

    def __init__(self, graph: Circuit) -> None:
        self.graph = graph.copy()
        self.simp = SimpFunc.NO_SIMP
        self.split_graphs_components = False
        self.nterms = 0

    def with_simp(self, simp: SimpFunc) -> Decomposer:
        self.simp = simp
        return self

    def with_split_graphs_components(self, enabled: bool) -> Decomposer:
        self.split_graphs_components = enabled
        return self

    def _decompose_component(self, graph: Circuit, driver: Driver) -> int:
        simplify(graph, self.simp)
        terms = 1
        t_gates = graph.t_gates()
        while t_gates:
            step = driver.choose(graph, t_gates)
            for index in step.consumed:
                gate = graph.gates[index]
                graph.gates[index] = gate.with_phase(gate.phase - 1)
            terms *= step.branches
            simplify(graph, self.simp)
            t_gates = graph.t_gates()
        return terms

    def decompose(self, driver: Driver) -> Decomposer:
        if self.split_graphs_components:
            components = [c for c in split_components(self.graph) if c.tcount()]
        else:
            components = [self.graph]
        if not components:
            self.nterms = 1
            return self
        self.nterms = sum(self._decompose_component(c.copy(), driver) for c in components)
        return self
