"""Strategies choosing which T gates to decompose next."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol, Sequence

import numpy as np

from benchmark_zx.circuits.generate import Circuit

# (T gates consumed, stabiliser terms produced)
SINGLE_T = (1, 2)
BSS = (6, 7)
CAT4 = (4, 2)
CAT6 = (6, 3)


@dataclass(frozen=True)
class Step:
    """One decomposition move: replace ``consumed`` T gates by ``branches`` terms."""

    consumed: tuple[int, ...]
    branches: int


class Driver(Protocol):
    def choose(self, graph: Circuit, t_gates: Sequence[int]) -> Step:
        ...


@dataclass
class _BaseDriver:
    random_t: bool = False
    seed: int = 0
    _rng: np.random.Generator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._rng = np.random.default_rng(self.seed)

    def _pick(self, candidates: Sequence[int], count: int) -> tuple[int, ...]:
        if not self.random_t:
            return tuple(candidates[:count])
        chosen = self._rng.choice(len(candidates), size=count, replace=False)
        return tuple(sorted(candidates[int(idx)] for idx in chosen))

    def _single(self, t_gates: Sequence[int]) -> Step:
        return Step(self._pick(t_gates, SINGLE_T[0]), SINGLE_T[1])


def _group_by_qubit(graph: Circuit, t_gates: Sequence[int]) -> list[list[int]]:
    """T gate indices grouped per qubit, largest group first."""
    groups: dict[int, list[int]] = {}
    for index in t_gates:
        groups.setdefault(graph.gates[index].qubits[0], []).append(index)
    return sorted(groups.values(), key=lambda group: (-len(group), group[0]))


@dataclass
class TOnlyDriver(_BaseDriver):
    """Split one T gate at a time into two Clifford terms."""

    def choose(self, graph: Circuit, t_gates: Sequence[int]) -> Step:
        return self._single(t_gates)


@dataclass
class BssTOnlyDriver(_BaseDriver):
    """Bravyi-Smith-Smolin: six T gates into seven terms, single splits for the rest."""

    def choose(self, graph: Circuit, t_gates: Sequence[int]) -> Step:
        if len(t_gates) >= BSS[0]:
            return Step(self._pick(t_gates, BSS[0]), BSS[1])
        return self._single(t_gates)


@dataclass
class BssWithCatsDriver(_BaseDriver):
    """Prefer cat-state decompositions on T gates sharing a wire, then BSS."""

    def choose(self, graph: Circuit, t_gates: Sequence[int]) -> Step:
        group = _group_by_qubit(graph, t_gates)[0]
        if len(group) >= CAT6[0]:
            return Step(self._pick(group, CAT6[0]), CAT6[1])
        if len(group) >= CAT4[0]:
            return Step(self._pick(group, CAT4[0]), CAT4[1])
        if len(t_gates) >= BSS[0]:
            return Step(self._pick(t_gates, BSS[0]), BSS[1])
        return self._single(t_gates)


@dataclass
class DynamicTDriver(_BaseDriver):
    """Greedy choice of the move with the lowest log-terms per consumed T."""

    def choose(self, graph: Circuit, t_gates: Sequence[int]) -> Step:
        group = _group_by_qubit(graph, t_gates)[0]
        candidates = [
            (math.log2(branches) / size, size, branches, pool)
            for (size, branches), pool in ((CAT4, group), (CAT6, group), (BSS, t_gates), (SINGLE_T, t_gates))
            if len(pool) >= size
        ]
        _, size, branches, pool = min(candidates, key=lambda item: item[0])
        return Step(self._pick(pool, size), branches)


DRIVERS = {
    "t_only": TOnlyDriver,
    "bss_t_only": BssTOnlyDriver,
    "bss_with_cats": BssWithCatsDriver,
    "dynamic_t": DynamicTDriver,
}


def driver_from_name(name: str, random_t: bool = False, seed: int = 0) -> Driver:
    try:
        driver_cls = DRIVERS[name]
    except KeyError:
        raise ValueError(f"Unknown driver '{name}'. Options: {', '.join(sorted(DRIVERS))}") from None
    return driver_cls(random_t=random_t, seed=seed)
