"""Schema definitions for benchmark corpora, tables and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

from benchmark_zx.circuits.generate import Circuit

TABLE_KINDS = ("alpha", "times")


@dataclass
class Bin:
    """Fixed-capacity list of samples sharing one t-count."""

    key: int
    capacity: int
    samples: List[Circuit] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Circuit]:
        return iter(self.samples)

    @property
    def is_full(self) -> bool:
        return len(self.samples) >= self.capacity

    def add(self, sample: Circuit) -> bool:
        if self.is_full:
            return False
        self.samples.append(sample)
        return True


@dataclass
class Corpus:
    """Stratified samples keyed by t-count over ``[min_key, max_key)``."""

    min_key: int
    max_key: int
    capacity: int
    bins: Dict[int, Bin] = field(default_factory=dict)

    @classmethod
    def empty(cls, min_key: int, max_key: int, capacity: int) -> Corpus:
        bins = {key: Bin(key, capacity) for key in range(min_key, max_key)}
        return cls(min_key=min_key, max_key=max_key, capacity=capacity, bins=bins)

    def __contains__(self, key: int) -> bool:
        return key in self.bins

    def __len__(self) -> int:
        return sum(len(b) for b in self.bins.values())

    def bin(self, key: int) -> Bin:
        try:
            return self.bins[key]
        except KeyError:
            raise KeyError(f"t-count {key} outside [{self.min_key}, {self.max_key})") from None

    @property
    def full_bins(self) -> int:
        return sum(1 for b in self.bins.values() if b.is_full)

    @property
    def is_complete(self) -> bool:
        return self.full_bins == len(self.bins)

    def incomplete_keys(self) -> list[int]:
        return [key for key in sorted(self.bins) if not self.bins[key].is_full]

    def flatten(self) -> list[Circuit]:
        return [sample for key in sorted(self.bins) for sample in self.bins[key]]


@dataclass(frozen=True)
class MeasurementRow:
    t_count: int
    value: float


@dataclass(frozen=True)
class TableRef:
    """Manifest entry tying a persisted table to its plot kind and variant."""

    kind: str
    variant: str
    path: Path

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "variant": self.variant, "path": self.path.name}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any], base_dir: Path) -> TableRef:
        return cls(kind=payload["kind"], variant=payload["variant"], path=base_dir / payload["path"])


@dataclass(frozen=True)
class Series:
    """Aggregated points for one variant, sorted by x."""

    name: str
    points: Tuple[Tuple[float, float], ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    @property
    def xs(self) -> list[float]:
        return [x for x, _ in self.points]

    @property
    def ys(self) -> list[float]:
        return [y for _, y in self.points]


@dataclass
class BenchResult:
    corpus_size: int
    manifest: List[TableRef]
    plots: Dict[str, Path] = field(default_factory=dict)
