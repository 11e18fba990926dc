"""Experiment configuration for benchmark runs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from benchmark_zx.circuits.simplify import SimpFunc
from benchmark_zx.decompose.drivers import DRIVERS


@dataclass(frozen=True)
class DriverSpec:
    """One benchmarked variant: a named driver with its simplifier and bound."""

    name: str
    driver: str
    max_tcount: Optional[int] = None
    simp: SimpFunc = SimpFunc.FULL_SIMP
    random_t: bool = False


DRIVER_SUITE: tuple[DriverSpec, ...] = (
    DriverSpec("BssTOnly", "bss_t_only", max_tcount=32),
    DriverSpec("BssWithCats", "bss_with_cats"),
    DriverSpec("DynamicT", "dynamic_t"),
)

SIMPLIFIER_SUITE: tuple[DriverSpec, ...] = (
    DriverSpec("NoSimp", "bss_with_cats", max_tcount=12, simp=SimpFunc.NO_SIMP),
    DriverSpec("CliffSimp", "bss_with_cats", simp=SimpFunc.CLIFFORD_SIMP),
    DriverSpec("FullSimp", "bss_with_cats", simp=SimpFunc.FULL_SIMP),
)

SUITES = {
    "driver": DRIVER_SUITE,
    "simplifier": SIMPLIFIER_SUITE,
}


@dataclass(frozen=True)
class BenchConfig:
    seed: int = 42
    qubits: int = 10
    clifford_t: float = 0.3
    min_tcount: int = 6
    max_tcount: int = 40
    samples_per_tcount: int = 4
    depth_sweep_factor: int = 10
    max_sweeps: int = 50
    results_dir: Path = Path("benches/results")
    drivers: tuple[DriverSpec, ...] = DRIVER_SUITE

    @property
    def bin_keys(self) -> range:
        return range(self.min_tcount, self.max_tcount)

    @property
    def corpus_size(self) -> int:
        return (self.max_tcount - self.min_tcount) * self.samples_per_tcount

    def bound_for(self, spec: DriverSpec) -> int:
        if spec.max_tcount is None:
            return self.max_tcount
        return min(spec.max_tcount, self.max_tcount)

    def validate(self) -> BenchConfig:
        if self.qubits < 1:
            raise ValueError("qubits must be >= 1")
        if not 0.0 <= self.clifford_t <= 1.0:
            raise ValueError("clifford_t must lie in [0, 1]")
        if self.min_tcount < 0 or self.max_tcount <= self.min_tcount:
            raise ValueError(
                f"Empty t-count range [{self.min_tcount}, {self.max_tcount})."
            )
        if self.samples_per_tcount < 1:
            raise ValueError("samples_per_tcount must be >= 1")
        if self.depth_sweep_factor < 1 or self.max_sweeps < 1:
            raise ValueError("depth_sweep_factor and max_sweeps must be >= 1")
        if not self.drivers:
            raise ValueError("At least one driver variant is required.")
        names = [spec.name for spec in self.drivers]
        if len(set(names)) != len(names):
            raise ValueError(f"Driver names must be unique, got {names}.")
        for spec in self.drivers:
            if spec.driver not in DRIVERS:
                raise ValueError(f"Unknown driver '{spec.driver}' for variant '{spec.name}'.")
            if self.bound_for(spec) <= self.min_tcount:
                raise ValueError(
                    f"Variant '{spec.name}' has bound {self.bound_for(spec)}, "
                    f"which leaves no t-count at or above {self.min_tcount}."
                )
        return self

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["results_dir"] = str(self.results_dir)
        payload["drivers"] = [
            {**asdict(spec), "simp": spec.simp.value} for spec in self.drivers
        ]
        return payload


def _driver_spec(raw: Mapping[str, Any]) -> DriverSpec:
    allowed = {f.name for f in fields(DriverSpec)}
    unknown = set(raw) - allowed
    if unknown:
        raise ValueError(f"Unknown driver keys: {', '.join(sorted(unknown))}")
    data = dict(raw)
    if "simp" in data:
        data["simp"] = SimpFunc(data["simp"])
    return DriverSpec(**data)


def config_from_dict(raw: Mapping[str, Any], base: BenchConfig | None = None) -> BenchConfig:
    """Overlay a plain mapping (e.g. parsed YAML) onto ``base``."""
    data = dict(raw)
    suite = data.pop("suite", None)
    drivers = data.pop("drivers", None)
    allowed = {f.name for f in fields(BenchConfig)}
    unknown = set(data) - allowed
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
    if suite is not None and drivers is not None:
        raise ValueError("Specify either 'suite' or 'drivers', not both.")
    if suite is not None:
        if suite not in SUITES:
            raise ValueError(f"Unknown suite '{suite}'. Options: {', '.join(SUITES)}")
        data["drivers"] = SUITES[suite]
    elif drivers is not None:
        data["drivers"] = tuple(_driver_spec(item) for item in drivers)
    if "results_dir" in data:
        data["results_dir"] = Path(data["results_dir"])
    return replace(base or BenchConfig(), **data).validate()


def load_config(path: str | Path) -> BenchConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config {config_path} must be a mapping.")
    return config_from_dict(raw)
