"""Aggregate persisted result tables into plot series."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List

import numpy as np

from benchmark_zx.benchmarks.schema import MeasurementRow, Series, TableRef
from benchmark_zx.errors import NoData
from benchmark_zx.io.output import read_table

NANOS_PER_MILLI = 1_000_000.0


def group_means(rows: Iterable[MeasurementRow]) -> Dict[int, float]:
    grouped: Dict[int, List[float]] = {}
    for row in rows:
        grouped.setdefault(row.t_count, []).append(row.value)
    return {t_count: float(np.mean(values)) for t_count, values in grouped.items()}


def transform(kind: str, mean: float) -> float:
    """Natural log of the mean; runtimes are converted from ns to ms first."""
    if kind == "alpha":
        return math.log(mean)
    if kind == "times":
        return math.log(mean / NANOS_PER_MILLI)
    raise ValueError(f"Unknown table kind '{kind}'")


def aggregate_rows(name: str, kind: str, rows: Iterable[MeasurementRow]) -> Series:
    points = [
        (float(t_count), transform(kind, mean))
        for t_count, mean in group_means(rows).items()
        if mean > 0
    ]
    points.sort(key=lambda point: point[0])
    return Series(name=name, points=tuple(points))


def aggregate_table(ref: TableRef) -> Series:
    return aggregate_rows(ref.variant, ref.kind, read_table(ref.path, ref.kind))


def aggregate(manifest: Iterable[TableRef], kind: str) -> Dict[str, Series]:
    """One series per manifest table of ``kind``, in manifest order."""
    refs = [ref for ref in manifest if ref.kind == kind]
    if not refs:
        raise NoData(f"No '{kind}' tables to aggregate", target=kind, phase="aggregate")
    return {ref.variant: aggregate_table(ref) for ref in refs}
