"""Persistence for result tables and run manifests."""

from __future__ import annotations

import csv
import json
import math
from pathlib import Path
from typing import Any, Iterable, Sequence

from benchmark_zx.benchmarks.schema import TABLE_KINDS, MeasurementRow, TableRef
from benchmark_zx.config import BenchConfig
from benchmark_zx.errors import MalformedRecord, OutputUnavailable
from benchmark_zx.utils.reproducibility import config_from_record, run_record

HEADERS = {
    "alpha": ("t_count", "nterms"),
    "times": ("t_count", "runtime_nanos"),
}

MANIFEST_NAME = "manifest.json"


def _check_kind(kind: str) -> None:
    if kind not in TABLE_KINDS:
        raise ValueError(f"Unknown table kind '{kind}'. Expected one of {TABLE_KINDS}.")


def table_path(results_dir: str | Path, kind: str, variant: str) -> Path:
    _check_kind(kind)
    return Path(results_dir) / f"benchmark_{kind}_{variant}.csv"


def variant_from_path(path: str | Path, kind: str) -> str:
    name = Path(path).name
    prefix = f"benchmark_{kind}_"
    if name.startswith(prefix):
        name = name[len(prefix):]
    if name.endswith(".csv"):
        name = name[: -len(".csv")]
    return name


def discover_tables(results_dir: str | Path, kind: str) -> list[TableRef]:
    """Find tables of ``kind`` by file name, for results without a manifest."""
    _check_kind(kind)
    paths = sorted(Path(results_dir).glob(f"benchmark_{kind}_*.csv"))
    return [TableRef(kind=kind, variant=variant_from_path(p, kind), path=p) for p in paths]


class ResultTableWriter:
    """Append-only CSV table, flushed after every row."""

    def __init__(self, path: str | Path, kind: str) -> None:
        _check_kind(kind)
        self.path = Path(path)
        self.kind = kind
        self.rows = 0
        self._handle = None
        self._writer = None

    def __enter__(self) -> ResultTableWriter:
        try:
            self._handle = self.path.open("w", encoding="utf-8", newline="")
            self._writer = csv.writer(self._handle, lineterminator="\n")
            self._writer.writerow(HEADERS[self.kind])
        except OSError as exc:
            self.close()
            raise OutputUnavailable(f"Could not create {self.kind} table: {exc}", target=self.path) from exc
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def append(self, t_count: int, value: float) -> None:
        if self._writer is None:
            raise RuntimeError("ResultTableWriter used outside of a 'with' block.")
        try:
            self._writer.writerow((t_count, value))
            self._handle.flush()
        except OSError as exc:
            raise OutputUnavailable(f"Could not write {self.kind} row: {exc}", target=self.path) from exc
        self.rows += 1

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
        self._handle = None
        self._writer = None


def _parse_row(row: Sequence[str], location: str) -> MeasurementRow:
    if len(row) != 2:
        raise MalformedRecord(f"Expected 2 fields, got {len(row)}", target=location)
    try:
        t_count = int(row[0])
        value = float(row[1])
    except ValueError as exc:
        raise MalformedRecord(f"Could not parse {list(row)}: {exc}", target=location) from exc
    if not math.isfinite(value):
        raise MalformedRecord(f"Non-finite value {row[1]!r}", target=location)
    return MeasurementRow(t_count=t_count, value=value)


def read_table(path: str | Path, kind: str | None = None) -> list[MeasurementRow]:
    """Parse a result table. With ``kind`` set, the header must be that kind's."""
    table = Path(path)
    if kind is None:
        expected = list(HEADERS.values())
    else:
        _check_kind(kind)
        expected = [HEADERS[kind]]
    try:
        handle = table.open("r", encoding="utf-8", newline="")
    except OSError as exc:
        raise OutputUnavailable(f"Could not open table: {exc}", target=table, phase="aggregate") from exc

    rows: list[MeasurementRow] = []
    with handle:
        reader = csv.reader(handle)
        header = next(reader, None)
        if header is None or tuple(header) not in expected:
            raise MalformedRecord(f"Missing or unexpected header {header!r}", target=f"{table}:1")
        for line_no, row in enumerate(reader, start=2):
            if not row:
                continue
            rows.append(_parse_row(row, f"{table}:{line_no}"))
    return rows


def write_manifest(path: str | Path, manifest: Iterable[TableRef], config: BenchConfig) -> Path:
    manifest_path = Path(path)
    payload = {**run_record(config), "tables": [ref.to_dict() for ref in manifest]}
    try:
        manifest_path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except OSError as exc:
        raise OutputUnavailable(f"Could not write manifest: {exc}", target=manifest_path) from exc
    return manifest_path


def _load_manifest(manifest_path: Path) -> dict[str, Any]:
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise OutputUnavailable(f"Could not open manifest: {exc}", target=manifest_path, phase="aggregate") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedRecord(f"Manifest is not valid JSON: {exc}", target=manifest_path) from exc
    if not isinstance(payload, dict):
        raise MalformedRecord("Manifest must be a JSON object", target=manifest_path)
    return payload


def read_manifest(path: str | Path) -> list[TableRef]:
    manifest_path = Path(path)
    tables = _load_manifest(manifest_path).get("tables")
    if not isinstance(tables, list):
        raise MalformedRecord("Manifest has no 'tables' list", target=manifest_path)
    refs = []
    for idx, item in enumerate(tables):
        try:
            ref = TableRef.from_dict(item, manifest_path.parent)
        except (KeyError, TypeError) as exc:
            raise MalformedRecord(f"Bad table entry {item!r}", target=f"{manifest_path}#{idx}") from exc
        if ref.kind not in TABLE_KINDS:
            raise MalformedRecord(f"Unknown table kind '{ref.kind}'", target=f"{manifest_path}#{idx}")
        refs.append(ref)
    return refs


def read_manifest_config(path: str | Path) -> BenchConfig | None:
    """Config of the run that wrote the manifest, or ``None`` if it was not recorded."""
    manifest_path = Path(path)
    try:
        return config_from_record(_load_manifest(manifest_path))
    except (TypeError, ValueError) as exc:
        raise MalformedRecord(f"Bad recorded config: {exc}", target=manifest_path) from exc
