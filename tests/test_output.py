"""Tests for result table and manifest persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from benchmark_zx.benchmarks.schema import MeasurementRow, TableRef
from benchmark_zx.config import BenchConfig
from benchmark_zx.errors import MalformedRecord, OutputUnavailable
from benchmark_zx.io.output import (
    ResultTableWriter,
    discover_tables,
    read_manifest,
    read_manifest_config,
    read_table,
    table_path,
    variant_from_path,
    write_manifest,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_table_naming_round_trip(tmp_path: Path) -> None:
    path = table_path(tmp_path, "times", "BssWithCats")
    assert path == tmp_path / "benchmark_times_BssWithCats.csv"
    assert variant_from_path(path, "times") == "BssWithCats"


def test_unknown_kind_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        table_path(tmp_path, "memory", "A")


def test_writer_streams_rows(tmp_path: Path) -> None:
    path = tmp_path / "benchmark_alpha_A.csv"
    with ResultTableWriter(path, "alpha") as table:
        table.append(6, 10)
        assert path.read_text(encoding="utf-8") == "t_count,nterms\n6,10\n"
        table.append(7, 30)
    assert table.rows == 2
    assert read_table(path) == [MeasurementRow(6, 10.0), MeasurementRow(7, 30.0)]


def test_header_only_table_is_empty(tmp_path: Path) -> None:
    path = _write(tmp_path / "t.csv", "t_count,runtime_nanos\n")
    assert read_table(path) == []


def test_non_numeric_value_is_malformed(tmp_path: Path) -> None:
    path = _write(tmp_path / "t.csv", "t_count,nterms\n6,10\n7,abc\n")
    with pytest.raises(MalformedRecord) as excinfo:
        read_table(path)
    assert excinfo.value.target == f"{path}:3"
    assert excinfo.value.phase == "aggregate"


@pytest.mark.parametrize("body", ["6\n", "6,1,2\n", "6.5,1\n", "6,nan\n"])
def test_bad_rows_are_malformed(tmp_path: Path, body: str) -> None:
    path = _write(tmp_path / "t.csv", "t_count,nterms\n" + body)
    with pytest.raises(MalformedRecord):
        read_table(path)


@pytest.mark.parametrize("text", ["", "count,value\n6,1\n"])
def test_missing_or_wrong_header_is_malformed(tmp_path: Path, text: str) -> None:
    path = _write(tmp_path / "t.csv", text)
    with pytest.raises(MalformedRecord):
        read_table(path)


def test_missing_table_is_unavailable(tmp_path: Path) -> None:
    with pytest.raises(OutputUnavailable):
        read_table(tmp_path / "nope.csv")


def test_discover_tables_filters_by_kind(tmp_path: Path) -> None:
    for name in ("benchmark_alpha_B.csv", "benchmark_alpha_A.csv", "benchmark_times_A.csv", "notes.txt"):
        _write(tmp_path / name, "t_count,nterms\n")
    refs = discover_tables(tmp_path, "alpha")
    assert [(ref.kind, ref.variant) for ref in refs] == [("alpha", "A"), ("alpha", "B")]


def test_manifest_round_trip(tmp_path: Path) -> None:
    refs = [
        TableRef("alpha", "A", tmp_path / "benchmark_alpha_A.csv"),
        TableRef("times", "A", tmp_path / "benchmark_times_A.csv"),
    ]
    manifest_path = write_manifest(tmp_path / "manifest.json", refs, BenchConfig(results_dir=tmp_path))
    assert read_manifest(manifest_path) == refs


def test_header_must_match_expected_kind(tmp_path: Path) -> None:
    path = _write(tmp_path / "benchmark_alpha_X.csv", "t_count,runtime_nanos\n6,2000000\n")
    with pytest.raises(MalformedRecord) as excinfo:
        read_table(path, "alpha")
    assert excinfo.value.target == f"{path}:1"
    assert read_table(path, "times") == [MeasurementRow(6, 2_000_000.0)]


def test_manifest_records_run_config(tmp_path: Path) -> None:
    config = BenchConfig(min_tcount=2, max_tcount=9, samples_per_tcount=1, results_dir=tmp_path)
    manifest_path = write_manifest(tmp_path / "manifest.json", [], config)
    assert read_manifest_config(manifest_path) == config


def test_manifest_without_config_block(tmp_path: Path) -> None:
    path = _write(tmp_path / "manifest.json", '{"tables": []}')
    assert read_manifest(path) == []
    assert read_manifest_config(path) is None


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        "[]",
        '{"config_hash": "x"}',
        '{"tables": [{"kind": "alpha"}]}',
        '{"tables": [{"kind": "memory", "variant": "A", "path": "a.csv"}]}',
    ],
)
def test_corrupt_manifest_is_malformed(tmp_path: Path, text: str) -> None:
    path = _write(tmp_path / "manifest.json", text)
    with pytest.raises(MalformedRecord) as excinfo:
        read_manifest(path)
    assert excinfo.value.describe().startswith(f"aggregate failed for {path}")


def test_tampered_recorded_config_is_malformed(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "manifest.json",
        '{"config": {"min_tcount": 9, "max_tcount": 3}, "tables": []}',
    )
    with pytest.raises(MalformedRecord):
        read_manifest_config(path)
