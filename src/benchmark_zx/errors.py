"""Error kinds raised by the benchmark pipeline."""

from __future__ import annotations

from typing import Any


class BenchmarkError(RuntimeError):
    """Base class for fatal pipeline failures.

    ``phase`` names the pipeline stage that failed and ``target`` the path or
    identifier involved, so scripts can report both without parsing messages.
    """

    phase = "benchmark"

    def __init__(self, message: str, target: Any = None, phase: str | None = None) -> None:
        super().__init__(message)
        self.target = target
        if phase is not None:
            self.phase = phase

    def describe(self) -> str:
        if self.target is None:
            return f"{self.phase} failed: {self}"
        return f"{self.phase} failed for {self.target}: {self}"


class CorpusGenerationExhausted(BenchmarkError):
    phase = "corpus"


class OutputUnavailable(BenchmarkError):
    phase = "run"


class MalformedRecord(BenchmarkError):
    phase = "aggregate"


class NoData(BenchmarkError):
    phase = "render"


class DirectoryUnavailable(BenchmarkError):
    phase = "setup"
