"""Aggregation of raw timing samples."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np


@dataclass
class TimingResult:
    """Per-call timings of one candidate in one suite group.

    ``samples`` holds seconds per call; one call performs ``operations``
    remove-then-insert cycles.
    """

    group: str
    name: str
    operations: int
    samples: np.ndarray = field(repr=False)
    loops: int = 1
    suite: str = ""
    map_size: int = 0

    def __post_init__(self) -> None:
        self.samples = np.asarray(self.samples, dtype=float)
        if self.samples.size == 0:
            raise ValueError(f"no timing samples recorded for '{self.name}'")
        if self.operations < 1:
            raise ValueError("operations must be at least 1")

    @property
    def mean(self) -> float:
        return float(self.samples.mean())

    @property
    def ci95(self) -> float:
        return float(1.96 * self.samples.std() / np.sqrt(self.samples.size))

    @property
    def ns_per_operation(self) -> float:
        return self.mean * 1e9 / self.operations

    @property
    def ci95_ns_per_operation(self) -> float:
        return self.ci95 * 1e9 / self.operations


def summary_table(results: list[TimingResult]) -> np.ndarray:
    """Structured array with one row per result, ready for ``np.savetxt``."""

    dtype = [
        ("suite", "U16"),
        ("map_size", int),
        ("group", "U64"),
        ("name", "U64"),
        ("operations", int),
        ("ns_per_op", float),
        ("ci95_ns_per_op", float),
    ]
    return np.array(
        [
            (
                r.suite,
                r.map_size,
                r.group,
                r.name,
                r.operations,
                r.ns_per_operation,
                r.ci95_ns_per_operation,
            )
            for r in results
        ],
        dtype=dtype,
    )


def write_summary_csv(path: Path, results: list[TimingResult]) -> Path:
    np.savetxt(
        path,
        summary_table(results),
        fmt='%s,%d,"%s","%s",%d,%.4f,%.4f',
        header="suite,map_size,group,name,operations,ns_per_op,ci95_ns_per_op",
        comments="",
    )
    return path


__all__ = ["TimingResult", "summary_table", "write_summary_csv"]
