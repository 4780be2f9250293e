"""Plotting helpers for benchmark results."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .stats import TimingResult


@dataclass
class PlotConfig:
    log_x: bool = True
    log_y: bool = True
    figsize: Tuple[float, float] = (6, 4)


class BenchmarkPlotter:
    """Draws ns/op curves with 95% confidence error bars."""

    def __init__(self, config: PlotConfig | None = None) -> None:
        self.config = config or PlotConfig()

    def plot_ns_per_operation(
        self,
        results: Sequence[TimingResult],
        *,
        x: str = "map_size",
        title: str = "",
        output_dir: str | Path = "results",
        filename: str = "ns_per_op.pdf",
    ) -> Path | None:
        """Plot one curve per candidate against ``map_size`` or ``operations``.

        Results sharing a candidate name and ``x`` value are expected to be
        unique; callers split batch results by map size beforehand.
        """

        if not results:
            return None

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        curves: Dict[str, List[TimingResult]] = defaultdict(list)
        for result in results:
            curves[result.name].append(result)

        plt.figure(figsize=self.config.figsize)
        for name, points in curves.items():
            points = sorted(points, key=lambda r: getattr(r, x))
            xval = np.asarray([getattr(r, x) for r in points], dtype=float)
            yval = np.asarray([r.ns_per_operation for r in points])
            yerr = np.asarray([r.ci95_ns_per_operation for r in points])
            plt.errorbar(xval, yval, yerr=yerr, marker="o", label=name)

        if self.config.log_x:
            plt.xscale("log")
        if self.config.log_y:
            plt.yscale("log")
        plt.xlabel("map size" if x == "map_size" else "changes per batch")
        plt.ylabel("ns / operation")
        if title:
            plt.title(title)
        plt.grid(True, which="both", ls=":")
        plt.legend()
        plt.tight_layout()

        output_path = output_dir / filename
        plt.savefig(output_path, format="pdf", bbox_inches="tight")
        plt.close()
        return output_path


__all__ = ["BenchmarkPlotter", "PlotConfig"]
