"""Text report: system information header and per-candidate lines."""
from __future__ import annotations

import os
import platform
from collections import Counter
from importlib import metadata
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from .stats import TimingResult

NS_WIDTH = 12
CPUINFO = Path("/proc/cpuinfo")
RULE = "-" * 61


def left_pad(text: str, width: int = NS_WIDTH) -> str:
    """Right-align ``text``; longer strings are returned untouched."""

    return text.rjust(width)


def format_result_line(result: "TimingResult") -> str:
    return f"{left_pad(f'{result.ns_per_operation:.2f}')}  {result.name}"


def section_header(title: str) -> List[str]:
    return [RULE, title, ""]


def _distribution_version(name: str) -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "not installed"


def cpu_models(cpuinfo: Path = CPUINFO) -> Counter:
    """Count logical CPUs per model name.

    Reads ``model name`` entries from ``cpuinfo`` where the file exists (Linux)
    and otherwise reports ``os.cpu_count()`` CPUs of ``platform.processor()``.
    """

    models: Counter = Counter()
    try:
        text = cpuinfo.read_text(errors="replace")
    except OSError:
        text = ""
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip() == "model name":
            models[value.strip()] += 1
    if not models:
        cpu = platform.processor() or platform.machine() or "unknown"
        models[cpu] = os.cpu_count() or 1
    return models


def system_information(
    distributions: Iterable[str] = (), cpuinfo: Path = CPUINFO
) -> List[str]:
    lines = [f"CPU      {count}x {model}" for model, count in cpu_models(cpuinfo).items()]
    lines += [
        f"Python   {platform.python_implementation()} {platform.python_version()}",
        f"OS       {platform.system()}, {platform.release()}",
        "Packages",
    ]
    lines.extend(f"    {name} {_distribution_version(name)}" for name in distributions)
    return lines


__all__ = [
    "NS_WIDTH",
    "left_pad",
    "format_result_line",
    "section_header",
    "cpu_models",
    "system_information",
]
