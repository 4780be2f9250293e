"""Sweep the batch size for one map size and plot ns/op against it."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable, List, Sequence

from mapbench.plotting import BenchmarkPlotter, PlotConfig
from mapbench.runner import (
    BenchmarkConfig,
    BenchmarkRunner,
    add_filter_arguments,
    configure_logging,
)
from mapbench.selector import ConfigError, FilterChain
from mapbench.stats import TimingResult, write_summary_csv
from mapbench.timing import DEFAULT_MIN_TIME


DEFAULT_CHANGES: Sequence[int] = (1, 2, 5, 10, 20, 50, 100, 200)


def sweep_changes(
    *,
    map_size: int = 1000,
    changes: Iterable[int] = DEFAULT_CHANGES,
    filters: FilterChain | None = None,
    seed: int = 42,
    repeat: int = 5,
    min_time: float = DEFAULT_MIN_TIME,
    output_root: Path | None = None,
) -> List[TimingResult]:
    """Run the batch suite for each change count and plot the results."""

    output_root = (
        output_root
        if output_root is not None
        else Path.cwd() / "results" / "sweep_changes"
    )
    output_root.mkdir(parents=True, exist_ok=True)

    config = BenchmarkConfig(
        map_sizes=(int(map_size),),
        changes=tuple(int(n) for n in changes),
        suites=("batch",),
        seed=seed,
        repeat=repeat,
        min_time=min_time,
        filters=filters or FilterChain(),
        show_progress=True,
    )
    result = BenchmarkRunner(config).run(save=False, plot=False)
    results = result.for_suite("batch")

    if results:
        plotter = BenchmarkPlotter(PlotConfig(log_y=False))
        plotter.plot_ns_per_operation(
            results,
            x="operations",
            title=f"ns/op vs changes per batch, map size {map_size}",
            output_dir=output_root,
            filename=f"ns_per_op_vs_changes_size{map_size}.pdf",
        )
        write_summary_csv(
            output_root / f"ns_per_op_vs_changes_size{map_size}.csv", results
        )

    return results


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Run the batched remove-then-insert benchmark for several change "
            "counts at one map size."
        )
    )
    parser.add_argument("--size", type=int, default=1000, help="Map size.")
    parser.add_argument(
        "--changes",
        metavar="N",
        type=int,
        nargs="+",
        help=(
            "Changes per batch to evaluate. Defaults to the preset sequence "
            f"{list(DEFAULT_CHANGES)}."
        ),
    )
    add_filter_arguments(parser)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--repeat", type=int, default=5)
    parser.add_argument("--min-time", type=float, default=DEFAULT_MIN_TIME)
    parser.add_argument(
        "--output-root",
        type=Path,
        default=None,
        help="Directory where results should be written.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    args = parser.parse_args(argv)
    try:
        args.filters = FilterChain.from_patterns(args.filters)
    except ConfigError as exc:
        parser.error(str(exc))
    if args.size < 1 or args.repeat < 1 or args.min_time <= 0:
        parser.error("--size, --repeat and --min-time must be positive")
    return args


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    configure_logging(args.verbose)
    sweep_changes(
        map_size=args.size,
        changes=args.changes or DEFAULT_CHANGES,
        filters=args.filters,
        seed=args.seed,
        repeat=args.repeat,
        min_time=args.min_time,
        output_root=args.output_root,
    )


if __name__ == "__main__":
    main()
