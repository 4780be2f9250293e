"""Benchmark driver and command line entry point."""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from mapbench.containers import (
    BENCHMARKED_DISTRIBUTIONS,
    CONTAINERS,
    ContainerSpec,
    MapAdapter,
)
from mapbench.plotting import BenchmarkPlotter
from mapbench.report import section_header, system_information
from mapbench.selector import ConfigError, FilterChain
from mapbench.stats import TimingResult, summary_table, write_summary_csv
from mapbench.timing import DEFAULT_MIN_TIME, Emit, create_suite
from mapbench.workloads import batch_remove_insert, generate_keys, remove_insert

logger = logging.getLogger(__name__)

DEFAULT_MAP_SIZES: Sequence[int] = (10, 100, 1000, 10000)
DEFAULT_CHANGES: Sequence[int] = (2, 10, 50)


@dataclass
class BenchmarkConfig:
    map_sizes: Sequence[int] = DEFAULT_MAP_SIZES
    changes: Sequence[int] = DEFAULT_CHANGES
    suites: Sequence[str] = ("single", "batch")
    seed: int = 42
    repeat: int = 5
    min_time: float = DEFAULT_MIN_TIME
    test: bool = False
    filters: FilterChain = field(default_factory=FilterChain)
    show_progress: bool = False
    output_dir: Optional[Path] = None
    save: bool = False
    plot: bool = False


@dataclass
class BenchmarkResult:
    """All timing results of one run, in execution order."""

    results: List[TimingResult]
    output_file: Optional[Path] = None
    summary_file: Optional[Path] = None
    plot_files: List[Path] = field(default_factory=list)

    def for_suite(self, suite: str) -> List[TimingResult]:
        return [r for r in self.results if r.suite == suite]


Workload = Callable[[MapAdapter, Sequence[str], int], Callable[[], None]]


@dataclass
class BenchmarkDefinition:
    """A suite: its report title, its groups and its per-call workload.

    ``groups`` yields ``(label, map_size, changes)`` triples. A ``batched``
    suite only runs containers whose spec ``supports_batch``.
    """

    title: str
    groups: Callable[[BenchmarkConfig], List[tuple[str, int, int]]]
    workload: Workload
    batched: bool = False


BENCHMARK_DEFINITIONS: Dict[str, BenchmarkDefinition] = {
    "single": BenchmarkDefinition(
        title="Map, remove key then add it back",
        groups=lambda config: [
            (f"Map size: {size}", int(size), 1) for size in config.map_sizes
        ],
        workload=lambda adapter, keys, _: remove_insert(adapter, keys),
    ),
    "batch": BenchmarkDefinition(
        title="Map batch, for N keys, remove then add it back",
        groups=lambda config: [
            (f"Map size: {size}, N: {changes}", int(size), int(changes))
            for size in config.map_sizes
            for changes in config.changes
        ],
        workload=batch_remove_insert,
        batched=True,
    ),
}


class BenchmarkRunner:

    def __init__(
        self,
        config: BenchmarkConfig,
        containers: Optional[Dict[str, ContainerSpec]] = None,
        emit: Emit = print,
    ) -> None:
        self.config = config
        self.emit = emit
        self.containers = containers if containers is not None else CONTAINERS
        unknown = [s for s in config.suites if s.lower() not in BENCHMARK_DEFINITIONS]
        if unknown:
            raise ConfigError(f"Unknown benchmark suite '{unknown[0]}'")
        self.suites = [s.lower() for s in config.suites]

        self.selected: List[ContainerSpec] = []
        for name, spec in self.containers.items():
            if config.filters.passes(name):
                self.selected.append(spec)
            else:
                logger.debug("Skipping %s (filtered out)", name)

    def candidates(self, definition: BenchmarkDefinition) -> List[ContainerSpec]:
        if not definition.batched:
            return list(self.selected)
        specs = []
        for spec in self.selected:
            if spec.supports_batch:
                specs.append(spec)
            else:
                logger.debug(
                    "Skipping %s in %r (no batch support)", spec.name, definition.title
                )
        return specs

    def run_suite(self, suite: str, rng: np.random.Generator) -> List[TimingResult]:
        cfg = self.config
        definition = BENCHMARK_DEFINITIONS[suite]
        results: List[TimingResult] = []

        for line in section_header(definition.title):
            self.emit(line)

        groups = definition.groups(cfg)
        for label, map_size, changes in tqdm(
            groups, desc=suite, disable=not cfg.show_progress
        ):
            keys = generate_keys(map_size, rng)
            timing_suite = create_suite(
                label,
                changes,
                test=cfg.test,
                repeat=cfg.repeat,
                min_time=cfg.min_time,
                suite=suite,
                map_size=map_size,
                emit=self.emit,
            )
            for spec in self.candidates(definition):
                adapter = spec.build(keys)
                timing_suite.add(spec.name, definition.workload(adapter, keys, changes))
            if len(timing_suite) == 0:
                continue
            results.extend(timing_suite.run())

        self.emit("")
        return results

    def run(
        self,
        output_dir: Path | None = None,
        *,
        save: bool | None = None,
        plot: bool | None = None,
        filename: str | None = None,
    ) -> BenchmarkResult:
        """Run every configured suite and optionally persist or plot the results.

        Arguments left as ``None`` fall back to the matching config fields.
        """

        cfg = self.config
        output_dir = output_dir if output_dir is not None else cfg.output_dir
        save = cfg.save if save is None else save
        plot = cfg.plot if plot is None else plot
        if not self.selected:
            logger.warning("No container passes the configured filters")

        for line in system_information(BENCHMARKED_DISTRIBUTIONS):
            self.emit(line)
        self.emit("")

        rng = np.random.default_rng(cfg.seed)
        results: List[TimingResult] = []
        for suite in self.suites:
            results.extend(self.run_suite(suite, rng))

        result = BenchmarkResult(results=results)
        if not results or not (save or plot):
            return result

        target_dir = (
            output_dir
            if output_dir is not None
            else Path.cwd() / "results"
        )
        target_dir.mkdir(parents=True, exist_ok=True)

        if save:
            output_path = target_dir / (filename or f"mapbench_seed{cfg.seed}.npz")
            table = summary_table(results)
            np.savez(
                output_path,
                summary=table,
                samples=np.stack([r.samples for r in results]),
                loops=np.asarray([r.loops for r in results]),
                seed=cfg.seed,
            )
            summary_path = write_summary_csv(output_path.with_suffix(".csv"), results)
            result.output_file = output_path
            result.summary_file = summary_path
            logger.info("Wrote %s and %s", output_path, summary_path)

        if plot:
            plotter = BenchmarkPlotter()
            single = result.for_suite("single")
            path = plotter.plot_ns_per_operation(
                single,
                title="remove then insert",
                output_dir=target_dir,
                filename="single.pdf",
            )
            if path is not None:
                result.plot_files.append(path)
            batch = result.for_suite("batch")
            for map_size in sorted({r.map_size for r in batch}):
                path = plotter.plot_ns_per_operation(
                    [r for r in batch if r.map_size == map_size],
                    x="operations",
                    title=f"batched remove then insert, map size {map_size}",
                    output_dir=target_dir,
                    filename=f"batch_size{map_size}.pdf",
                )
                if path is not None:
                    result.plot_files.append(path)
            logger.info("Wrote %d plot(s) to %s", len(result.plot_files), target_dir)

        return result


class FilterAction(argparse.Action):
    """Appends ``(include, pattern)`` pairs to one shared, ordered list."""

    def __init__(self, option_strings, dest, include: bool = True, **kwargs) -> None:
        self.include = include
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        filters = list(getattr(namespace, self.dest, None) or [])
        filters.extend((self.include, value) for value in values)
        setattr(namespace, self.dest, filters)


def add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    """Add ordered ``--include`` and ``--exclude`` options writing ``filters``."""

    parser.add_argument(
        "--include",
        dest="filters",
        metavar="PATTERN",
        nargs="+",
        action=FilterAction,
        include=True,
        default=[],
        help="Regex of containers to include. Filters apply in command-line order.",
    )
    parser.add_argument(
        "--exclude",
        dest="filters",
        metavar="PATTERN",
        nargs="+",
        action=FilterAction,
        include=False,
        default=[],
        help="Regex of containers to exclude. Filters apply in command-line order.",
    )


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mapbench",
        description=(
            "Time remove-then-insert cycles on string keys across hash, "
            "sorted and persistent map implementations."
        ),
    )
    add_filter_arguments(parser)
    parser.add_argument(
        "--test",
        action="store_true",
        help="Just check that the benchmarks work, without timing them.",
    )
    parser.add_argument(
        "--suite",
        dest="suites",
        choices=sorted(BENCHMARK_DEFINITIONS),
        action="append",
        help="Suite to run; repeat for several. Defaults to all suites.",
    )
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=list(DEFAULT_MAP_SIZES),
        help=f"Map sizes to benchmark. Defaults to {list(DEFAULT_MAP_SIZES)}.",
    )
    parser.add_argument(
        "--changes",
        type=int,
        nargs="+",
        default=list(DEFAULT_CHANGES),
        help=f"Changes per batch for the batch suite. Defaults to {list(DEFAULT_CHANGES)}.",
    )
    parser.add_argument("--seed", type=int, default=42, help="Seed for key generation.")
    parser.add_argument(
        "--repeat", type=int, default=5, help="Timing samples per container."
    )
    parser.add_argument(
        "--min-time",
        type=float,
        default=DEFAULT_MIN_TIME,
        help=(
            "Seconds each timing sample must last; the loop count grows "
            f"until it does. Defaults to {DEFAULT_MIN_TIME}."
        ),
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for --save and --plot output. Defaults to ./results.",
    )
    parser.add_argument("--save", action="store_true", help="Write .npz and .csv results.")
    parser.add_argument("--plot", action="store_true", help="Write PDF plots.")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def _config_from_args(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> BenchmarkConfig:
    try:
        filters = FilterChain.from_patterns(args.filters)
    except ConfigError as exc:
        parser.error(str(exc))
    if any(size < 1 for size in args.sizes):
        parser.error("--sizes must be positive")
    if any(changes < 1 for changes in args.changes):
        parser.error("--changes must be positive")
    if args.repeat < 1:
        parser.error("--repeat must be positive")
    if args.min_time <= 0:
        parser.error("--min-time must be positive")

    return BenchmarkConfig(
        map_sizes=tuple(args.sizes),
        changes=tuple(args.changes),
        suites=tuple(args.suites or BENCHMARK_DEFINITIONS),
        seed=args.seed,
        repeat=args.repeat,
        min_time=args.min_time,
        test=args.test,
        filters=filters,
        show_progress=args.progress,
        output_dir=args.output_dir,
        save=args.save,
        plot=args.plot,
    )


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    config = _config_from_args(parser, args)
    BenchmarkRunner(config).run()


__all__ = [
    "BenchmarkRunner",
    "BenchmarkConfig",
    "BenchmarkDefinition",
    "BenchmarkResult",
    "FilterAction",
    "add_filter_arguments",
    "configure_logging",
    "main",
]


if __name__ == "__main__":
    main()
