"""Timing suites driving the workload callables."""
from __future__ import annotations

import gc
import logging
import time
import timeit
from abc import ABC, abstractmethod
from typing import Callable, List, Tuple

from .report import format_result_line
from .stats import TimingResult

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]

DEFAULT_MIN_TIME = 0.2


class Suite(ABC):
    """A named group of candidates that share one input configuration."""

    def __init__(
        self,
        group: str,
        operations: int = 1,
        emit: Emit = print,
        *,
        suite: str = "",
        map_size: int = 0,
    ) -> None:
        self.group = group
        self.operations = operations
        self.emit = emit
        self.suite = suite
        self.map_size = map_size
        self.candidates: List[Tuple[str, Callable[[], None]]] = []

    def add(self, name: str, fn: Callable[[], None]) -> "Suite":
        self.candidates.append((name, fn))
        return self

    def __len__(self) -> int:
        return len(self.candidates)

    @abstractmethod
    def run(self) -> List[TimingResult]:
        ...


class StatisticalSuite(Suite):
    """Calibrates a loop count per candidate, then samples ``repeat`` times."""

    def __init__(
        self,
        group: str,
        operations: int = 1,
        emit: Emit = print,
        *,
        repeat: int = 5,
        min_time: float = DEFAULT_MIN_TIME,
        suite: str = "",
        map_size: int = 0,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        super().__init__(group, operations, emit, suite=suite, map_size=map_size)
        if repeat < 1:
            raise ValueError("repeat must be at least 1")
        if min_time <= 0:
            raise ValueError("min_time must be positive")
        self.repeat = repeat
        self.min_time = min_time
        self.clock = clock

    def calibrate(self, timer: timeit.Timer) -> int:
        """Smallest loop count from 1, 2, 5, 10, 20, ... lasting ``min_time``."""

        scale = 1
        while True:
            for step in (1, 2, 5):
                loops = scale * step
                if timer.timeit(loops) >= self.min_time:
                    return loops
            scale *= 10

    def measure(self, name: str, fn: Callable[[], None]) -> TimingResult:
        timer = timeit.Timer(fn, timer=self.clock)
        gc.collect()
        loops = self.calibrate(timer)
        logger.debug("%s / %s: %d loops per sample", self.group, name, loops)
        totals = timer.repeat(repeat=self.repeat, number=loops)
        return TimingResult(
            group=self.group,
            name=name,
            operations=self.operations,
            samples=[total / loops for total in totals],
            loops=loops,
            suite=self.suite,
            map_size=self.map_size,
        )

    def run(self) -> List[TimingResult]:
        self.emit(self.group)
        results = []
        for name, fn in self.candidates:
            result = self.measure(name, fn)
            self.emit(format_result_line(result))
            results.append(result)
        return results


class SmokeSuite(Suite):
    """Calls every candidate twice; checks the code paths without timing."""

    def run(self) -> List[TimingResult]:
        self.emit(self.group)
        for name, fn in self.candidates:
            self.emit(name)
            fn()
            fn()
        return []


def create_suite(
    group: str,
    operations: int = 1,
    *,
    test: bool = False,
    repeat: int = 5,
    min_time: float = DEFAULT_MIN_TIME,
    suite: str = "",
    map_size: int = 0,
    emit: Emit = print,
) -> Suite:
    if test:
        return SmokeSuite(group, operations, emit, suite=suite, map_size=map_size)
    return StatisticalSuite(
        group,
        operations,
        emit,
        repeat=repeat,
        min_time=min_time,
        suite=suite,
        map_size=map_size,
    )


__all__ = ["DEFAULT_MIN_TIME", "Suite", "StatisticalSuite", "SmokeSuite", "create_suite"]
