"""Key generation and the remove-then-insert workloads."""
from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

import numpy as np

from .containers import MapAdapter

KEY_BYTES = 9


def generate_keys(count: int, rng: np.random.Generator) -> List[str]:
    """Return ``count`` random base64 strings of ``KEY_BYTES`` bytes each.

    Nine bytes encode to twelve base64 characters without padding. Keys are
    not deduplicated; with 72 random bits a collision is not a practical
    concern for the map sizes benchmarked here.
    """

    if count < 0:
        raise ValueError("count must be non-negative")
    return [base64.b64encode(rng.bytes(KEY_BYTES)).decode("ascii") for _ in range(count)]


@dataclass
class KeyCycle:
    """Endless round-robin over the initial keys."""

    keys: Sequence[str]
    position: int = field(default=0)

    def __post_init__(self) -> None:
        if not self.keys:
            raise ValueError("KeyCycle needs at least one key")

    def next(self) -> str:
        key = self.keys[self.position]
        self.position += 1
        if self.position == len(self.keys):
            self.position = 0
        return key


def remove_insert(adapter: MapAdapter, keys: Sequence[str]) -> Callable[[], None]:
    """One remove-then-insert of the next key per call."""

    cycle = KeyCycle(keys)

    def step() -> None:
        key = cycle.next()
        adapter.remove(key)
        adapter.insert(key, 1)

    return step


def batch_remove_insert(
    adapter: MapAdapter, keys: Sequence[str], changes: int
) -> Callable[[], None]:
    """``changes`` remove-then-insert cycles inside one ``adapter.batch()``."""

    if changes < 1:
        raise ValueError("changes must be at least 1")
    cycle = KeyCycle(keys)

    def step() -> None:
        with adapter.batch() as target:
            for _ in range(changes):
                key = cycle.next()
                target.remove(key)
                target.insert(key, 1)

    return step


__all__ = [
    "KEY_BYTES",
    "generate_keys",
    "KeyCycle",
    "remove_insert",
    "batch_remove_insert",
]
