"""Adapter interface shared by every benchmarked container."""
from __future__ import annotations

import contextlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, Iterator


class MapAdapter(ABC):
    """Interface implemented by all container wrappers.

    Persistent containers return a new version on every update; their
    adapters rebind ``self.map`` so callers can treat every container as
    mutable.
    """

    name: str = ""

    @abstractmethod
    def insert(self, key: Hashable, value: object) -> None:
        """Associate ``value`` with ``key``."""

    @abstractmethod
    def remove(self, key: Hashable) -> None:
        """Drop ``key``; the key must be present."""

    @abstractmethod
    def __len__(self) -> int:
        ...

    @abstractmethod
    def __contains__(self, key: object) -> bool:
        ...

    @contextlib.contextmanager
    def batch(self) -> Iterator["MapAdapter"]:
        """Group several updates; in-place containers need no setup."""

        yield self

    def populate(self, keys: Iterable[Hashable], value: object = 1) -> "MapAdapter":
        for key in keys:
            self.insert(key, value)
        return self


@dataclass(frozen=True)
class ContainerSpec:
    """Registry entry: display name plus a factory for empty adapters.

    Specs with ``supports_batch`` unset are left out of batched suites.
    """

    name: str
    factory: Callable[[], MapAdapter]
    supports_batch: bool = True

    def build(self, keys: Iterable[Hashable], value: object = 1) -> MapAdapter:
        return self.factory().populate(keys, value)


__all__ = ["MapAdapter", "ContainerSpec"]
