"""Adapters for persistent (immutable) maps.

Both libraries offer a transient view for batched updates: ``pyrsistent``
calls it an evolver and ``immutables`` a mutation. Inside ``batch()`` the
adapter routes updates to that view and publishes the finished version on
exit.
"""
from __future__ import annotations

import contextlib
from typing import Hashable, Iterator

import immutables
import pyrsistent

from .base import MapAdapter


class PMapAdapter(MapAdapter):
    name = "pyrsistent PMap"

    def __init__(self) -> None:
        self.map = pyrsistent.pmap()
        self._evolver = None

    def insert(self, key: Hashable, value: object) -> None:
        if self._evolver is not None:
            self._evolver[key] = value
        else:
            self.map = self.map.set(key, value)

    def remove(self, key: Hashable) -> None:
        if self._evolver is not None:
            del self._evolver[key]
        else:
            self.map = self.map.remove(key)

    @contextlib.contextmanager
    def batch(self) -> Iterator["PMapAdapter"]:
        if self._evolver is not None:
            raise RuntimeError("batch() is not reentrant")
        self._evolver = self.map.evolver()
        try:
            yield self
            self.map = self._evolver.persistent()
        finally:
            self._evolver = None

    def __len__(self) -> int:
        if self._evolver is not None:
            return len(self._evolver)
        return len(self.map)

    def __contains__(self, key: object) -> bool:
        if self._evolver is not None:
            return key in self._evolver
        return key in self.map


class ImmutablesMapAdapter(MapAdapter):
    name = "immutables Map"

    def __init__(self) -> None:
        self.map = immutables.Map()
        self._mutation = None

    def insert(self, key: Hashable, value: object) -> None:
        if self._mutation is not None:
            self._mutation[key] = value
        else:
            self.map = self.map.set(key, value)

    def remove(self, key: Hashable) -> None:
        if self._mutation is not None:
            del self._mutation[key]
        else:
            self.map = self.map.delete(key)

    @contextlib.contextmanager
    def batch(self) -> Iterator["ImmutablesMapAdapter"]:
        if self._mutation is not None:
            raise RuntimeError("batch() is not reentrant")
        self._mutation = self.map.mutate()
        try:
            yield self
            self.map = self._mutation.finish()
        finally:
            self._mutation = None

    def __len__(self) -> int:
        if self._mutation is not None:
            return len(self._mutation)
        return len(self.map)

    def __contains__(self, key: object) -> bool:
        if self._mutation is not None:
            return key in self._mutation
        return key in self.map


__all__ = ["PMapAdapter", "ImmutablesMapAdapter"]
