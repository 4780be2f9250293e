"""Adapters for the standard library mappings."""
from __future__ import annotations

from collections import OrderedDict
from typing import Hashable, MutableMapping

from .base import MapAdapter


class DictAdapter(MapAdapter):
    name = "dict"

    def __init__(self, factory: type[MutableMapping] = dict) -> None:
        self.map: MutableMapping = factory()

    def insert(self, key: Hashable, value: object) -> None:
        self.map[key] = value

    def remove(self, key: Hashable) -> None:
        del self.map[key]

    def __len__(self) -> int:
        return len(self.map)

    def __contains__(self, key: object) -> bool:
        return key in self.map


class OrderedDictAdapter(DictAdapter):
    name = "OrderedDict"

    def __init__(self) -> None:
        super().__init__(OrderedDict)


__all__ = ["DictAdapter", "OrderedDictAdapter"]
