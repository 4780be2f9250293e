"""Sorted map backed by ``sortedcontainers``."""
from __future__ import annotations

from sortedcontainers import SortedDict

from .builtin import DictAdapter


class SortedDictAdapter(DictAdapter):
    name = "SortedDict"

    def __init__(self) -> None:
        super().__init__(SortedDict)


__all__ = ["SortedDictAdapter"]
