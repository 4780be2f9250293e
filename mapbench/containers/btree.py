"""B-tree map backed by the ``BTrees`` package."""
from __future__ import annotations

from BTrees.OOBTree import OOBTree

from .builtin import DictAdapter


class OOBTreeAdapter(DictAdapter):
    name = "BTrees OOBTree"

    def __init__(self) -> None:
        super().__init__(OOBTree)


__all__ = ["OOBTreeAdapter"]
