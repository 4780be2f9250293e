"""Registry of benchmarked container implementations."""

from typing import Dict

from .base import ContainerSpec, MapAdapter
from .btree import OOBTreeAdapter
from .builtin import DictAdapter, OrderedDictAdapter
from .persistent import ImmutablesMapAdapter, PMapAdapter
from .sorteddict import SortedDictAdapter

CONTAINERS: Dict[str, ContainerSpec] = {
    spec.name: spec
    for spec in (
        ContainerSpec("dict", DictAdapter),
        ContainerSpec("OrderedDict", OrderedDictAdapter),
        ContainerSpec("SortedDict", SortedDictAdapter),
        ContainerSpec("pyrsistent PMap", PMapAdapter),
        ContainerSpec("immutables Map", ImmutablesMapAdapter),
        # Plain tree map with no transient API; single updates only.
        ContainerSpec("BTrees OOBTree", OOBTreeAdapter, supports_batch=False),
    )
}

# Distributions whose versions are printed in the report header.
BENCHMARKED_DISTRIBUTIONS = ("sortedcontainers", "pyrsistent", "immutables", "BTrees")

__all__ = [
    "CONTAINERS",
    "BENCHMARKED_DISTRIBUTIONS",
    "ContainerSpec",
    "MapAdapter",
    "DictAdapter",
    "OrderedDictAdapter",
    "SortedDictAdapter",
    "PMapAdapter",
    "ImmutablesMapAdapter",
    "OOBTreeAdapter",
]
