"""Include/exclude filtering of benchmark candidates by name."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Tuple


class ConfigError(ValueError):
    """Raised when the benchmark configuration cannot be built."""


@dataclass(frozen=True)
class FilterRule:
    include: bool
    pattern: re.Pattern

    @classmethod
    def compile(cls, include: bool, pattern: str) -> "FilterRule":
        try:
            regex = re.compile(pattern)
        except re.error as exc:
            raise ConfigError(
                f"invalid regular expression {pattern!r}: {exc}"
            ) from exc
        return cls(include=include, pattern=regex)

    def matches(self, name: str) -> bool:
        return self.pattern.search(name) is not None


@dataclass(frozen=True)
class FilterChain:
    """Ordered filter rules; the first rule matching a name decides.

    A name matching no rule gets the opposite of the first rule's mode, so
    ``--include`` first means only named candidates run, and ``--exclude``
    first means everything runs except the named ones.
    """

    rules: Tuple[FilterRule, ...] = ()

    @classmethod
    def from_patterns(cls, patterns: Iterable[tuple[bool, str]]) -> "FilterChain":
        return cls(tuple(FilterRule.compile(include, p) for include, p in patterns))

    def __len__(self) -> int:
        return len(self.rules)

    def passes(self, name: str) -> bool:
        return passes(self, name)


def passes(chain: FilterChain, name: str) -> bool:
    if not chain.rules:
        return True
    for rule in chain.rules:
        if rule.matches(name):
            return rule.include
    return not chain.rules[0].include


__all__ = ["ConfigError", "FilterRule", "FilterChain", "passes"]
