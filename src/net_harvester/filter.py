"""Interface allow/deny filtering.

A filter is an ordered list of regular expressions plus a polarity flag.
With ``is_list_ignored`` set the patterns name interfaces to drop;
otherwise they name the only interfaces to keep.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class InterfaceFilter:
    """Ordered interface-name patterns plus list polarity."""

    patterns: tuple[re.Pattern[str], ...]
    is_list_ignored: bool = True

    @classmethod
    def from_patterns(
        cls,
        patterns: Iterable[str],
        is_list_ignored: bool = True,
    ) -> InterfaceFilter:
        """Compile ``patterns`` in order.

        Raises:
            ValueError: If a pattern is not a valid regular expression.
        """
        compiled: list[re.Pattern[str]] = []
        for pattern in patterns:
            try:
                compiled.append(re.compile(pattern))
            except re.error as e:
                raise ValueError(
                    f"invalid interface pattern {pattern!r}: {e}"
                ) from e
        return cls(patterns=tuple(compiled), is_list_ignored=is_list_ignored)

    def includes(self, name: str) -> bool:
        """Return whether ``name`` passes this filter."""
        return should_include(name, self)


def should_include(name: str, rules: InterfaceFilter | None) -> bool:
    """Decide whether interface ``name`` counts towards the totals.

    The first matching pattern decides: a match includes the interface
    for an allow list and excludes it for an ignore list.  When nothing
    matches the opposite holds.  No rules means everything is included.
    """
    if rules is None:
        return True

    for pattern in rules.patterns:
        if pattern.search(name):
            return not rules.is_list_ignored
    return rules.is_list_ignored
