"""
Include/exclude wildcard filters for dotted Java names.

Patterns use two wildcards:

- ``*`` matches any run of identifier characters within one segment
- ``**`` matches across segments, dots included

Every other character is literal, so ``org.example.Hello*`` matches
``org.example.HelloWorld`` but not ``org.example.hello.Sub``.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Self

_WILDCARD_MARKER = "\x00"


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
	"""
	Compile a wildcard pattern into a regular expression.

	Args:
	    pattern: Wildcard pattern such as ``org.example.**``

	Returns:
	    Compiled regular expression that must match the whole name

	"""
	escaped = pattern.replace(".", r"\.").replace("$", r"\$")
	# "**" first, otherwise the single-star rule eats half of it
	marked = escaped.replace("**", r"[\w\.]" + _WILDCARD_MARKER).replace("*", r"\w" + _WILDCARD_MARKER)
	return re.compile(marked.replace(_WILDCARD_MARKER, "*"))


@dataclass(frozen=True)
class NamePatternFilter:
	"""Immutable set of include and exclude patterns."""

	includes: tuple[str, ...] = field(default_factory=tuple)
	excludes: tuple[str, ...] = field(default_factory=tuple)

	def include(self, *patterns: str) -> Self:
		"""Return a copy with extra include patterns."""
		return type(self)(includes=_extend(self.includes, patterns), excludes=self.excludes)

	def exclude(self, *patterns: str) -> Self:
		"""Return a copy with extra exclude patterns."""
		return type(self)(includes=self.includes, excludes=_extend(self.excludes, patterns))

	@property
	def is_empty(self) -> bool:
		return not self.includes and not self.excludes

	def matches(self, name: str) -> bool:
		"""
		Check whether a name passes the filter.

		A name passes when it matches at least one include pattern (or no
		include patterns are configured) and no exclude pattern.

		Args:
		    name: Fully qualified class or package name

		Returns:
		    True if the name is selected

		"""
		if self.includes and not any(compile_pattern(p).fullmatch(name) for p in self.includes):
			return False
		return not any(compile_pattern(p).fullmatch(name) for p in self.excludes)


def _extend(existing: tuple[str, ...], patterns: tuple[str, ...]) -> tuple[str, ...]:
	merged = list(existing)
	for pattern in patterns:
		if pattern not in merged:
			merged.append(pattern)
	return tuple(merged)
