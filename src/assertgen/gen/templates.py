"""
Template overrides for the assertion generator.

The generator ships a built-in template for every kind of code it emits.
Users may replace any of them, either with inline text or with a file. A
:class:`TemplateRegistry` lists the kinds a generator understands so that
overrides can be validated before generation starts.

"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from .errors import InvalidTemplateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateSource:
	"""Replacement text for one template, given inline or as a file."""

	content: str | None = None
	file: Path | None = None

	def __post_init__(self) -> None:
		"""Ensure exactly one of content or file is set."""
		if (self.content is None) == (self.file is None):
			msg = "A template source needs exactly one of 'content' or 'file'"
			raise ValueError(msg)

	@classmethod
	def inline(cls, content: str) -> TemplateSource:
		return cls(content=content)

	@classmethod
	def from_file(cls, file: Path | str) -> TemplateSource:
		return cls(file=Path(file))

	def load(self) -> str:
		"""
		Return the template text.

		Files are read on demand so that configuring a template never touches
		the filesystem.

		Returns:
		    Template text

		"""
		if self.content is not None:
			return self.content
		logger.debug("Reading template from %s", self.file)
		return self.file.read_text(encoding="utf-8")  # type: ignore[union-attr]

	def describe(self) -> str:
		if self.file is not None:
			return f"file {self.file}"
		return "inline template"


@dataclass(frozen=True)
class TemplateKind:
	"""A template the generator knows how to use."""

	category: str
	name: str
	generator_type: str
	"""Identifier the generator uses for this template."""

	description: str

	@property
	def key(self) -> str:
		return f"{self.category}.{self.name}"


class TemplateRegistry:
	"""Lookup of known template kinds by ``category.name`` key."""

	def __init__(self, kinds: list[TemplateKind]) -> None:
		self._kinds = {kind.key: kind for kind in kinds}

	def __contains__(self, key: object) -> bool:
		return key in self._kinds

	def __iter__(self) -> Iterator[TemplateKind]:
		return iter(self._kinds.values())

	def keys(self) -> list[str]:
		return list(self._kinds)

	def get(self, key: str) -> TemplateKind:
		"""
		Get a template kind.

		Args:
		    key: ``category.name`` key of the template

		Returns:
		    The matching template kind

		Raises:
		    InvalidTemplateError: If the key is unknown

		"""
		try:
			return self._kinds[key]
		except KeyError:
			raise InvalidTemplateError(key, self._kinds) from None

	def validate(self, keys: Mapping[str, object] | list[str]) -> None:
		"""Raise InvalidTemplateError for the first key not in the registry."""
		for key in keys:
			self.get(key)


class TemplateSet(Mapping[str, TemplateSource]):
	"""
	Template overrides keyed by ``category.name``.

	Keys are not validated here: the registry of known kinds belongs to the
	generator, and the resolver checks overrides against it.

	"""

	def __init__(self, overrides: Mapping[str, TemplateSource] | None = None) -> None:
		self._overrides: dict[str, TemplateSource] = dict(overrides or {})

	def __getitem__(self, key: str) -> TemplateSource:
		return self._overrides[key]

	def __iter__(self) -> Iterator[str]:
		return iter(self._overrides)

	def __len__(self) -> int:
		return len(self._overrides)

	def __repr__(self) -> str:
		return f"TemplateSet({self._overrides!r})"

	def set(self, key: str, source: TemplateSource) -> None:
		self._overrides[key] = source

	def template(self, key: str, content: str) -> None:
		"""Override a template with inline text."""
		self.set(key, TemplateSource.inline(content))

	def file(self, key: str, path: Path | str) -> None:
		"""Override a template with the contents of a file."""
		self.set(key, TemplateSource.from_file(path))

	def merged_over(self, base: Mapping[str, TemplateSource]) -> dict[str, TemplateSource]:
		"""Return ``base`` with this set's overrides applied on top."""
		merged = dict(base)
		merged.update(self._overrides)
		return merged


def _kinds(category: str, entries: list[tuple[str, str, str]]) -> list[TemplateKind]:
	return [TemplateKind(category, name, generator_type, description) for name, generator_type, description in entries]


DEFAULT_TEMPLATE_REGISTRY = TemplateRegistry(
	_kinds(
		"classes",
		[
			("assertion_class", "ASSERT_CLASS", "class assertions"),
			("hierarchical_concrete", "HIERARCHICAL_ASSERT_CLASS", "hierarchical concrete class assertions"),
			("hierarchical_abstract", "ABSTRACT_ASSERT_CLASS", "hierarchical abstract class assertions"),
		],
	)
	+ _kinds(
		"methods",
		[
			("object", "HAS", "object assertions"),
			("boolean_primitive", "IS", "boolean assertions"),
			("boolean_wrapper", "IS_WRAPPER", "boolean wrapper assertions"),
			("array", "HAS_FOR_ARRAY", "array assertions"),
			("iterable", "HAS_FOR_ITERABLE", "iterable assertions"),
			("char_primitive", "HAS_FOR_CHAR", "char assertions"),
			("character", "HAS_FOR_CHARACTER", "Character assertions"),
			("real_number_primitive", "HAS_FOR_REAL_NUMBER", "real number assertions (float, double)"),
			(
				"real_number_wrapper",
				"HAS_FOR_REAL_NUMBER_WRAPPER",
				"real number wrapper assertions (Float, Double)",
			),
			("whole_number_primitive", "HAS_FOR_WHOLE_NUMBER", "whole number assertions (int, long, short, byte)"),
			(
				"whole_number_wrapper",
				"HAS_FOR_WHOLE_NUMBER_WRAPPER",
				"whole number has assertions (Integer, Long, Short, Byte)",
			),
		],
	)
	+ _kinds(
		"entry_points",
		[
			("assertions", "ASSERTIONS_ENTRY_POINT_CLASS", "assertions entry point class"),
			("assertion_method", "ASSERTION_ENTRY_POINT", "assertions entry point method"),
			("soft", "SOFT_ASSERTIONS_ENTRY_POINT_CLASS", "soft assertions entry point class"),
			("soft_method", "SOFT_ENTRY_POINT_METHOD_ASSERTION", "soft assertions entry point method"),
			("junit_soft", "JUNIT_SOFT_ASSERTIONS_ENTRY_POINT_CLASS", "junit soft assertions entry point class"),
			("bdd", "BDD_ASSERTIONS_ENTRY_POINT_CLASS", "BDD assertions entry point class"),
			("bdd_method", "BDD_ENTRY_POINT_METHOD_ASSERTION", "BDD assertions entry point method"),
		],
	)
)
