"""Models for configuring assertion generation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Self

from .errors import InvalidConfigurationError
from .patterns import NamePatternFilter
from .templates import TemplateSet, TemplateSource

PLACEHOLDER_TOKEN = "{unit}"  # noqa: S105
DEFAULT_OUTPUT_DIR_TEMPLATE = f"build/generated-src/{PLACEHOLDER_TOKEN}-test/java"


class EntryPointKind(Enum):
	"""Flavours of the generated entry point class."""

	STANDARD = "Assertions.java"
	BDD = "BddAssertions.java"
	SOFT = "SoftAssertions.java"
	JUNIT_SOFT = "JUnitSoftAssertions.java"
	BDD_SOFT = "BDDSoftAssertions.java"
	JUNIT_BDD_SOFT = "JUnitBDDSoftAssertions.java"
	AUTO_CLOSEABLE_SOFT = "AutoCloseableSoftAssertions.java"
	AUTO_CLOSEABLE_BDD_SOFT = "AutoCloseableBDDSoftAssertions.java"

	@property
	def file_name(self) -> str:
		return self.value

	@property
	def class_name(self) -> str:
		return self.value.removesuffix(".java")

	@classmethod
	def parse(cls, value: EntryPointKind | str) -> EntryPointKind:
		"""
		Translate an enum member or a case-insensitive name into a member.

		Args:
		    value: Member or name such as ``"soft"`` or ``"JUnit_Soft"``

		Returns:
		    The matching member

		Raises:
		    InvalidConfigurationError: If the name is not a known kind

		"""
		if isinstance(value, cls):
			return value
		token = str(value)
		try:
			return cls[token.strip().upper()]
		except KeyError:
			raise InvalidConfigurationError(token, cls.__members__) from None


DEFAULT_ENTRY_POINT_KINDS = frozenset({EntryPointKind.STANDARD})


@dataclass
class GenerationOptions:
	"""
	Generation options at one scope (project-wide or a single unit).

	Every field left as ``None`` is "not set here" and falls back to the
	next scope during resolution.

	"""

	skip: bool | None = None
	hierarchical: bool | None = None
	entry_point_kinds: frozenset[EntryPointKind] | None = None
	templates: TemplateSet = field(default_factory=TemplateSet)
	output_dir_template: str | None = None
	entry_point_package: str | None = None
	classes: NamePatternFilter | None = None
	packages: NamePatternFilter | None = None

	def set_skip(self, skip: bool) -> Self:
		self.skip = skip
		return self

	def set_hierarchical(self, hierarchical: bool) -> Self:
		self.hierarchical = hierarchical
		return self

	def set_entry_points(self, *values: EntryPointKind | str | Iterable[EntryPointKind | str]) -> Self:
		"""
		Replace the selected entry point kinds.

		Accepts members, names in any case, or a single iterable of either,
		so both ``set_entry_points("soft", "bdd")`` and
		``set_entry_points(["soft", "bdd"])`` work.

		Args:
		    values: Entry point kinds to generate

		Returns:
		    self

		Raises:
		    InvalidConfigurationError: If a name is not a known kind

		"""
		if len(values) == 1 and not isinstance(values[0], (str, EntryPointKind)):
			values = tuple(values[0])
		self.entry_point_kinds = frozenset(EntryPointKind.parse(v) for v in values)
		return self

	def enable_entry_point(self, kind: EntryPointKind | str, enabled: bool = True) -> Self:
		"""
		Toggle a single entry point kind.

		Toggling starts from the kinds already set at this scope, or from
		the built-in default when nothing is set yet.

		"""
		parsed = EntryPointKind.parse(kind)
		current = set(self.entry_point_kinds if self.entry_point_kinds is not None else DEFAULT_ENTRY_POINT_KINDS)
		if enabled:
			current.add(parsed)
		else:
			current.discard(parsed)
		self.entry_point_kinds = frozenset(current)
		return self

	def set_output_dir(self, template: str | Path) -> Self:
		self.output_dir_template = str(template)
		return self

	def set_entry_point_package(self, package: str | None) -> Self:
		self.entry_point_package = package
		return self

	def template(self, key: str, content: str) -> Self:
		self.templates.template(key, content)
		return self

	def template_file(self, key: str, path: Path | str) -> Self:
		self.templates.file(key, path)
		return self

	def include_classes(self, *patterns: str) -> Self:
		self.classes = (self.classes or NamePatternFilter()).include(*patterns)
		return self

	def exclude_classes(self, *patterns: str) -> Self:
		self.classes = (self.classes or NamePatternFilter()).exclude(*patterns)
		return self

	def include_packages(self, *patterns: str) -> Self:
		self.packages = (self.packages or NamePatternFilter()).include(*patterns)
		return self

	def exclude_packages(self, *patterns: str) -> Self:
		self.packages = (self.packages or NamePatternFilter()).exclude(*patterns)
		return self


@dataclass
class ResolutionUnit:
	"""One generation target, usually a source set."""

	name: str
	options: GenerationOptions = field(default_factory=GenerationOptions)
	path_segment: str | None = None
	"""Value substituted for the placeholder; defaults to ``name``."""

	sources: list[Path] = field(default_factory=list)

	@property
	def placeholder_value(self) -> str:
		return self.name if self.path_segment is None else self.path_segment


@dataclass(frozen=True)
class EffectiveOptions:
	"""Fully resolved, immutable options for one unit."""

	unit_name: str
	skip: bool = True
	hierarchical: bool = False
	entry_point_kinds: frozenset[EntryPointKind] = DEFAULT_ENTRY_POINT_KINDS
	templates: Mapping[str, TemplateSource] = field(default_factory=lambda: MappingProxyType({}))
	output_dir: str | None = None
	entry_point_package: str | None = None
	classes: NamePatternFilter = field(default_factory=NamePatternFilter)
	packages: NamePatternFilter = field(default_factory=NamePatternFilter)

	@classmethod
	def skipped(cls, unit_name: str) -> EffectiveOptions:
		return cls(unit_name=unit_name, skip=True)

	def as_dict(self) -> dict[str, object]:
		"""Plain representation for display and serialisation."""
		return {
			"unit": self.unit_name,
			"skip": self.skip,
			"hierarchical": self.hierarchical,
			"entry_points": sorted(kind.name for kind in self.entry_point_kinds),
			"entry_point_package": self.entry_point_package,
			"output_dir": self.output_dir,
			"templates": {key: source.describe() for key, source in sorted(self.templates.items())},
			"classes": {"include": list(self.classes.includes), "exclude": list(self.classes.excludes)},
			"packages": {"include": list(self.packages.includes), "exclude": list(self.packages.excludes)},
		}
