"""Schema for the assertgen configuration file."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from assertgen.gen.models import DEFAULT_OUTPUT_DIR_TEMPLATE, GenerationOptions, ResolutionUnit
from assertgen.gen.patterns import NamePatternFilter
from assertgen.gen.templates import TemplateSource

DEFAULT_UNIT_NAME = "main"
DEFAULT_UNIT_SOURCES = [Path("src/main/java")]


def _anchor(output_dir: str | None, base_dir: Path) -> str | None:
	"""Make a relative output directory template relative to ``base_dir``."""
	if output_dir is None:
		return None
	return str(base_dir / output_dir)


class TemplateSourceSchema(BaseModel):
	"""A template override given inline or as a file."""

	model_config = ConfigDict(extra="forbid")

	template: str | None = None
	file: Path | None = None

	@model_validator(mode="after")
	def check_exactly_one(self) -> TemplateSourceSchema:
		if (self.template is None) == (self.file is None):
			msg = "set exactly one of 'template' or 'file'"
			raise ValueError(msg)
		return self

	def to_source(self, base_dir: Path) -> TemplateSource:
		if self.template is not None:
			return TemplateSource.inline(self.template)
		return TemplateSource.from_file(base_dir / self.file)  # type: ignore[operator]


class NameFilterSchema(BaseModel):
	"""Include and exclude wildcard patterns."""

	model_config = ConfigDict(extra="forbid")

	include: list[str] = Field(default_factory=list)
	exclude: list[str] = Field(default_factory=list)

	def to_filter(self) -> NamePatternFilter:
		return NamePatternFilter().include(*self.include).exclude(*self.exclude)


class OptionsSchema(BaseModel):
	"""Generation options shared by the project and unit sections."""

	model_config = ConfigDict(extra="forbid")

	skip: bool | None = None
	hierarchical: bool | None = None
	entry_points: list[str] | None = None
	entry_point_package: str | None = None
	output_dir: str | None = None
	templates: dict[str, TemplateSourceSchema] = Field(default_factory=dict)
	classes: NameFilterSchema | None = None
	packages: NameFilterSchema | None = None

	def to_options(self, base_dir: Path) -> GenerationOptions:
		"""
		Build generation options from this section.

		Args:
		    base_dir: Directory that relative template files and output
	        directories are resolved against

		Returns:
		    Options with only the fields present in this section set

		Raises:
		    InvalidConfigurationError: If an entry point name is unknown

		"""
		options = GenerationOptions(
			skip=self.skip,
			hierarchical=self.hierarchical,
			output_dir_template=_anchor(self.output_dir, base_dir),
			entry_point_package=self.entry_point_package,
		)
		if self.entry_points is not None:
			options.set_entry_points(self.entry_points)
		for key, source in self.templates.items():
			options.templates.set(key, source.to_source(base_dir))
		if self.classes is not None:
			options.classes = self.classes.to_filter()
		if self.packages is not None:
			options.packages = self.packages.to_filter()
		return options


class UnitConfigSchema(OptionsSchema):
	"""One generation unit and its overrides."""

	sources: list[Path] = Field(default_factory=list)
	path_segment: str | None = None

	def to_unit(self, name: str, base_dir: Path) -> ResolutionUnit:
		return ResolutionUnit(
			name=name,
			options=self.to_options(base_dir),
			path_segment=self.path_segment,
			sources=[base_dir / source for source in self.sources],
		)


def _default_units() -> dict[str, UnitConfigSchema]:
	return {DEFAULT_UNIT_NAME: UnitConfigSchema(sources=list(DEFAULT_UNIT_SOURCES))}


class AppConfigSchema(OptionsSchema):
	"""Top-level configuration: project defaults plus units."""

	units: dict[str, UnitConfigSchema] = Field(default_factory=_default_units)

	def to_options(self, base_dir: Path) -> GenerationOptions:
		"""Build project options, anchoring the built-in output directory to ``base_dir``."""
		options = super().to_options(base_dir)
		if options.output_dir_template is None:
			options.output_dir_template = _anchor(DEFAULT_OUTPUT_DIR_TEMPLATE, base_dir)
		return options
