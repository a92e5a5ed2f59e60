"""Tests for resolving effective options from project and unit scopes."""

from __future__ import annotations

import pytest

from assertgen.gen import (
	EntryPointKind,
	GenerationOptions,
	InvalidConfigurationError,
	InvalidTemplateError,
	NamePatternFilter,
	ResolutionUnit,
	UnresolvedPlaceholderError,
	resolve,
	resolve_all,
)
from assertgen.gen.models import DEFAULT_OUTPUT_DIR_TEMPLATE
from assertgen.gen.resolver import materialize_output_dir
from assertgen.gen.templates import TemplateKind, TemplateRegistry


@pytest.mark.unit
class TestDefaults:
	"""Nothing configured at either scope."""

	def test_nothing_set_is_skipped(self) -> None:
		effective = resolve(ResolutionUnit("main"), GenerationOptions())

		assert effective.skip is True
		assert effective.hierarchical is False
		assert effective.entry_point_kinds == {EntryPointKind.STANDARD}
		assert effective.entry_point_package is None

	def test_enabled_unit_gets_built_in_defaults(self) -> None:
		effective = resolve(ResolutionUnit("main", GenerationOptions().set_skip(False)), GenerationOptions())

		assert effective.skip is False
		assert effective.hierarchical is False
		assert effective.entry_point_kinds == {EntryPointKind.STANDARD}
		assert effective.entry_point_package is None
		assert effective.output_dir == "build/generated-src/main-test/java"
		assert dict(effective.templates) == {}
		assert effective.classes.is_empty
		assert effective.packages.is_empty


@pytest.mark.unit
class TestSkip:
	def test_unit_false_overrides_project_true(self) -> None:
		project = GenerationOptions().set_skip(True)
		unit = ResolutionUnit("main", GenerationOptions().set_skip(False))

		assert resolve(unit, project).skip is False

	def test_unit_true_overrides_project_false(self) -> None:
		project = GenerationOptions().set_skip(False)
		unit = ResolutionUnit("main", GenerationOptions().set_skip(True))

		assert resolve(unit, project).skip is True

	def test_project_value_used_when_unit_unset(self) -> None:
		assert resolve(ResolutionUnit("main"), GenerationOptions().set_skip(False)).skip is False

	def test_skipped_unit_does_not_evaluate_other_fields(self) -> None:
		"""A skipped unit never validates templates or needs a unit name."""
		options = GenerationOptions().set_skip(True).template("methods.no_such_template", "x").set_output_dir("{unit}")
		unit = ResolutionUnit("", options)

		effective = resolve(unit, GenerationOptions())

		assert effective.skip is True
		assert effective.output_dir is None
		assert dict(effective.templates) == {}


@pytest.mark.unit
class TestFieldPrecedence:
	"""Unit values win field by field; unset fields come from the project."""

	@pytest.fixture
	def project(self) -> GenerationOptions:
		return (
			GenerationOptions()
			.set_skip(False)
			.set_hierarchical(False)
			.set_entry_points("soft")
			.set_output_dir("out/{unit}")
			.set_entry_point_package("org.project")
			.include_classes("org.project.**")
			.include_packages("org.project")
		)

	def test_hierarchical_override(self, project: GenerationOptions) -> None:
		unit = ResolutionUnit("main", GenerationOptions().set_hierarchical(True))

		effective = resolve(unit, project)

		assert effective.hierarchical is True
		assert effective.entry_point_kinds == {EntryPointKind.SOFT}
		assert effective.output_dir == "out/main"
		assert effective.entry_point_package == "org.project"
		assert effective.classes.includes == ("org.project.**",)

	def test_entry_points_override(self, project: GenerationOptions) -> None:
		unit = ResolutionUnit("main", GenerationOptions().set_entry_points("bdd"))

		effective = resolve(unit, project)

		assert effective.entry_point_kinds == {EntryPointKind.BDD}
		assert effective.hierarchical is False
		assert effective.entry_point_package == "org.project"

	def test_output_dir_override(self, project: GenerationOptions) -> None:
		unit = ResolutionUnit("main", GenerationOptions().set_output_dir("src-gen/{unit}/java"))

		effective = resolve(unit, project)

		assert effective.output_dir == "src-gen/main/java"
		assert effective.entry_point_kinds == {EntryPointKind.SOFT}

	def test_package_override(self, project: GenerationOptions) -> None:
		unit = ResolutionUnit("main", GenerationOptions().set_entry_point_package("org.other"))

		effective = resolve(unit, project)

		assert effective.entry_point_package == "org.other"
		assert effective.output_dir == "out/main"

	def test_filter_override(self, project: GenerationOptions) -> None:
		unit = ResolutionUnit("main", GenerationOptions().exclude_classes("org.unit.*"))

		effective = resolve(unit, project)

		assert effective.classes == NamePatternFilter(excludes=("org.unit.*",))
		assert effective.packages == NamePatternFilter(includes=("org.project",))

	def test_entry_point_package_passes_through_unset(self) -> None:
		effective = resolve(ResolutionUnit("main", GenerationOptions().set_skip(False)), GenerationOptions())

		assert effective.entry_point_package is None


@pytest.mark.unit
class TestEntryPointKinds:
	def test_case_insensitive_names(self) -> None:
		for names in (["standard", "soft"], ["STANDARD", "SOFT"], ["Standard", "Soft"]):
			options = GenerationOptions().set_entry_points(names)
			assert options.entry_point_kinds == {EntryPointKind.STANDARD, EntryPointKind.SOFT}

	def test_unknown_name_fails_at_configuration_time(self) -> None:
		with pytest.raises(InvalidConfigurationError) as exc_info:
			GenerationOptions().set_entry_points(["standard", "fastest"])

		message = str(exc_info.value)
		assert "fastest" in message
		for name in ("STANDARD", "SOFT", "JUNIT_SOFT", "BDD"):
			assert name in message
		assert exc_info.value.token == "fastest"

	def test_empty_unit_selection_inherits_project(self, enabled_project: GenerationOptions) -> None:
		enabled_project.set_entry_points("junit_soft")
		unit = ResolutionUnit("main", GenerationOptions().set_entry_points([]))

		assert unit.options.entry_point_kinds == frozenset()
		assert resolve(unit, enabled_project).entry_point_kinds == {EntryPointKind.JUNIT_SOFT}

	def test_empty_everywhere_falls_back_to_standard(self) -> None:
		project = GenerationOptions().set_skip(False).set_entry_points([])
		unit = ResolutionUnit("main", GenerationOptions().set_entry_points([]))

		assert resolve(unit, project).entry_point_kinds == {EntryPointKind.STANDARD}


@pytest.mark.unit
class TestTemplates:
	def test_unit_and_project_templates_merge_per_key(self, enabled_project: GenerationOptions) -> None:
		enabled_project.template("methods.whole_number_primitive", "project").template("classes.assertion_class", "p")
		unit = ResolutionUnit("main", GenerationOptions().template("methods.whole_number_primitive", "unit"))

		effective = resolve(unit, enabled_project)

		assert effective.templates["methods.whole_number_primitive"].load() == "unit"
		assert effective.templates["classes.assertion_class"].load() == "p"

	def test_unknown_template_key(self, enabled_project: GenerationOptions) -> None:
		unit = ResolutionUnit("main", GenerationOptions().template("methods.whole_number_assertion", "x"))

		with pytest.raises(InvalidTemplateError, match="methods.whole_number_assertion"):
			resolve(unit, enabled_project)

	def test_registry_is_supplied_by_caller(self, enabled_project: GenerationOptions) -> None:
		registry = TemplateRegistry([TemplateKind("custom", "only", "ONLY", "the only template")])
		unit = ResolutionUnit("main", GenerationOptions().template("custom.only", "x"))

		assert "custom.only" in resolve(unit, enabled_project, registry).templates
		with pytest.raises(InvalidTemplateError):
			resolve(unit, enabled_project)

	def test_templates_snapshot_is_read_only(self, enabled_project: GenerationOptions) -> None:
		effective = resolve(ResolutionUnit("main"), enabled_project)

		with pytest.raises(TypeError):
			effective.templates["classes.assertion_class"] = None  # type: ignore[index]


@pytest.mark.unit
class TestOutputDir:
	def test_scenario_unit_name_substitution(self, enabled_project: GenerationOptions) -> None:
		enabled_project.set_output_dir("build/generated/{unit}")

		assert resolve(ResolutionUnit("test"), enabled_project).output_dir == "build/generated/test"

	def test_path_segment_replaces_name(self, enabled_project: GenerationOptions) -> None:
		unit = ResolutionUnit("integration", path_segment="integration-test")

		assert resolve(unit, enabled_project).output_dir == "build/generated-src/integration-test-test/java"

	def test_template_without_placeholder_is_used_verbatim(self, enabled_project: GenerationOptions) -> None:
		enabled_project.set_output_dir("shared/out")

		effective = resolve_all([ResolutionUnit("main"), ResolutionUnit("other")], enabled_project)

		assert {options.output_dir for options in effective.values()} == {"shared/out"}

	def test_missing_unit_name(self, enabled_project: GenerationOptions) -> None:
		with pytest.raises(UnresolvedPlaceholderError):
			resolve(ResolutionUnit(""), enabled_project)

	def test_substitution_is_idempotent(self) -> None:
		once = materialize_output_dir(DEFAULT_OUTPUT_DIR_TEMPLATE, "main")

		assert materialize_output_dir(once, "main") == once


@pytest.mark.unit
def test_resolution_is_pure(enabled_project: GenerationOptions) -> None:
	enabled_project.set_entry_points("soft", "bdd").template("entry_points.soft", "x")
	unit = ResolutionUnit("main", GenerationOptions().set_hierarchical(True))

	first = resolve(unit, enabled_project)
	second = resolve(unit, enabled_project)

	assert first == second
	assert unit.options.skip is None
	assert enabled_project.hierarchical is None


@pytest.mark.unit
def test_resolve_all_keys_by_unit_name(enabled_project: GenerationOptions) -> None:
	units = [ResolutionUnit("main"), ResolutionUnit("integration", GenerationOptions().set_skip(True))]

	effective = resolve_all(units, enabled_project)

	assert list(effective) == ["main", "integration"]
	assert effective["main"].skip is False
	assert effective["integration"].skip is True
