"""Tests for the generation options model."""

from __future__ import annotations

from pathlib import Path

import pytest

from assertgen.gen import EffectiveOptions, EntryPointKind, GenerationOptions, InvalidConfigurationError


@pytest.mark.unit
class TestEntryPointKind:
	def test_parse_accepts_members(self) -> None:
		assert EntryPointKind.parse(EntryPointKind.BDD) is EntryPointKind.BDD

	@pytest.mark.parametrize("token", ["junit_soft", "JUNIT_SOFT", "JUnit_Soft", " junit_soft "])
	def test_parse_is_case_insensitive(self, token: str) -> None:
		assert EntryPointKind.parse(token) is EntryPointKind.JUNIT_SOFT

	def test_parse_rejects_unknown(self) -> None:
		with pytest.raises(InvalidConfigurationError) as exc_info:
			EntryPointKind.parse("fastest")

		assert "AUTO_CLOSEABLE_BDD_SOFT" in exc_info.value.valid_names

	def test_file_and_class_names(self) -> None:
		assert EntryPointKind.STANDARD.file_name == "Assertions.java"
		assert EntryPointKind.JUNIT_SOFT.class_name == "JUnitSoftAssertions"


@pytest.mark.unit
class TestGenerationOptions:
	def test_everything_unset_by_default(self) -> None:
		options = GenerationOptions()

		assert options.skip is None
		assert options.hierarchical is None
		assert options.entry_point_kinds is None
		assert options.output_dir_template is None
		assert options.entry_point_package is None
		assert len(options.templates) == 0

	def test_setters_chain(self) -> None:
		options = (
			GenerationOptions()
			.set_skip(False)
			.set_hierarchical(True)
			.set_output_dir(Path("out") / "{unit}")
			.set_entry_point_package("org.example")
		)

		assert options.skip is False
		assert options.hierarchical is True
		assert options.output_dir_template == str(Path("out") / "{unit}")
		assert options.entry_point_package == "org.example"

	def test_set_entry_points_varargs_and_members(self) -> None:
		options = GenerationOptions().set_entry_points(EntryPointKind.SOFT, "bdd")

		assert options.entry_point_kinds == {EntryPointKind.SOFT, EntryPointKind.BDD}

	def test_set_entry_points_replaces(self) -> None:
		options = GenerationOptions().set_entry_points("soft").set_entry_points("bdd")

		assert options.entry_point_kinds == {EntryPointKind.BDD}

	def test_enable_entry_point_starts_from_default(self) -> None:
		options = GenerationOptions().enable_entry_point("soft")

		assert options.entry_point_kinds == {EntryPointKind.STANDARD, EntryPointKind.SOFT}

	def test_disable_entry_point(self) -> None:
		options = GenerationOptions().set_entry_points("standard", "bdd").enable_entry_point("standard", enabled=False)

		assert options.entry_point_kinds == {EntryPointKind.BDD}

	def test_template_setters(self, tmp_path: Path) -> None:
		template_file = tmp_path / "template.txt"
		template_file.write_text("from file", encoding="utf-8")

		options = (
			GenerationOptions()
			.template("methods.whole_number_primitive", "inline")
			.template_file("classes.assertion_class", template_file)
		)

		assert options.templates["methods.whole_number_primitive"].load() == "inline"
		assert options.templates["classes.assertion_class"].load() == "from file"

	def test_filters_accumulate(self) -> None:
		options = GenerationOptions().include_classes("a.*").include_classes("b.*").exclude_packages("c")

		assert options.classes is not None
		assert options.classes.includes == ("a.*", "b.*")
		assert options.packages is not None
		assert options.packages.excludes == ("c",)
		assert options.packages.includes == ()


@pytest.mark.unit
def test_effective_options_as_dict() -> None:
	effective = EffectiveOptions(
		unit_name="main",
		skip=False,
		entry_point_kinds=frozenset({EntryPointKind.SOFT, EntryPointKind.STANDARD}),
		output_dir="out/main",
	)

	data = effective.as_dict()

	assert data["unit"] == "main"
	assert data["entry_points"] == ["SOFT", "STANDARD"]
	assert data["output_dir"] == "out/main"
	assert data["templates"] == {}


@pytest.mark.unit
def test_effective_options_are_frozen() -> None:
	effective = EffectiveOptions.skipped("main")

	with pytest.raises(AttributeError):
		effective.skip = False  # type: ignore[misc]
