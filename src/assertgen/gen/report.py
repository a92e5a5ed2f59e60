"""Human-readable report of one generation run."""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from pathlib import Path

	from .models import EntryPointKind

INDENT = "- "
SECTION = "--- "


@dataclass
class GenerationReport:
	"""Collects what happened while generating assertions for one unit."""

	unit_name: str
	output_dir: Path | str | None
	input_classes: list[str] = field(default_factory=list)
	excluded_classes: list[str] = field(default_factory=list)
	user_templates: list[str] = field(default_factory=list)
	generated_files: set[str] = field(default_factory=set)
	entry_point_files: dict[EntryPointKind, Path] = field(default_factory=dict)
	exception: Exception | None = None

	@property
	def input_packages(self) -> list[str]:
		return sorted({name.rpartition(".")[0] for name in self.input_classes if "." in name})

	@property
	def is_error(self) -> bool:
		return self.exception is not None

	@property
	def is_nothing_generated(self) -> bool:
		return not self.generated_files

	def add_generated_files(self, *paths: Path | str) -> None:
		self.generated_files.update(str(path) for path in paths)

	def report_entry_point(self, kind: EntryPointKind, path: Path) -> None:
		self.entry_point_files[kind] = path

	def render(self) -> str:
		"""
		Render the report as plain text.

		Returns:
		    Multi-line report

		"""
		lines = [
			"",
			"=" * 36,
			f"Assertions generation report: {self.unit_name}",
			"=" * 36,
		]
		lines.extend(self._parameters())
		lines.append("")
		lines.append(f"{SECTION}Generator results{SECTION}")
		if self.is_error:
			lines.extend(self._error())
		elif self.is_nothing_generated:
			lines.extend(self._nothing_generated())
		else:
			lines.extend(self._success())
		return "\n".join(lines) + "\n"

	def _parameters(self) -> list[str]:
		lines = ["", f"{SECTION}Generator input parameters{SECTION}"]
		if self.user_templates:
			lines.append("The following templates replace the built-in ones:")
			lines.extend(f"{INDENT}{template}" for template in self.user_templates)
			lines.append("")
		if self.input_packages:
			lines.append("Generating assertions for classes in following packages and subpackages:")
			lines.extend(f"{INDENT}{package}" for package in self.input_packages)
		if self.input_classes:
			if self.input_packages:
				lines.append("")
			lines.append("Generating assertions for classes:")
			lines.extend(f"{INDENT}{name}" for name in self.input_classes)
		if self.excluded_classes:
			lines.append("")
			lines.append("Input classes excluded from assertions generation:")
			lines.extend(f"{INDENT}{name}" for name in self.excluded_classes)
		return lines

	def _success(self) -> list[str]:
		lines = [
			"",
			"Directory where custom assertions files have been generated:",
			f"{INDENT}{self.output_dir}",
			"",
			"Custom assertions files generated:",
		]
		lines.extend(f"{INDENT}{name}" for name in sorted(self.generated_files))
		for kind, path in sorted(self.entry_point_files.items(), key=lambda item: item[0].name):
			lines.extend(["", f"{kind.class_name} entry point class has been generated in file:", f"{INDENT}{path}"])
		return lines

	def _nothing_generated(self) -> list[str]:
		lines = ["", "No assertions generated as no classes have been found from given classes/packages."]
		if self.input_classes:
			lines.append(f"{INDENT}Given classes : {self.input_classes}")
		if self.input_packages:
			lines.append(f"{INDENT}Given packages : {self.input_packages}")
		if self.excluded_classes:
			lines.append(f"{INDENT}Excluded classes : {self.excluded_classes}")
		return lines

	def _error(self) -> list[str]:
		lines = ["", f"Assertions failed with error : {self.exception}"]
		if self.input_classes:
			lines.append(f"{INDENT}Given classes were : {self.input_classes}")
		if self.input_packages:
			lines.append(f"{INDENT}Given packages were : {self.input_packages}")
		lines.append("")
		stack = "".join(traceback.format_exception(self.exception)).rstrip()
		lines.append(f"Full error stack : {stack}")
		return lines
