"""Command implementation for running the external assertion generator."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .errors import UnsupportedSourceError
from .report import GenerationReport

if TYPE_CHECKING:
	from .models import EffectiveOptions, EntryPointKind

logger = logging.getLogger(__name__)

PACKAGE_INFO_FILE = "package-info.java"
ASSERTION_CLASS_SUFFIXES = ("Assert", "Assertions")


@dataclass
class GeneratedFiles:
	"""Files written by the generator for one unit."""

	assertion_files: list[Path] = field(default_factory=list)
	entry_point_files: dict[EntryPointKind, Path] = field(default_factory=dict)


@runtime_checkable
class AssertionGenerator(Protocol):
	"""The external generator that turns classes into assertion sources."""

	def generate(self, class_names: list[str], options: EffectiveOptions) -> GeneratedFiles:
		"""Generate assertions for ``class_names`` using ``options``."""
		...


def class_names_in_file(path: Path) -> set[str]:
	"""
	Return the fully qualified class names declared by a source file.

	Only the package declaration is read; the class name is the file stem.

	Args:
	    path: Source file

	Returns:
	    Set of fully qualified names, empty for directories and package-info

	Raises:
	    UnsupportedSourceError: If the file is not a Java source file

	"""
	if path.is_dir() or path.name == PACKAGE_INFO_FILE:
		return set()

	if path.suffix != ".java":
		msg = f"Unsupported source file extension: {path}"
		raise UnsupportedSourceError(msg)

	package = ""
	with path.open(encoding="utf-8") as f:
		for line in f:
			stripped = line.strip()
			if stripped.startswith("package "):
				package = stripped.removeprefix("package ").rstrip(";").strip()
				break

	return {f"{package}.{path.stem}" if package else path.stem}


def discover_classes(paths: Iterable[Path]) -> dict[Path, set[str]]:
	"""
	Map source files to the classes they declare.

	Directories are walked recursively for ``*.java`` files. Paths that do
	not exist are skipped with a warning.

	Args:
	    paths: Source files or directories

	Returns:
	    Mapping of file to class names, without files that declare none

	"""
	found: dict[Path, set[str]] = {}
	for path in paths:
		if not path.exists():
			logger.warning("Source path %s does not exist, skipping", path)
			continue
		files = sorted(path.rglob("*.java")) if path.is_dir() else [path]
		for file in files:
			names = class_names_in_file(file)
			if names:
				found[file] = names
	logger.debug("Discovered %d source files", len(found))
	return found


def is_assertion_class(class_name: str) -> bool:
	simple_name = class_name.rpartition(".")[2]
	return simple_name.endswith(ASSERTION_CLASS_SUFFIXES)


def select_classes(class_names: Iterable[str], options: EffectiveOptions) -> tuple[list[str], list[str]]:
	"""
	Split class names into those to generate for and those excluded.

	Args:
	    class_names: Candidate fully qualified class names
	    options: Effective options with class and package filters

	Returns:
	    Tuple of (selected, excluded), each sorted

	"""
	selected: list[str] = []
	excluded: list[str] = []
	for name in sorted(set(class_names)):
		package = name.rpartition(".")[0]
		if is_assertion_class(name) or not options.classes.matches(name) or not options.packages.matches(package):
			excluded.append(name)
		else:
			selected.append(name)
	return selected, excluded


def load_generator(spec: str) -> AssertionGenerator:
	"""
	Import a generator from a ``module:attribute`` reference.

	If the attribute is callable but not itself a generator (a class or a
	factory function) it is called without arguments.

	Args:
	    spec: Reference such as ``mypkg.generators:JavaGenerator``

	Returns:
	    Generator instance

	Raises:
	    ValueError: If the reference is malformed or the object is not a generator

	"""
	module_name, sep, attribute = spec.partition(":")
	if not sep or not module_name or not attribute:
		msg = f"Generator must be given as 'module:attribute', got '{spec}'"
		raise ValueError(msg)

	module = importlib.import_module(module_name)
	try:
		target = getattr(module, attribute)
	except AttributeError as e:
		msg = f"Module '{module_name}' has no attribute '{attribute}'"
		raise ValueError(msg) from e

	if isinstance(target, type) or not isinstance(target, AssertionGenerator):
		if not callable(target):
			msg = f"'{spec}' is neither a generator nor a generator factory"
			raise ValueError(msg)
		target = target()

	if not isinstance(target, AssertionGenerator):
		msg = f"'{spec}' does not provide a generate(class_names, options) method"
		raise ValueError(msg)
	return target


class GenCommand:
	"""Runs the generator for every unit that is not skipped."""

	def __init__(self, generator: AssertionGenerator) -> None:
		"""
		Initialize the gen command.

		Args:
		    generator: External generator to delegate to

		"""
		self.generator = generator

	def execute(
		self,
		sources_by_unit: Mapping[str, Iterable[Path]],
		effective_by_unit: Mapping[str, EffectiveOptions],
	) -> list[GenerationReport]:
		"""
		Execute generation.

		Args:
		    sources_by_unit: Source files or directories per unit name
		    effective_by_unit: Resolved options per unit name

		Returns:
		    One report per unit that was not skipped

		"""
		reports: list[GenerationReport] = []
		for unit_name, options in effective_by_unit.items():
			if options.skip:
				logger.info("Skipping unit '%s'", unit_name)
				continue
			reports.append(self._run_unit(unit_name, sources_by_unit.get(unit_name, []), options))
		return reports

	def _run_unit(self, unit_name: str, sources: Iterable[Path], options: EffectiveOptions) -> GenerationReport:
		report = GenerationReport(
			unit_name=unit_name,
			output_dir=options.output_dir,
			user_templates=[f"{key} ({source.describe()})" for key, source in sorted(options.templates.items())],
		)
		try:
			classes_by_file = discover_classes(Path(source) for source in sources)
			all_classes = [name for names in classes_by_file.values() for name in names]
			report.input_classes = sorted(all_classes)
			selected, excluded = select_classes(all_classes, options)
			report.excluded_classes = excluded

			if not selected:
				logger.info("No classes selected for unit '%s'", unit_name)
				return report

			generated = self.generator.generate(selected, options)
			report.add_generated_files(*generated.assertion_files)
			for kind, path in generated.entry_point_files.items():
				report.report_entry_point(kind, path)
		except Exception as e:
			logger.exception("Generation failed for unit '%s'", unit_name)
			report.exception = e

		logger.info(report.render())
		return report
