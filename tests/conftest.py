"""Global test fixtures and configuration."""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path

import pytest

from assertgen.gen import EffectiveOptions, GeneratedFiles, GenerationOptions


class RecordingGenerator:
	"""Generator double that records calls and pretends to write files."""

	def __init__(self) -> None:
		self.calls: list[tuple[list[str], EffectiveOptions]] = []

	def generate(self, class_names: list[str], options: EffectiveOptions) -> GeneratedFiles:
		self.calls.append((class_names, options))
		output_dir = Path(options.output_dir or ".")
		return GeneratedFiles(
			assertion_files=[output_dir / f"{name.replace('.', '/')}Assert.java" for name in class_names],
			entry_point_files={kind: output_dir / kind.file_name for kind in options.entry_point_kinds},
		)


def write_java(root: Path, package: str | None, class_name: str) -> Path:
	"""Write a minimal Java source file and return its path."""
	directory = root.joinpath(*package.split(".")) if package else root
	directory.mkdir(parents=True, exist_ok=True)
	header = f"package {package};\n\n" if package else ""
	path = directory / f"{class_name}.java"
	path.write_text(header + f"public class {class_name} {{}}\n", encoding="utf-8")
	return path


@pytest.fixture
def enabled_project() -> GenerationOptions:
	"""Project options with generation switched on."""
	return GenerationOptions().set_skip(False)


@pytest.fixture
def java_sources(tmp_path: Path) -> Path:
	"""A small Java source tree with two packages, an existing Assert class and package-info."""
	root = tmp_path / "src" / "main" / "java"
	write_java(root, "org.example.hello", "HelloWorld")
	write_java(root, "org.example.hello.sub", "SubWorld")
	write_java(root, "org.example.other", "OtherWorld")
	write_java(root, "org.example.hello", "HelloWorldAssert")
	(root / "org" / "example" / "hello" / "package-info.java").write_text(
		"package org.example.hello;\n", encoding="utf-8"
	)
	return root


@pytest.fixture
def write_config(tmp_path: Path):
	"""Write an .assertgen.yml into the temporary directory."""

	def _write(content: str) -> Path:
		path = tmp_path / ".assertgen.yml"
		path.write_text(textwrap.dedent(content), encoding="utf-8")
		return path

	return _write


@pytest.fixture
def recording_generator() -> RecordingGenerator:
	return RecordingGenerator()


@pytest.fixture(autouse=True)
def reset_root_logger():
	"""The CLI reconfigures the root logger; restore it after every test."""
	root_logger = logging.getLogger()
	handlers = root_logger.handlers[:]
	level = root_logger.level
	yield
	root_logger.handlers[:] = handlers
	root_logger.setLevel(level)
