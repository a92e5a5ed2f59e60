"""
Implementation of the gen command.

The command resolves the effective options of every configured unit and
hands them, together with the unit's source classes, to an external
assertion generator.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

logger = logging.getLogger(__name__)

GeneratorOpt = Annotated[
	str,
	typer.Option(
		"--generator",
		"-g",
		help="Generator to run, as 'module:attribute'",
		envvar="ASSERTGEN_GENERATOR",
	),
]

ConfigOpt = Annotated[
	Path | None,
	typer.Option(
		"--config",
		"-c",
		help="Path to config file",
	),
]

UnitOpt = Annotated[
	list[str] | None,
	typer.Option(
		"--unit",
		"-u",
		help="Only generate for this unit (repeatable)",
	),
]


def register_command(app: typer.Typer) -> None:
	"""Register the gen command with the CLI app."""

	@app.command(name="gen")
	def gen_command(
		generator: GeneratorOpt,
		config: ConfigOpt = None,
		units: UnitOpt = None,
	) -> None:
		"""
		Generate assertion classes for every configured unit.

		Units whose effective 'skip' is true are left alone.

		Examples:
		        assertgen gen -g mypkg.generator:JavaGenerator
		        assertgen gen -g mypkg.generator:JavaGenerator -u main

		"""
		_gen_command_impl(generator_spec=generator, config=config, units=units)


def _gen_command_impl(generator_spec: str, config: Path | None, units: list[str] | None) -> None:
	"""Actual implementation of the gen command."""
	from assertgen.config import ConfigError
	from assertgen.gen.command import GenCommand, load_generator
	from assertgen.gen.errors import AssertgenError
	from assertgen.utils.cli_utils import console, exit_with_error, handle_keyboard_interrupt

	from .resolve_cmd import load_effective_options

	try:
		sources_by_unit, effective_by_unit = load_effective_options(config, units)
	except (ConfigError, AssertgenError) as e:
		exit_with_error(f"Configuration error: {e}", exception=e)
		return

	try:
		generator = load_generator(generator_spec)
	except (ImportError, ValueError) as e:
		exit_with_error(f"Could not load generator '{generator_spec}': {e}", exception=e)
		return

	try:
		reports = GenCommand(generator).execute(sources_by_unit, effective_by_unit)
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
		return

	for report in reports:
		typer.echo(report.render())

	failed = [report.unit_name for report in reports if report.is_error]
	if failed:
		exit_with_error(f"Generation failed for unit(s): {', '.join(failed)}")

	skipped = len(effective_by_unit) - len(reports)
	console.print(f"[green]Generation completed for {len(reports)} unit(s), {skipped} skipped.[/green]")
