"""Command for showing the effective generation options of each unit."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
	from assertgen.gen.models import EffectiveOptions

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
	"""How resolved options are printed."""

	TABLE = "table"
	YAML = "yaml"


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
		help="Only resolve this unit (repeatable)",
	),
]

FormatOpt = Annotated[
	OutputFormat,
	typer.Option(
		"--format",
		"-f",
		help="Output format",
		case_sensitive=False,
	),
]


def register_command(app: typer.Typer) -> None:
	"""Register the resolve command with the CLI app."""

	@app.command(name="resolve")
	def resolve_command(
		config: ConfigOpt = None,
		units: UnitOpt = None,
		output_format: FormatOpt = OutputFormat.TABLE,
	) -> None:
		"""
		Show the effective generation options for each unit.

		Project-wide options are merged with each unit's overrides and the
		output directory is materialised for the unit.

		"""
		_resolve_command_impl(config=config, units=units, output_format=output_format)


def load_effective_options(
	config: Path | None, units: list[str] | None
) -> tuple[dict[str, list[Path]], dict[str, EffectiveOptions]]:
	"""
	Load the configuration and resolve every selected unit.

	Args:
	    config: Explicit configuration file, or None to search the default locations
	    units: Unit names to resolve, or None for all

	Returns:
	    Tuple of (sources per unit, effective options per unit)

	Raises:
	    ConfigError: If the configuration file cannot be used
	    AssertgenError: If an option cannot be resolved

	"""
	from assertgen.config import ConfigLoader
	from assertgen.gen.resolver import resolve_all

	loader = ConfigLoader(config_file=config)
	project_options = loader.project_options()
	resolution_units = loader.units(units)
	sources = {unit.name: unit.sources for unit in resolution_units}
	return sources, resolve_all(resolution_units, project_options)


def _render_table(effective_by_unit: dict[str, EffectiveOptions]) -> None:
	from rich.markup import escape
	from rich.table import Table

	from assertgen.utils.cli_utils import console

	table = Table(title="Effective generation options")
	for column in ("Unit", "Skip", "Hierarchical", "Entry points", "Package", "Output dir", "Templates"):
		table.add_column(column)

	for name, options in effective_by_unit.items():
		data = options.as_dict()
		cells = (
			name,
			str(options.skip),
			str(options.hierarchical),
			", ".join(data["entry_points"]),  # type: ignore[arg-type]
			options.entry_point_package or "-",
			options.output_dir or "-",
			", ".join(options.templates) or "-",
		)
		table.add_row(*(escape(cell) for cell in cells))
	console.print(table)


def _resolve_command_impl(config: Path | None, units: list[str] | None, output_format: OutputFormat) -> None:
	"""Actual implementation of the resolve command."""
	import yaml

	from assertgen.config import ConfigError
	from assertgen.gen.errors import AssertgenError
	from assertgen.utils.cli_utils import exit_with_error

	try:
		_, effective_by_unit = load_effective_options(config, units)
	except (ConfigError, AssertgenError) as e:
		logger.debug("Resolution failed", exc_info=True)
		exit_with_error(f"Configuration error: {e}", exception=e)
		return

	if output_format is OutputFormat.YAML:
		payload = {name: options.as_dict() for name, options in effective_by_unit.items()}
		typer.echo(yaml.safe_dump(payload, sort_keys=False))
	else:
		_render_table(effective_by_unit)
