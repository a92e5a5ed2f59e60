"""
Resolution of effective generation options.

Options exist at two scopes: project-wide defaults and per-unit overrides.
Each field resolves independently, falling back from the unit, to the
project, to the built-in default. The output directory template is then
materialised for the unit.

Resolution is a pure function of its inputs. It never reads template files,
never creates directories and never calls the generator.

"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import MappingProxyType
from typing import TypeVar

from .errors import UnresolvedPlaceholderError
from .models import (
	DEFAULT_ENTRY_POINT_KINDS,
	DEFAULT_OUTPUT_DIR_TEMPLATE,
	PLACEHOLDER_TOKEN,
	EffectiveOptions,
	GenerationOptions,
	ResolutionUnit,
)
from .patterns import NamePatternFilter
from .templates import DEFAULT_TEMPLATE_REGISTRY, TemplateRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SKIP = True
DEFAULT_HIERARCHICAL = False


def _first_set(*values: T | None, default: T) -> T:
	for value in values:
		if value is not None:
			return value
	return default


def materialize_output_dir(template: str, value: str) -> str:
	"""
	Substitute the unit placeholder in an output directory template.

	A template without the placeholder is returned unchanged, which means
	every unit shares that directory. That is left to the caller.

	Args:
	    template: Path template, possibly containing ``{unit}``
	    value: Unit-derived path segment

	Returns:
	    The materialised path

	Raises:
	    UnresolvedPlaceholderError: If the template has a placeholder but
	        ``value`` is empty

	"""
	if PLACEHOLDER_TOKEN not in template:
		return template
	if not value:
		msg = f"Output directory '{template}' needs a unit name for {PLACEHOLDER_TOKEN}, but none was given"
		raise UnresolvedPlaceholderError(msg)
	return template.replace(PLACEHOLDER_TOKEN, value)


def resolve(
	unit: ResolutionUnit,
	project_defaults: GenerationOptions,
	registry: TemplateRegistry = DEFAULT_TEMPLATE_REGISTRY,
) -> EffectiveOptions:
	"""
	Resolve the effective options for one unit.

	Args:
	    unit: The unit to resolve, with its own options
	    project_defaults: Project-wide options
	    registry: Template kinds the generator understands

	Returns:
	    Immutable effective options

	Raises:
	    InvalidTemplateError: If a template override is not in ``registry``
	    UnresolvedPlaceholderError: If the output template needs a unit name
	        and the unit has none

	"""
	local = unit.options

	skip = _first_set(local.skip, project_defaults.skip, default=DEFAULT_SKIP)
	if skip:
		logger.debug("Unit '%s' is skipped", unit.name)
		return EffectiveOptions.skipped(unit.name)

	# An empty selection counts as unset so the result is never empty
	entry_point_kinds = _first_set(
		local.entry_point_kinds or None,
		project_defaults.entry_point_kinds or None,
		default=DEFAULT_ENTRY_POINT_KINDS,
	)

	templates = local.templates.merged_over(project_defaults.templates)
	registry.validate(templates)

	output_template = _first_set(
		local.output_dir_template,
		project_defaults.output_dir_template,
		default=DEFAULT_OUTPUT_DIR_TEMPLATE,
	)

	effective = EffectiveOptions(
		unit_name=unit.name,
		skip=False,
		hierarchical=_first_set(local.hierarchical, project_defaults.hierarchical, default=DEFAULT_HIERARCHICAL),
		entry_point_kinds=frozenset(entry_point_kinds),
		templates=MappingProxyType(templates),
		output_dir=materialize_output_dir(output_template, unit.placeholder_value),
		entry_point_package=_first_set(local.entry_point_package, project_defaults.entry_point_package, default=None),
		classes=_first_set(local.classes, project_defaults.classes, default=NamePatternFilter()),
		packages=_first_set(local.packages, project_defaults.packages, default=NamePatternFilter()),
	)
	logger.debug("Resolved options for unit '%s': %s", unit.name, effective)
	return effective


def resolve_all(
	units: Iterable[ResolutionUnit],
	project_defaults: GenerationOptions,
	registry: TemplateRegistry = DEFAULT_TEMPLATE_REGISTRY,
) -> dict[str, EffectiveOptions]:
	"""Resolve every unit independently, keyed by unit name."""
	return {unit.name: resolve(unit, project_defaults, registry) for unit in units}
