"""
Assertion generation configuration package for assertgen.

This package holds the options model, the resolver that merges project and
unit options, and the command that hands resolved options to an external
generator.

"""

from .command import AssertionGenerator, GenCommand, GeneratedFiles, discover_classes, load_generator
from .errors import (
	AssertgenError,
	InvalidConfigurationError,
	InvalidTemplateError,
	UnresolvedPlaceholderError,
	UnsupportedSourceError,
)
from .models import EffectiveOptions, EntryPointKind, GenerationOptions, ResolutionUnit
from .patterns import NamePatternFilter
from .report import GenerationReport
from .resolver import resolve, resolve_all
from .templates import DEFAULT_TEMPLATE_REGISTRY, TemplateRegistry, TemplateSet, TemplateSource

__all__ = [
	"DEFAULT_TEMPLATE_REGISTRY",
	# Protocols
	"AssertionGenerator",
	# Errors
	"AssertgenError",
	# Classes
	"EffectiveOptions",
	# Enums
	"EntryPointKind",
	"GenCommand",
	"GeneratedFiles",
	"GenerationOptions",
	"GenerationReport",
	"InvalidConfigurationError",
	"InvalidTemplateError",
	"NamePatternFilter",
	"ResolutionUnit",
	"TemplateRegistry",
	"TemplateSet",
	"TemplateSource",
	"UnresolvedPlaceholderError",
	"UnsupportedSourceError",
	# Functions
	"discover_classes",
	"load_generator",
	"resolve",
	"resolve_all",
]
