"""Configuration for assertgen: file schema and loader."""

from .config_loader import ConfigError, ConfigFileNotFoundError, ConfigLoader, ConfigParsingError
from .config_schema import AppConfigSchema, NameFilterSchema, TemplateSourceSchema, UnitConfigSchema

__all__ = [
	"AppConfigSchema",
	"ConfigError",
	"ConfigFileNotFoundError",
	"ConfigLoader",
	"ConfigParsingError",
	"NameFilterSchema",
	"TemplateSourceSchema",
	"UnitConfigSchema",
]
