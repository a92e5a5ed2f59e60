"""
Configuration loader for assertgen.

This module locates the configuration file, parses it and turns it into
project-level options and resolution units.

"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from xdg.BaseDirectory import xdg_config_home

from assertgen.config.config_schema import AppConfigSchema
from assertgen.gen.models import GenerationOptions, ResolutionUnit

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".assertgen.yml"


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigFileNotFoundError(ConfigError):
	"""Exception raised when configuration file is not found."""


class ConfigParsingError(ConfigError):
	"""Exception raised when configuration file cannot be parsed."""


class ConfigLoader:
	"""
	Loads the assertgen configuration file into a validated schema.

	The loader is created once per invocation and passed to whatever needs
	the configuration; there is no shared instance.

	"""

	def __init__(self, config_file: Path | None = None, repo_root: Path | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
			config_file: Path to configuration file (optional)
			repo_root: Directory relative paths are resolved against when
				no configuration file is found (defaults to the current directory)

		"""
		self.repo_root = repo_root or Path.cwd()
		self._resolved_config_file = self._resolve_config_file(config_file)
		self._app_config = self._load_config()
		logger.debug("ConfigLoader initialized from %s", self._resolved_config_file or "defaults")

	@property
	def config_file(self) -> Path | None:
		return self._resolved_config_file

	@property
	def base_dir(self) -> Path:
		"""Directory that relative paths in the configuration are resolved against."""
		if self._resolved_config_file is not None:
			return self._resolved_config_file.parent
		return self.repo_root

	def _resolve_config_file(self, config_file: Path | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. .assertgen.yml in the repository root
		2. $XDG_CONFIG_HOME/assertgen/config.yml
		3. ~/.assertgen/config.yml

		Args:
			config_file: Explicitly provided config file path (optional)

		Returns:
			Optional[Path]: Resolved config file path or None if no suitable file found

		Raises:
			ConfigFileNotFoundError: If an explicitly given file does not exist

		"""
		if config_file:
			path = config_file.expanduser().resolve()
			if path.exists():
				return path
			msg = f"Configuration file not found: {path}"
			raise ConfigFileNotFoundError(msg)

		local_config = self.repo_root / CONFIG_FILE_NAME
		if local_config.exists():
			return local_config

		xdg_config_file = Path(xdg_config_home) / "assertgen" / "config.yml"
		if xdg_config_file.exists():
			return xdg_config_file

		home_config = Path.home() / ".assertgen" / "config.yml"
		if home_config.exists():
			return home_config

		return None

	@staticmethod
	def _parse_yaml_file(file_path: Path) -> dict[str, Any]:
		"""
		Parse a YAML file.

		Args:
			file_path: Path to the YAML file to parse

		Returns:
			Parsed YAML content as a dictionary

		Raises:
			yaml.YAMLError: If the file cannot be parsed as valid YAML
		"""
		with file_path.open(encoding="utf-8") as f:
			content = yaml.safe_load(f)
			if content is None:  # Empty file
				return {}
			if not isinstance(content, dict):
				msg = f"File {file_path} does not contain a valid YAML dictionary"
				raise yaml.YAMLError(msg)
			return content

	def _load_config(self) -> AppConfigSchema:
		"""
		Load configuration from file and parse it into AppConfigSchema.

		Returns:
			AppConfigSchema: Loaded and parsed configuration.

		Raises:
			ConfigParsingError: If configuration file exists but cannot be loaded or parsed.

		"""
		file_config_dict: dict[str, Any] = {}
		if self._resolved_config_file:
			try:
				file_config_dict = self._parse_yaml_file(self._resolved_config_file)
				logger.info("Loaded configuration from %s", self._resolved_config_file)
			except yaml.YAMLError as e:
				msg = f"Configuration file {self._resolved_config_file} is not valid YAML: {e}"
				logger.exception(msg)
				raise ConfigParsingError(msg) from e
			except OSError as e:
				msg = f"Error accessing configuration file {self._resolved_config_file}: {e}"
				logger.exception(msg)
				raise ConfigParsingError(msg) from e
		else:
			logger.info("No configuration file specified or found. Using default configuration.")

		try:
			return AppConfigSchema(**file_config_dict)
		except ValidationError as e:
			msg = f"Error parsing configuration into schema: {e}"
			logger.exception(msg)
			raise ConfigParsingError(msg) from e

	@property
	def get(self) -> AppConfigSchema:
		"""
		Get the current application configuration.

		Returns:
			AppConfigSchema: The current configuration
		"""
		return self._app_config

	def project_options(self) -> GenerationOptions:
		"""
		Build the project-level options.

		Raises:
			InvalidConfigurationError: If an entry point name is unknown

		"""
		return self._app_config.to_options(self.base_dir)

	def units(self, names: list[str] | None = None) -> list[ResolutionUnit]:
		"""
		Build the configured resolution units.

		Args:
			names: Only return these units (all units when None)

		Returns:
			Units in configuration order

		Raises:
			ConfigError: If a requested unit is not configured
			InvalidConfigurationError: If an entry point name is unknown

		"""
		configured = self._app_config.units
		if names:
			missing = [name for name in names if name not in configured]
			if missing:
				msg = f"Unknown unit(s): {', '.join(missing)}. Configured units: {', '.join(configured)}"
				raise ConfigError(msg)
			selected = {name: configured[name] for name in names}
		else:
			selected = configured
		return [schema.to_unit(name, self.base_dir) for name, schema in selected.items()]
