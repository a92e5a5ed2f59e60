"""Exceptions raised while configuring and resolving generation options."""

from __future__ import annotations

from collections.abc import Iterable


class AssertgenError(Exception):
	"""Base class for assertgen errors."""


class InvalidConfigurationError(AssertgenError):
	"""Raised when a configuration value cannot be translated into a typed option."""

	def __init__(self, token: str, valid_names: Iterable[str]) -> None:
		"""
		Initialize the error.

		Args:
		    token: The offending input value
		    valid_names: Names that would have been accepted

		"""
		self.token = token
		self.valid_names = list(valid_names)
		super().__init__(f"Unknown entry point '{token}'. Valid names are: {', '.join(self.valid_names)}")


class InvalidTemplateError(AssertgenError):
	"""Raised when a template override does not match any known template kind."""

	def __init__(self, key: str, known_keys: Iterable[str]) -> None:
		self.key = key
		self.known_keys = sorted(known_keys)
		super().__init__(f"Unknown template '{key}'. Known templates are: {', '.join(self.known_keys)}")


class UnresolvedPlaceholderError(AssertgenError):
	"""Raised when an output path template needs a unit name that is not available."""


class UnsupportedSourceError(AssertgenError):
	"""Raised when a source file cannot be mapped to class names."""
