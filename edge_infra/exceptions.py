"""Errors raised while building the edge resource graph."""


class EdgeInfraError(Exception):
  """Base exception for edge infrastructure errors."""


class ConfigurationError(EdgeInfraError):
  """A required field is missing or a combination of fields is invalid."""


class ImportResolutionError(EdgeInfraError):
  """An external identifier is malformed or cannot be referenced."""
