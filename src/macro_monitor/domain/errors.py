"""Errors raised by the resolution pipeline."""


class ConfigurationError(RuntimeError):
    """A required external-service credential is missing."""


class UpstreamError(RuntimeError):
    """An external collaborator failed or returned an unusable payload."""
