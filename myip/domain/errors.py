"""Domain error hierarchy for clean exception handling."""
from __future__ import annotations


class DomainError(Exception):
    """Base for all domain errors."""


class BackendUnavailableError(DomainError):
    """Key-value backend is unreachable or failed to execute a command."""


class CacheDecodeError(DomainError):
    """Stored cache payload could not be decoded."""


class RegistryLookupError(DomainError):
    """Registry (RDAP) lookup failed."""


class ConfigurationError(DomainError):
    """Settings are invalid for the requested wiring."""
