"""Classified failures surfaced by an analysis run."""

from __future__ import annotations


class AnalysisError(RuntimeError):
    """Base class for failures that end an analysis run."""

    kind = "analysis"


class ConfigurationError(AnalysisError):
    """Raised when a run is missing a credential, a project, or valid settings."""

    kind = "configuration"


class UnsupportedProviderError(AnalysisError):
    """Raised when no provider strategy is registered for an identifier."""

    kind = "unsupported_provider"

    def __init__(self, provider: str) -> None:
        super().__init__(f"Provider '{provider}' is not supported yet. Use \"openai\".")
        self.provider = provider


class ProviderError(AnalysisError):
    """Raised when the model provider rejects or fails a request."""

    kind = "provider"

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


__all__ = [
    "AnalysisError",
    "ConfigurationError",
    "ProviderError",
    "UnsupportedProviderError",
]
