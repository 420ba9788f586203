"""Chat-completion provider strategies keyed by provider identifier."""

from __future__ import annotations

from typing import Callable, Dict, Mapping

from ..config import AnalysisSettings
from ..errors import UnsupportedProviderError
from .base import ChatProvider
from .runner import OpenAIChatProvider

ProviderFactory = Callable[[AnalysisSettings], ChatProvider]

_BUILTIN_PROVIDERS: Dict[str, ProviderFactory] = {
    "openai": OpenAIChatProvider,
}


def default_providers() -> Dict[str, ProviderFactory]:
    """Return a fresh copy of the built-in provider registry."""
    return dict(_BUILTIN_PROVIDERS)


def resolve_provider(
    name: str,
    settings: AnalysisSettings,
    providers: Mapping[str, ProviderFactory] | None = None,
) -> ChatProvider:
    """Instantiate the provider registered under ``name``."""
    registry = _BUILTIN_PROVIDERS if providers is None else providers
    factory = registry.get(name)
    if factory is None:
        raise UnsupportedProviderError(name)
    instance = factory(settings)
    if not isinstance(instance, ChatProvider):
        raise TypeError(f"Provider factory for '{name}' did not return a ChatProvider instance")
    return instance


__all__ = [
    "ChatProvider",
    "OpenAIChatProvider",
    "ProviderFactory",
    "default_providers",
    "resolve_provider",
]
