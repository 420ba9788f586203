"""Sends a project digest to the configured provider and classifies the outcome."""

from __future__ import annotations

from typing import Mapping

from .config import AnalysisSettings
from .errors import AnalysisError, ConfigurationError
from .llm import ProviderFactory, resolve_provider
from .logging import get_logger
from .models import AnalysisRequest, AnalysisResult, Digest
from .prompting.builder import PromptBuilder

logger = get_logger("analyzer")


class AnalysisRequester:
    """Composes the report prompt and performs one provider round trip."""

    def __init__(
        self,
        settings: AnalysisSettings | None = None,
        *,
        prompt_builder: PromptBuilder | None = None,
        providers: Mapping[str, ProviderFactory] | None = None,
    ) -> None:
        self.settings = settings or AnalysisSettings()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self._providers = providers

    def analyze(self, digest: Digest, credential: str, provider: str) -> AnalysisResult:
        """Return the report for ``digest`` or a classified failure."""
        return self.run(AnalysisRequest(provider=provider, credential=credential, digest=digest))

    def run(self, request: AnalysisRequest) -> AnalysisResult:
        try:
            if not request.credential:
                raise ConfigurationError("Configure your API key before running an analysis.")
            strategy = resolve_provider(request.provider, self.settings, self._providers)
            messages = self.prompt_builder.build_messages(request.digest)
            logger.debug(
                "Requesting %s analysis (%d prompt characters)",
                request.provider,
                len(messages[-1].content),
            )
            text = strategy.complete(messages, request.credential)
        except AnalysisError as exc:
            logger.error("Analysis request failed (%s): %s", exc.kind, exc)
            return AnalysisResult.failure(exc)
        return AnalysisResult.success(text)


def analyze(
    digest: Digest,
    credential: str,
    provider: str,
    settings: AnalysisSettings | None = None,
) -> AnalysisResult:
    """Convenience wrapper around :class:`AnalysisRequester`."""
    return AnalysisRequester(settings).analyze(digest, credential, provider)


__all__ = ["AnalysisRequester", "analyze"]
