"""Pipeline orchestration for a single architecture analysis run."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .analyzer import AnalysisRequester
from .config import AnalysisSettings, ArchAnalyzerConfig, load_config
from .digest.builder import DigestBuilder
from .errors import AnalysisError, ConfigurationError
from .host import Host
from .logging import get_logger
from .models import AnalysisResult, FileRef
from .repo_scanner import RepoScanner


class Orchestrator:
    """Runs scan -> digest -> provider request and hands the outcome to a host."""

    def __init__(
        self,
        scanner: RepoScanner | None = None,
        digest_builder: DigestBuilder | None = None,
        requester: AnalysisRequester | None = None,
        settings: AnalysisSettings | None = None,
    ) -> None:
        self._scanner = scanner
        self._digest_builder = digest_builder
        self._requester = requester
        self._settings = settings
        self.logger = get_logger("orchestrator")

    def run_path(
        self,
        path: str | Path | None,
        host: Host,
        *,
        api_key: str | None = None,
        provider: str | None = None,
    ) -> Optional[AnalysisResult]:
        """Analyse the project at ``path``; returns None when cancelled."""
        try:
            if not path:
                raise ConfigurationError("No project is open. Provide a project path to analyse.")
            repo_path = Path(path).expanduser().resolve()
            config = self._load_config(repo_path)
        except ConfigurationError as exc:
            return self._deliver(host, AnalysisResult.failure(exc))

        credential = config.resolve_api_key(api_key)
        provider_name = config.resolve_provider(provider)
        if not credential:
            return self._deliver(host, self._missing_credential())

        settings = config.settings(self._settings)
        self.logger.info("Starting analysis of %s with provider %s", repo_path, provider_name)
        try:
            host.report_progress("Scanning files...")
            scanner = self._scanner or RepoScanner(
                include_extensions=config.scan.include_extensions,
                exclude_paths=config.scan.exclude_paths,
            )
            files = scanner.scan(repo_path)
        except FileNotFoundError:
            raise
        except NotADirectoryError as exc:
            return self._deliver(host, AnalysisResult.failure(ConfigurationError(str(exc))))
        except Exception as exc:
            return self._deliver(host, self._unexpected(exc))

        return self.run(host, files, credential, provider_name, settings=settings)

    def run(
        self,
        host: Host,
        files: Sequence[FileRef],
        credential: str,
        provider: str,
        *,
        settings: AnalysisSettings | None = None,
    ) -> Optional[AnalysisResult]:
        """Build the digest for ``files`` and request the report."""
        if not credential:
            return self._deliver(host, self._missing_credential())

        effective = settings or self._settings or AnalysisSettings()
        builder = self._digest_builder or DigestBuilder(effective)
        requester = self._requester or AnalysisRequester(effective)

        try:
            if host.is_cancelled():
                return self._cancelled()
            host.report_progress(f"Reading {len(files)} files...")
            digest = builder.build(files)
            self.logger.debug(
                "Digest ready: %d characters, key files %s",
                len(digest.text),
                ", ".join(digest.key_file_paths) or "(none)",
            )

            if host.is_cancelled():
                return self._cancelled()
            host.report_progress("Analysing with AI...")
            result = requester.analyze(digest, credential, provider)

            if host.is_cancelled():
                return self._cancelled()
        except Exception as exc:
            result = self._unexpected(exc)

        return self._deliver(host, result)

    def _load_config(self, repo_path: Path) -> ArchAnalyzerConfig:
        if repo_path.is_dir():
            return load_config(repo_path)
        return ArchAnalyzerConfig(root=repo_path)

    def _deliver(self, host: Host, result: AnalysisResult) -> AnalysisResult:
        if not result.ok:
            host.show_error(result.message)
            return result
        try:
            host.show_result(result.text or "")
        except OSError as exc:
            self.logger.error("Could not deliver report: %s", exc)
            failure = AnalysisResult.failure(AnalysisError(f"Could not write report: {exc}"))
            host.show_error(failure.message)
            return failure
        self.logger.info("Analysis complete")
        return result

    def _cancelled(self) -> None:
        self.logger.info("Analysis cancelled; no report delivered")
        return None

    @staticmethod
    def _missing_credential() -> AnalysisResult:
        return AnalysisResult.failure(
            ConfigurationError("Configure your API key before running an analysis.")
        )

    def _unexpected(self, exc: Exception) -> AnalysisResult:
        self.logger.debug("Analysis failed with an unexpected error", exc_info=exc)
        self.logger.error("Analysis failed: %s", exc)
        return AnalysisResult.failure(AnalysisError(f"Analysis failed: {exc}"))


__all__ = ["Orchestrator"]
