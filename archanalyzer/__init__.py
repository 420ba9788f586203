"""Project structure digests and LLM architecture reports."""

from .analyzer import AnalysisRequester, analyze
from .config import AnalysisSettings, load_config
from .digest import DigestBuilder, build_digest
from .errors import AnalysisError, ConfigurationError, ProviderError, UnsupportedProviderError
from .models import AnalysisResult, Digest, FileRef, LocalFileRef
from .orchestrator import Orchestrator

__version__ = "0.1.0"

__all__ = [
    "AnalysisError",
    "AnalysisRequester",
    "AnalysisResult",
    "AnalysisSettings",
    "ConfigurationError",
    "Digest",
    "DigestBuilder",
    "FileRef",
    "LocalFileRef",
    "Orchestrator",
    "ProviderError",
    "UnsupportedProviderError",
    "analyze",
    "build_digest",
    "load_config",
]
