"""Configuration loading for archanalyzer (.archanalyzer.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigurationError

CONFIG_FILENAME = ".archanalyzer.yml"

DEFAULT_PROVIDER = "openai"

DEFAULT_KEY_FILE_MARKERS: tuple[str, ...] = (
    "package.json",
    "tsconfig",
    "docker",
    "readme",
    "prisma",
    ".env.example",
)

DEFAULT_INCLUDE_EXTENSIONS: tuple[str, ...] = (
    "ts",
    "tsx",
    "js",
    "jsx",
    "py",
    "java",
    "go",
    "rs",
    "json",
    "md",
    "yml",
    "yaml",
    "sql",
    "prisma",
)

DEFAULT_EXCLUDE_PATHS: tuple[str, ...] = (
    "node_modules/",
    "dist/",
    "build/",
    ".next/",
    "venv/",
    "__pycache__/",
)

ENV_API_KEY_KEYS = ("ARCHANALYZER_API_KEY", "OPENAI_API_KEY")
ENV_PROVIDER_KEYS = ("ARCHANALYZER_PROVIDER",)


class ConfigError(ConfigurationError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class AnalysisSettings:
    """Limits and model parameters used by the digest builder and requester."""

    max_files_per_folder: int = 10
    max_key_files: int = 15
    max_chars_per_file: int = 2000
    key_file_markers: tuple[str, ...] = DEFAULT_KEY_FILE_MARKERS
    read_workers: int = 4
    model: str = "gpt-4o"
    temperature: float = 0.7
    max_tokens: int = 4000
    base_url: str = "https://api.openai.com/v1"
    request_timeout: Optional[float] = None


@dataclass
class LLMConfig:
    """LLM settings from .archanalyzer.yml."""

    api_key: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    base_url: Optional[str] = None
    request_timeout: Optional[float] = None


@dataclass
class DigestConfig:
    """Digest caps and importance markers."""

    max_files_per_folder: Optional[int] = None
    max_key_files: Optional[int] = None
    max_chars_per_file: Optional[int] = None
    key_file_markers: List[str] = field(default_factory=list)
    read_workers: Optional[int] = None


@dataclass
class ScanConfig:
    """File discovery include/exclude policy."""

    include_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_EXTENSIONS))
    exclude_paths: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATHS))


@dataclass
class ArchAnalyzerConfig:
    """Represents the settings defined in .archanalyzer.yml."""

    root: Path
    provider: Optional[str] = None
    llm: LLMConfig = field(default_factory=LLMConfig)
    digest: DigestConfig = field(default_factory=DigestConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)

    def settings(self, base: AnalysisSettings | None = None) -> AnalysisSettings:
        """Overlay configured values onto ``base`` (defaults when omitted)."""
        overrides: Dict[str, Any] = {
            "model": self.llm.model,
            "temperature": self.llm.temperature,
            "max_tokens": self.llm.max_tokens,
            "base_url": self.llm.base_url,
            "request_timeout": self.llm.request_timeout,
            "max_files_per_folder": self.digest.max_files_per_folder,
            "max_key_files": self.digest.max_key_files,
            "max_chars_per_file": self.digest.max_chars_per_file,
            "read_workers": self.digest.read_workers,
        }
        if self.digest.key_file_markers:
            overrides["key_file_markers"] = tuple(self.digest.key_file_markers)
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(base or AnalysisSettings(), **values)

    def resolve_api_key(self, explicit: str | None = None) -> str:
        """Return the credential from the flag, config file, or environment."""
        if explicit:
            return explicit
        if self.llm.api_key:
            return self.llm.api_key
        return _first_env_value(ENV_API_KEY_KEYS) or ""

    def resolve_provider(self, explicit: str | None = None) -> str:
        if explicit:
            return explicit
        if self.provider:
            return self.provider
        return _first_env_value(ENV_PROVIDER_KEYS) or DEFAULT_PROVIDER


def load_config(config_path: Path) -> ArchAnalyzerConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ArchAnalyzerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    llm_data = _as_dict(data.get("llm"))
    llm = LLMConfig(
        api_key=_as_str(llm_data.get("api_key")),
        model=_as_str(llm_data.get("model")),
        temperature=_as_float(llm_data.get("temperature")),
        max_tokens=_as_int(llm_data.get("max_tokens")),
        base_url=_as_str(llm_data.get("base_url")),
        request_timeout=_as_float(llm_data.get("request_timeout")),
    )

    digest_data = _as_dict(data.get("digest"))
    digest = DigestConfig(
        max_files_per_folder=_as_int(digest_data.get("max_files_per_folder")),
        max_key_files=_as_int(digest_data.get("max_key_files")),
        max_chars_per_file=_as_int(digest_data.get("max_chars_per_file")),
        key_file_markers=_as_str_list(digest_data.get("key_file_markers")),
        read_workers=_as_int(digest_data.get("read_workers")),
    )

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    if "include_extensions" in scan_data:
        scan.include_extensions = [
            ext.lstrip(".").lower() for ext in _as_str_list(scan_data.get("include_extensions"))
        ]
    if "exclude_paths" in scan_data:
        scan.exclude_paths = _as_str_list(scan_data.get("exclude_paths"))

    return ArchAnalyzerConfig(
        root=root,
        provider=_as_str(data.get("provider")),
        llm=llm,
        digest=digest,
        scan=scan,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _first_env_value(keys: Sequence[str]) -> str | None:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "AnalysisSettings",
    "ArchAnalyzerConfig",
    "ConfigError",
    "DigestConfig",
    "LLMConfig",
    "ScanConfig",
    "load_config",
]
