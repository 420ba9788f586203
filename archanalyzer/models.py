"""Core data models shared across archanalyzer components."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Protocol, runtime_checkable

from .errors import AnalysisError

FolderGroups = Dict[str, List[str]]


@runtime_checkable
class FileRef(Protocol):
    """Handle to a discovered project file."""

    @property
    def relative_path(self) -> str:
        """Slash-separated path relative to the project root."""

    def read_bytes(self) -> bytes:
        """Return the raw file content; may raise OSError."""


@dataclass(frozen=True)
class LocalFileRef:
    """FileRef backed by a file on the local filesystem."""

    root: Path
    relative_path: str

    @property
    def path(self) -> Path:
        return self.root / self.relative_path

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass(frozen=True)
class Digest:
    """Bounded textual summary of a project's layout and key files."""

    tree: str
    key_files: str
    file_count: int = 0
    key_file_paths: tuple[str, ...] = ()

    HEADER = "# Project Structure"

    @property
    def text(self) -> str:
        return f"{self.HEADER}\n\n{self.tree}{self.key_files}"

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class AnalysisRequest:
    """Inputs for a single provider round trip."""

    provider: str
    credential: str
    digest: Digest


@dataclass(frozen=True)
class AnalysisResult:
    """Terminal outcome of an analysis: report text or a classified error."""

    text: Optional[str] = None
    error: Optional[AnalysisError] = None

    @classmethod
    def success(cls, text: str) -> "AnalysisResult":
        return cls(text=text)

    @classmethod
    def failure(cls, error: AnalysisError) -> "AnalysisResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        """Human-readable summary suitable for an error display."""
        if self.error is None:
            return ""
        return str(self.error)


__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "Digest",
    "FileRef",
    "FolderGroups",
    "LocalFileRef",
]
