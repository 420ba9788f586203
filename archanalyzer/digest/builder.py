"""Builds the bounded structure digest handed to the model."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from ..config import AnalysisSettings
from ..logging import get_logger
from ..models import Digest, FileRef, FolderGroups

TREE_HEADER = "## Directory Tree"
KEY_FILES_HEADER = "## Key Files"

logger = get_logger("digest")


class DigestBuilder:
    """Groups discovered files into a tree listing and inlines key file contents."""

    def __init__(self, settings: AnalysisSettings | None = None) -> None:
        self.settings = settings or AnalysisSettings()

    def build(self, files: Sequence[FileRef]) -> Digest:
        """Return the digest for ``files`` in discovery order."""
        groups = self.group_by_folder(files)
        selected = self.select_key_files(files)
        inlined = self.inline_key_files(selected)
        logger.debug(
            "Digest built from %d files in %d folders; %d/%d key files inlined",
            len(files),
            len(groups),
            len(inlined),
            len(selected),
        )
        return Digest(
            tree=self.render_tree(groups),
            key_files=self._render_key_files(inlined),
            file_count=len(files),
            key_file_paths=tuple(path for path, _ in inlined),
        )

    @staticmethod
    def group_by_folder(files: Sequence[FileRef]) -> FolderGroups:
        groups: FolderGroups = {}
        for file in files:
            relative_path = file.relative_path
            folder = relative_path.split("/")[0]
            groups.setdefault(folder, []).append(relative_path)
        return groups

    def render_tree(self, groups: FolderGroups) -> str:
        limit = self.settings.max_files_per_folder
        lines = [TREE_HEADER, "```"]
        for folder, paths in groups.items():
            lines.append(f"📁 {folder}/")
            for path in paths[:limit]:
                lines.append(f"  └─ {path.split('/')[-1]}")
            if len(paths) > limit:
                lines.append(f"  └─ ... (+{len(paths) - limit} more files)")
        lines.append("```")
        return "\n".join(lines) + "\n\n"

    def select_key_files(self, files: Sequence[FileRef]) -> List[FileRef]:
        """Return the first ``max_key_files`` files whose path names a key file marker."""
        markers = tuple(marker.lower() for marker in self.settings.key_file_markers)
        selected: List[FileRef] = []
        for file in files:
            if len(selected) >= self.settings.max_key_files:
                break
            lowered = file.relative_path.lower()
            if any(marker in lowered for marker in markers):
                selected.append(file)
        return selected

    def inline_key_files(self, files: Sequence[FileRef]) -> List[tuple[str, str]]:
        """Read and truncate ``files``; unreadable files are dropped."""
        if not files:
            return []
        workers = max(1, self.settings.read_workers)
        if workers == 1 or len(files) == 1:
            contents = [self._read(file) for file in files]
        else:
            with ThreadPoolExecutor(max_workers=min(workers, len(files))) as pool:
                # map() yields in submission order regardless of completion order.
                contents = list(pool.map(self._read, files))
        return [
            (file.relative_path, content)
            for file, content in zip(files, contents)
            if content is not None
        ]

    def _read(self, file: FileRef) -> Optional[str]:
        try:
            raw = file.read_bytes()
        except OSError as exc:
            logger.debug("Skipping unreadable key file %s: %s", file.relative_path, exc)
            return None
        return raw.decode("utf-8", errors="replace")[: self.settings.max_chars_per_file]

    @staticmethod
    def _render_key_files(inlined: Sequence[tuple[str, str]]) -> str:
        parts = [f"{KEY_FILES_HEADER}\n\n"]
        for path, content in inlined:
            parts.append(f"### {path}\n```\n{content}\n```\n\n")
        return "".join(parts)


def build_digest(files: Sequence[FileRef], settings: AnalysisSettings | None = None) -> Digest:
    """Convenience wrapper around :class:`DigestBuilder`."""
    return DigestBuilder(settings).build(files)


__all__ = ["DigestBuilder", "KEY_FILES_HEADER", "TREE_HEADER", "build_digest"]
