"""Project file discovery honoring include extensions and exclude rules."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .config import DEFAULT_EXCLUDE_PATHS, DEFAULT_INCLUDE_EXTENSIONS
from .logging import get_logger
from .models import LocalFileRef

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    ".idea",
    ".pytest_cache",
    ".mypy_cache",
}

# Key files that carry no listed extension but still describe the project.
_EXTRA_FILENAMES = (".env.example",)
_EXTRA_PREFIXES = ("dockerfile",)

logger = get_logger("scanner")


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .archanalyzer.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if pattern.startswith("**/"):
        pattern = pattern[3:]
    if pattern.endswith("/**"):
        pattern = pattern[:-3] + "/"
    if not pattern or pattern == "/":
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = _build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


class RepoScanner:
    """Walks a project and returns the files worth summarising."""

    def __init__(
        self,
        include_extensions: Iterable[str] | None = None,
        exclude_paths: Iterable[str] | None = None,
        *,
        use_gitignore: bool = True,
    ) -> None:
        extensions = DEFAULT_INCLUDE_EXTENSIONS if include_extensions is None else include_extensions
        self.include_extensions = {ext.lstrip(".").lower() for ext in extensions}
        self.exclude_paths = list(DEFAULT_EXCLUDE_PATHS if exclude_paths is None else exclude_paths)
        self.use_gitignore = use_gitignore

    def scan(self, root: str | Path) -> List[LocalFileRef]:
        """Return file references under ``root`` in a stable walk order."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        rules: List[IgnoreRule] = []
        if self.use_gitignore:
            rules.extend(_parse_gitignore(root_path / ".gitignore"))
        for pattern in self.exclude_paths:
            rule = _build_ignore_rule(pattern)
            if rule is not None:
                rules.append(rule)

        files = [
            LocalFileRef(root=root_path, relative_path=rel_path)
            for rel_path in self._iter_files(root_path, rules)
        ]
        logger.debug("Scanner discovered %d files under %s", len(files), root_path)
        return files

    def _iter_files(self, root: Path, rules: Sequence[IgnoreRule]) -> Iterator[str]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in sorted(dirnames):
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, rules):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in sorted(filenames):
                if not self._is_included(filename):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, rules):
                    continue
                yield rel_path

    def _is_included(self, filename: str) -> bool:
        lowered = filename.lower()
        if lowered in _EXTRA_FILENAMES or lowered.startswith(_EXTRA_PREFIXES):
            return True
        _, dot, extension = lowered.rpartition(".")
        return bool(dot) and extension in self.include_extensions


__all__ = ["IgnoreRule", "RepoScanner"]
