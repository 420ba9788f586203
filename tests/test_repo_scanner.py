"""Tests for archanalyzer.repo_scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from archanalyzer.repo_scanner import RepoScanner


def _write(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_scan_filters_by_extension_and_default_excludes(tmp_path: Path) -> None:
    _write(tmp_path / "src" / "app.ts", "export {};\n")
    _write(tmp_path / "src" / "logo.png", "binary")
    _write(tmp_path / "package.json", "{}")
    _write(tmp_path / "Dockerfile", "FROM node:20\n")
    _write(tmp_path / ".env.example", "PORT=3000\n")
    _write(tmp_path / ".env", "SECRET=1\n")
    _write(tmp_path / "node_modules" / "lib" / "index.js", "")
    _write(tmp_path / "web" / "dist" / "bundle.js", "")
    _write(tmp_path / ".git" / "config.json", "{}")

    paths = [ref.relative_path for ref in RepoScanner().scan(tmp_path)]

    assert paths == [".env.example", "Dockerfile", "package.json", "src/app.ts"]


def test_scan_returns_readable_references(tmp_path: Path) -> None:
    _write(tmp_path / "docs" / "guide.md", "# Guide\n")

    (ref,) = RepoScanner().scan(tmp_path)

    assert ref.relative_path == "docs/guide.md"
    assert ref.read_bytes() == b"# Guide\n"


def test_scan_respects_gitignore(tmp_path: Path) -> None:
    _write(tmp_path / ".gitignore", "generated/\n*.sql\n!keep.sql\n")
    _write(tmp_path / "src" / "main.py", "print('ok')\n")
    _write(tmp_path / "generated" / "client.ts", "")
    _write(tmp_path / "db" / "dump.sql", "")
    _write(tmp_path / "db" / "keep.sql", "")

    paths = {ref.relative_path for ref in RepoScanner().scan(tmp_path)}

    assert paths == {"src/main.py", "db/keep.sql"}


def test_scan_accepts_custom_policy(tmp_path: Path) -> None:
    _write(tmp_path / "build" / "out.py", "")
    _write(tmp_path / "vendor" / "lib.py", "")
    _write(tmp_path / "main.go", "")

    scanner = RepoScanner(include_extensions=[".py"], exclude_paths=["**/vendor/**"])
    paths = [ref.relative_path for ref in scanner.scan(tmp_path)]

    assert paths == ["build/out.py"]


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(FileNotFoundError, match="missing"):
        RepoScanner().scan(missing)


def test_scan_rejects_file_path(tmp_path: Path) -> None:
    target = tmp_path / "file.py"
    _write(target)

    with pytest.raises(NotADirectoryError):
        RepoScanner().scan(target)
