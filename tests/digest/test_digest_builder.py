"""Tests for the structure digest builder."""

from __future__ import annotations

from archanalyzer.config import AnalysisSettings
from archanalyzer.digest.builder import KEY_FILES_HEADER, TREE_HEADER, DigestBuilder
from tests._fixtures.repo_builder import StubFile, stub_files


def test_group_by_folder_keeps_discovery_order() -> None:
    files = stub_files("src/b.ts", "docs/x.md", "src/a.ts", "README.md", "docs/a.md")

    groups = DigestBuilder.group_by_folder(files)

    assert list(groups) == ["src", "docs", "README.md"]
    assert groups["src"] == ["src/b.ts", "src/a.ts"]
    assert groups["docs"] == ["docs/x.md", "docs/a.md"]
    assert groups["README.md"] == ["README.md"]
    assert sum(len(paths) for paths in groups.values()) == len(files)


def test_group_by_folder_merges_root_file_with_same_named_folder() -> None:
    files = stub_files("api/handler.go", "api")

    groups = DigestBuilder.group_by_folder(files)

    assert groups == {"api": ["api/handler.go", "api"]}


def test_render_tree_caps_members_and_reports_omitted() -> None:
    builder = DigestBuilder()
    paths = [f"src/module_{index:02d}.py" for index in range(13)]

    tree = builder.render_tree({"src": paths})
    lines = tree.splitlines()

    member_lines = [line for line in lines if line.startswith("  └─ module_")]
    assert lines[0] == TREE_HEADER
    assert "📁 src/" in lines
    assert len(member_lines) == 10
    assert member_lines[0] == "  └─ module_00.py"
    assert lines.count("  └─ ... (+3 more files)") == 1


def test_render_tree_without_overflow_has_no_summary_line() -> None:
    builder = DigestBuilder()
    paths = [f"lib/deep/nested/file_{index}.rs" for index in range(10)]

    tree = builder.render_tree({"lib": paths})

    assert tree.count("  └─ ") == 10
    assert "more files" not in tree
    assert "  └─ file_0.rs" in tree


def test_select_key_files_matches_markers_case_insensitively_in_order() -> None:
    files = stub_files(
        "src/index.ts",
        "README.md",
        "web/package.json",
        "Dockerfile",
        "src/app.ts",
        "tsconfig.build.json",
        "db/schema.prisma",
        ".env.example",
    )

    selected = DigestBuilder().select_key_files(files)

    assert [file.relative_path for file in selected] == [
        "README.md",
        "web/package.json",
        "Dockerfile",
        "tsconfig.build.json",
        "db/schema.prisma",
        ".env.example",
    ]


def test_select_key_files_caps_at_fifteen() -> None:
    files = stub_files(*[f"pkg{index}/package.json" for index in range(20)])

    selected = DigestBuilder().select_key_files(files)

    assert len(selected) == 15
    assert selected[0].relative_path == "pkg0/package.json"
    assert selected[-1].relative_path == "pkg14/package.json"


def test_inlined_content_is_truncated_to_limit() -> None:
    big = StubFile("README.md", b"x" * 5000 + b"TAIL")

    digest = DigestBuilder().build([big])

    assert "x" * 2000 in digest.key_files
    assert "x" * 2001 not in digest.key_files
    assert "TAIL" not in digest.key_files
    assert "### README.md\n```\n" in digest.key_files


def test_unreadable_key_files_are_skipped_silently() -> None:
    files = [
        StubFile("package.json", b'{"name": "demo"}'),
        StubFile("docker-compose.yml", None),
        StubFile("README.md", b"# Demo"),
    ]

    digest = DigestBuilder(AnalysisSettings(read_workers=3)).build(files)

    assert digest.key_file_paths == ("package.json", "README.md")
    assert "docker-compose.yml" not in digest.key_files
    assert digest.key_files.index("### package.json") < digest.key_files.index("### README.md")


def test_parallel_and_sequential_reads_produce_same_digest() -> None:
    files = stub_files(*[f"svc{index}/Dockerfile" for index in range(8)])

    sequential = DigestBuilder(AnalysisSettings(read_workers=1)).build(files)
    parallel = DigestBuilder(AnalysisSettings(read_workers=8)).build(files)

    assert sequential == parallel


def test_empty_file_list_yields_headers_only() -> None:
    digest = DigestBuilder().build([])

    assert TREE_HEADER in digest.text
    assert KEY_FILES_HEADER in digest.text
    assert "📁" not in digest.text
    assert "### " not in digest.text
    assert digest.file_count == 0


def test_custom_limits_are_honoured() -> None:
    settings = AnalysisSettings(max_files_per_folder=2, max_key_files=1, max_chars_per_file=5)
    files = [
        StubFile("app/README.md", b"0123456789"),
        StubFile("app/package.json", b"{}"),
        StubFile("app/main.py", b"print()"),
    ]

    digest = DigestBuilder(settings).build(files)

    assert "  └─ ... (+1 more files)" in digest.tree
    assert digest.key_file_paths == ("app/README.md",)
    assert "```\n01234\n```" in digest.key_files
