"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from projsync.cli import _build_parser, main

GRAPH = """
modules:
  - name: Game
    sources: [Assets/A.cs]
    references: [Library]
  - name: Library
    sources: [Lib/L.cs]
"""


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "sync"])
    assert args.verbose is True
    assert args.command == "sync"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["sync", "--verbose"])
    assert args.verbose is True
    assert args.command == "sync"


def test_cli_generate_all_defaults_to_config() -> None:
    parser = _build_parser()
    assert parser.parse_args(["sync"]).generate_all is None
    assert parser.parse_args(["sync", "--generate-all"]).generate_all is True


def test_cli_collects_changed_and_deleted_paths() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["sync-if-needed", "proj", "--changed", "Assets/A.cs", "Assets/B.cs", "--deleted", "Assets/C.cs"]
    )
    assert args.path == "proj"
    assert args.changed == ["Assets/A.cs", "Assets/B.cs"]
    assert args.deleted == ["Assets/C.cs"]


def test_cli_sync_writes_project_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "projsync-graph.yml").write_text(GRAPH, encoding="utf-8")
    (tmp_path / ".projsync.yml").write_text('project:\n  solution_name: "Game"\n', encoding="utf-8")

    main(["sync", str(tmp_path)])

    assert "3 project file(s) written" in capsys.readouterr().out
    assert (tmp_path / "Game.csproj").exists()
    assert (tmp_path / "Library.csproj").exists()
    assert (tmp_path / "Game.sln").read_bytes().startswith(b"\r\nMicrosoft Visual Studio Solution File")
    assert (tmp_path / ".projsync" / "state.json").exists()

    main(["sync-if-needed", str(tmp_path), "--changed", "Assets/Unrelated.txt"])
    assert "Project files already up to date" in capsys.readouterr().out


def test_cli_reports_invalid_graph(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "projsync-graph.yml").write_text("modules: {}\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["sync", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "projsync sync failed" in capsys.readouterr().err
