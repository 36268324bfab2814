"""Tests for linter command construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from eslsp.linter.command import BASE_FLAGS, build_command, resolve_cwd, stdin_filename
from eslsp.linter.config import LinterConfig, normalize_extra_args
from eslsp.linter.types import DocumentSnapshot


@pytest.fixture
def saved() -> DocumentSnapshot:
    return DocumentSnapshot(
        uri="file:///work/project/src/app.js",
        path="/work/project/src/app.js",
        source="let a = 1\n",
    )


@pytest.fixture
def unsaved() -> DocumentSnapshot:
    return DocumentSnapshot(uri="untitled:Untitled-2", path=None, source="")


class TestBuildCommand:
    """Tests for build_command."""

    def test_base_flags_and_filename(self, saved: DocumentSnapshot) -> None:
        command = build_command("/usr/bin/eslint", saved, LinterConfig())

        assert command == [
            "/usr/bin/eslint",
            "--no-color",
            "--no-ignore",
            "--stdin",
            "--stdin-filename",
            "/work/project/src/app.js",
        ]

    def test_extra_args_sequence_appended_verbatim(self, saved: DocumentSnapshot) -> None:
        config = LinterConfig(extra_args=("--rule", "semi: error"))

        command = build_command("eslint", saved, config)

        assert command[-2:] == ["--rule", "semi: error"]
        assert command[1 : 1 + len(BASE_FLAGS)] == list(BASE_FLAGS)

    def test_extra_args_string_is_one_argument(self, saved: DocumentSnapshot) -> None:
        config = LinterConfig(extra_args="--cache --quiet")  # type: ignore[arg-type]

        command = build_command("eslint", saved, config)

        assert command[-1] == "--cache --quiet"

    def test_unsaved_document_filename(self, unsaved: DocumentSnapshot) -> None:
        config = LinterConfig(project_root=Path("/work/project"))

        command = build_command("eslint", unsaved, config)

        assert command[-1] == "/work/project/Untitled-2"


class TestResolveCwd:
    """Tests for the working directory of a run."""

    def test_project_root_wins(self, saved: DocumentSnapshot) -> None:
        config = LinterConfig(project_root=Path("/elsewhere"))
        assert resolve_cwd(saved, config) == Path("/elsewhere")

    def test_document_directory(self, saved: DocumentSnapshot) -> None:
        assert resolve_cwd(saved, LinterConfig()) == Path("/work/project/src")

    def test_falls_back_to_process_cwd(
        self, unsaved: DocumentSnapshot, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert resolve_cwd(unsaved, LinterConfig()) == tmp_path


class TestStdinFilename:
    def test_saved_document_uses_path(self, saved: DocumentSnapshot) -> None:
        assert stdin_filename(saved, Path("/x")) == saved.path

    def test_uri_without_path(self) -> None:
        snapshot = DocumentSnapshot(uri="untitled:", path=None, source="")
        assert stdin_filename(snapshot, Path("/x")) == "/x/untitled"


class TestLinterConfig:
    """Tests for LinterConfig and extra-args normalization."""

    def test_defaults(self) -> None:
        config = LinterConfig()
        assert config.executable == "eslint"
        assert config.extra_args == ()
        assert config.project_root is None
        assert config.encoding == "utf-8"
        assert config.show_rule_name is True

    @pytest.mark.parametrize(
        ("extra_args", "expected"),
        [
            (None, ()),
            ("--quiet", ("--quiet",)),
            (["--rule", "semi: 2"], ("--rule", "semi: 2")),
        ],
        ids=["none", "string", "list"],
    )
    def test_normalize_extra_args(self, extra_args, expected) -> None:
        assert normalize_extra_args(extra_args) == expected

    def test_list_extra_args_become_tuple(self) -> None:
        config = LinterConfig(extra_args=["--quiet"])  # type: ignore[arg-type]
        assert config.extra_args == ("--quiet",)
