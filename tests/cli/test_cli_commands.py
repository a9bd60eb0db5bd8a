"""In-process tests for the planhound command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from planhound.api.cli import main as cli_main
from planhound.version import __version__
from tests.fixtures.fake_index import numbered_lines
from tests.fixtures.sample_plans import bugfix_plan_data, micro_step_plan


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep loguru sinks from holding on to captured streams
    monkeypatch.setattr(cli_main, "setup_logging", lambda verbose=False: None)


@pytest.fixture
def plan_file(tmp_path: Path) -> Path:
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(bugfix_plan_data()))
    return path


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli_main.run(["--version"])

    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main.run([]) == 2
    assert "compress" in capsys.readouterr().out


class TestCompress:
    def test_json_output(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "micro.json"
        path.write_text(json.dumps(micro_step_plan(6).to_dict()))

        assert cli_main.run(["compress", str(path), "--max-micro-steps", "3", "--json"]) == 0

        result = json.loads(capsys.readouterr().out)
        assert [s["id"] for s in result["plan"]["steps"]] == ["prep", "e0", "verify"]
        assert result["stats"]["chunksCreated"] == 1

    def test_compact_output(self, plan_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main.run(["compress", str(plan_file), "--compact"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("Goal: Fix login timeout")
        assert "Steps:" in out

    def test_table_output(self, plan_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main.run(["compress", str(plan_file), "--max-phases", "2"]) == 0

        out = capsys.readouterr().out
        assert "Plan compression" in out
        assert "phases_truncated" in out

    def test_accepts_compress_output_as_input(
        self, plan_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cli_main.run(["compress", str(plan_file), "--json"])
        wrapped = tmp_path / "wrapped.json"
        wrapped.write_text(capsys.readouterr().out)

        assert cli_main.run(["compress", str(wrapped), "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["stats"]["stepsAfter"] == 5

    def test_invalid_plan(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"phases": []}))

        assert cli_main.run(["compress", str(path)]) == 1
        assert "Invalid plan" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main.run(["compress", str(tmp_path / "nope.json")]) == 1
        assert "Cannot read plan file" in capsys.readouterr().err

    def test_not_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "plan.json"
        path.write_text("goal: yaml is not supported")

        assert cli_main.run(["compress", str(path)]) == 1
        assert "not valid JSON" in capsys.readouterr().err

    def test_long_error_is_not_wrapped(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / ("deeply-nested-plans-directory-" * 4) / "plan.json"

        assert cli_main.run(["compress", str(path)]) == 1

        err = capsys.readouterr().err
        assert err.count("\n") == 1
        assert f"Cannot read plan file {path}" in err

    def test_invalid_limit(self, plan_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main.run(["compress", str(plan_file), "--max-phases", "0"]) == 2
        assert "Invalid configuration" in capsys.readouterr().err


class TestChunks:
    @pytest.fixture
    def workspace(self, tmp_path: Path) -> Path:
        root = tmp_path / "workspace"
        (root / "src" / "server").mkdir(parents=True)
        (root / "src" / "server" / "app.ts").write_text(numbered_lines(150))
        return root

    def test_step_scope_json(
        self, plan_file: Path, workspace: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        argv = ["chunks", str(plan_file), "--step", "s5", "--root", str(workspace), "--json"]

        assert cli_main.run(argv) == 0

        result = json.loads(capsys.readouterr().out)
        assert [(c["startLine"], c["endLine"]) for c in result["chunks"]] == [(1, 100), (101, 150)]
        assert result["chunks"][0]["filePath"] == "src/server/app.ts"

    def test_scope_table(
        self, plan_file: Path, workspace: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        argv = ["chunks", str(plan_file), "--scope", "scope-server", "--root", str(workspace)]

        assert cli_main.run(argv) == 0

        out = capsys.readouterr().out
        assert "2 chunks" in out
        assert "file_range" in out

    def test_unknown_scope(self, plan_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main.run(["chunks", str(plan_file), "--scope", "nope"]) == 1
        assert "not found in plan" in capsys.readouterr().err

    def test_unknown_step(self, plan_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main.run(["chunks", str(plan_file), "--step", "nope"]) == 1
        assert "not found in plan" in capsys.readouterr().err

    def test_scope_or_step_is_required(self, plan_file: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli_main.run(["chunks", str(plan_file)])

        assert exc_info.value.code == 2
