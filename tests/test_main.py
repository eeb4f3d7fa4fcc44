# tests/test_main.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from task_tracker.cli.main import EXIT_OK, EXIT_STORAGE_ERROR, EXIT_USAGE_ERROR, main


@pytest.fixture()
def env(monkeypatch: pytest.MonkeyPatch, tasks_path: Path) -> Path:
    monkeypatch.setenv("TASK_TRACKER_FILE", str(tasks_path))
    monkeypatch.setenv("TASK_TRACKER_LOG_LEVEL", "WARNING")
    monkeypatch.delenv("TASK_TRACKER_LOG_FILE", raising=False)
    return tasks_path


def _out(capsys: pytest.CaptureFixture[str]) -> list[str]:
    return capsys.readouterr().out.splitlines()


def test_add_mark_list_delete_scenario(env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["add", "buy milk"]) == EXIT_OK
    assert _out(capsys) == ["Task added successfully (ID: 1)"]

    (created,) = json.loads(env.read_text(encoding="utf-8"))
    assert created["status"] == "todo"

    assert main(["mark-done", "1"]) == EXIT_OK
    assert _out(capsys) == ["Task marked as done (ID: 1)"]

    (marked,) = json.loads(env.read_text(encoding="utf-8"))
    assert marked["status"] == "done"
    assert marked["created_at"] == created["created_at"]
    assert marked["updated_at"] >= created["updated_at"]

    assert main(["list", "done"]) == EXIT_OK
    lines = _out(capsys)
    assert len(lines) == 1
    assert lines[0].startswith("ID: 1, Description: buy milk, Status: done")

    assert main(["delete", "1"]) == EXIT_OK
    assert _out(capsys) == ["Task deleted successfully (ID: 1)"]

    assert main(["list"]) == EXIT_OK
    assert _out(capsys) == []


def test_default_file_is_tasks_json_in_cwd(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("TASK_TRACKER_FILE", raising=False)
    monkeypatch.chdir(tmp_path)

    assert main(["add", "a"]) == EXIT_OK
    assert (tmp_path / "tasks.json").exists()


def test_invalid_command_exits_normally(env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == EXIT_OK
    assert main(["frobnicate"]) == EXIT_OK
    assert _out(capsys) == ["Invalid command", "Invalid command"]


def test_not_found_does_not_create_changes(env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["add", "a"])
    before = env.read_bytes()
    capsys.readouterr()

    assert main(["mark-done", "7"]) == EXIT_OK
    assert _out(capsys) == ["Task not found (ID: 7)"]
    assert env.read_bytes() == before


def test_bad_id_is_usage_error(env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["delete", "abc"]) == EXIT_USAGE_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "invalid task id 'abc'" in captured.err
    assert "usage: task-tracker delete <id>" in captured.err


def test_missing_argument_is_usage_error(env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["add"]) == EXIT_USAGE_ERROR
    assert "missing argument <description>" in capsys.readouterr().err
    assert not env.exists()


def test_undecodable_description_keeps_existing_tasks(
    env: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["add", "keep me"]) == EXIT_OK
    before = env.read_bytes()

    assert main(["add", "bad \udcff"]) == EXIT_USAGE_ERROR
    assert "not valid UTF-8" in capsys.readouterr().err
    assert env.read_bytes() == before


def test_unreadable_file_is_storage_error(env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    env.write_bytes(b"\xff\xfe\xfa")
    assert main(["list"]) == EXIT_STORAGE_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "cannot read" in captured.err


def test_corrupt_file_lists_nothing_and_warns(env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    env.write_text("{oops", encoding="utf-8")
    assert main(["list"]) == EXIT_OK
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "not a valid task list" in captured.err


def test_log_file_receives_debug_records(
    env: Path, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    log_file = tmp_path / "logs" / "task-tracker.log"
    monkeypatch.setenv("TASK_TRACKER_LOG_FILE", str(log_file))

    assert main(["add", "a"]) == EXIT_OK
    assert "Saved 1 task(s)" in log_file.read_text(encoding="utf-8")
