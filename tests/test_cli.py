from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "app"
sys.path.insert(0, str(APP_DIR))

import cli  # type: ignore[import-not-found]  # noqa: E402
import commit_reveal  # type: ignore[import-not-found]  # noqa: E402
from commit_reveal import compute_digest  # type: ignore[import-not-found]  # noqa: E402
from help_table import format_help_table, format_menu  # type: ignore[import-not-found]  # noqa: E402
from logger import configure_logging, default_level  # type: ignore[import-not-found]  # noqa: E402
from protocol import MoveSet  # type: ignore[import-not-found]  # noqa: E402

MOVES = ["rock", "paper", "scissors"]


def _feed(monkeypatch: pytest.MonkeyPatch, *answers: str) -> None:
    it: Iterator[str] = iter(answers)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def _value(out: str, prefix: str) -> str:
    for line in out.splitlines():
        if line.startswith(prefix):
            return line[len(prefix):].strip()
    raise AssertionError(f"{prefix!r} not in output")


def test_play_prints_verifiable_commitment(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed(monkeypatch, "2")
    assert cli.main(["play", *MOVES]) == 0
    out = capsys.readouterr().out

    digest = _value(out, "HMAC: ")
    key = _value(out, "HMAC key: ")
    computer = _value(out, "Computer move: ")
    assert _value(out, "Your move: ") == "paper"
    assert out.startswith("HMAC: ")
    assert compute_digest(bytes.fromhex(key), computer) == digest

    expected = {"rock": "You win!", "paper": "Draw!", "scissors": "You lose!"}[computer]
    assert expected in out


def test_play_help_then_invalid_then_exit(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed(monkeypatch, "?", "9", "0")
    assert cli.main(["play", *MOVES]) == 0
    out = capsys.readouterr().out

    assert out.startswith("HMAC: ")
    assert "PC Moves" in out
    assert "Error: Invalid move." in out
    assert out.rstrip().endswith("Exiting...")
    assert "HMAC key:" not in out


def test_play_eof_aborts_cleanly(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed(monkeypatch)
    assert cli.main(["play", *MOVES]) == 0
    assert "HMAC key:" not in capsys.readouterr().out


@pytest.mark.parametrize("moves", [["rock", "paper"], ["a", "b", "c", "d"], ["rock", "paper", "rock"]])
def test_play_rejects_bad_move_lists(moves: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["play", *moves]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("Error: ")
    assert "Example:" in captured.err
    assert captured.out == ""


def test_verify_command(capsys: pytest.CaptureFixture[str]) -> None:
    key = bytes(range(32))
    digest = compute_digest(key, "lizard")

    assert cli.main(["verify", "--hmac", digest, "--key", key.hex(), "--move", "lizard"]) == 0
    assert capsys.readouterr().out.strip() == "OK"

    assert cli.main(["verify", "--hmac", digest, "--key", key.hex(), "--move", "Spock"]) == 1
    assert capsys.readouterr().out.strip() == "MISMATCH"


def test_table_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["table", *MOVES]) == 0
    assert capsys.readouterr().out.strip() == format_help_table(MoveSet.from_labels(MOVES)).strip()


def test_help_table_layout() -> None:
    table = format_help_table(MoveSet.from_labels(MOVES))
    lines = table.splitlines()

    assert lines[0] == "Help:"
    assert lines[1] == lines[3] == lines[-1]
    assert lines[2].split("|")[1].strip() == "PC Moves"
    rock_row = [cell.strip() for cell in lines[4].strip("|").split("|")]
    assert rock_row == ["rock", "Draw", "Lose", "Win"]
    assert len({len(line) for line in lines[1:]}) == 1


def test_menu_lists_one_based_choices() -> None:
    assert format_menu(MoveSet.from_labels(MOVES)).splitlines() == [
        "Available moves:",
        "1 - rock",
        "2 - paper",
        "3 - scissors",
        "0 - exit",
        "? - help",
    ]


def test_undecodable_move_label_is_rejected(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["play", "\udcff", "b", "c"]) == 1
    captured = capsys.readouterr()
    assert "UTF-8" in captured.err
    assert captured.out == ""


def test_unknown_log_level_flag_is_a_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--log-level", "verbose", "table", *MOVES])
    assert excinfo.value.code == 2
    assert "--log-level" in capsys.readouterr().err


def test_log_level_flag_is_case_insensitive(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--log-level", "debug", "table", *MOVES]) == 0
    assert "PC Moves" in capsys.readouterr().out


def test_unknown_log_level_env_falls_back(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("RPS_LOG_LEVEL", "loud")
    assert default_level() == "WARNING"
    assert cli.main(["table", *MOVES]) == 0
    assert "PC Moves" in capsys.readouterr().out


def test_configure_logging_rejects_unknown_name() -> None:
    with pytest.raises(ValueError, match="unknown log level"):
        configure_logging("verbose")


def test_play_reports_missing_randomness(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def broken(_: int) -> bytes:
        raise OSError("no entropy")

    monkeypatch.setattr(commit_reveal.secrets, "token_bytes", broken)
    _feed(monkeypatch, "1")
    assert cli.main(["play", *MOVES]) == 1
    captured = capsys.readouterr()
    assert "Error: secure random source failed" in captured.err
    assert "HMAC" not in captured.out
