import io

import pytest

from minesweeper_probe.cli import configure_logging, run_cli


def run(text):
    stdout, stderr = io.StringIO(), io.StringIO()
    status = run_cli(io.StringIO(text), stdout, stderr)
    return status, stdout.getvalue(), stderr.getvalue()


def test_empty_input_uses_example_board():
    status, out, _ = run("")

    assert status == 0
    assert "Example board:" in out
    assert out.rstrip().endswith("The probe is safe")


@pytest.mark.parametrize(
    "board, line",
    [
        ("2 *\ns ?", "The probe is a mine"),
        ("1 _\n? _", "The probe cannot be determined"),
        ("* 1 ? 1 s", "The board is inconsistent"),
    ],
)
def test_verdict_lines(board, line):
    status, out, _ = run(board)

    assert status == 0
    assert "Example board:" not in out
    assert out.rstrip().endswith(line)


def test_malformed_board_reports_error():
    status, out, err = run("? ?\n_ _")

    assert status == 1
    assert "Malformed board" in err
    assert "The probe" not in out


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv("MINESWEEPER_PROBE_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError):
        configure_logging()
