import json
import os
import sys

import pytest

from fillpdf import CommandError, run_command
from fillpdf import config


def test_returns_stdout_and_feeds_stdin():
    out = run_command(sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())",
                      stdin=b"abc")
    assert out == b"ABC"


def test_runs_in_working_directory(tmp_path):
    out = run_command(sys.executable, "-c", "import os; print(os.getcwd())", cwd=str(tmp_path))
    assert os.path.realpath(out.decode().strip()) == os.path.realpath(str(tmp_path))


def test_nonzero_exit_carries_stderr():
    with pytest.raises(CommandError) as exc:
        run_command(sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)")
    assert exc.value.returncode == 3
    assert exc.value.stderr == "boom"
    assert "boom" in str(exc.value)
    assert exc.value.command[0] == sys.executable


def test_missing_program_propagates():
    with pytest.raises(FileNotFoundError):
        run_command("fillpdf-no-such-program-xyz", "--version")


def test_command_log(tmp_path, monkeypatch):
    log = tmp_path / "commands.log"
    monkeypatch.setattr(config, "COMMAND_LOG_FILE", str(log))
    run_command(sys.executable, "-c", "print('hi')")
    rec = json.loads(log.read_text(encoding="utf-8").splitlines()[-1])
    assert rec["returncode"] == 0
    assert rec["command"][0] == sys.executable
    assert rec["stdout_bytes"] > 0
