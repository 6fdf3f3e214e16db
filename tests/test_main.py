"""Tests for the ``python -m umbrella_headers`` entry point."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

import pytest

from umbrella_headers.__main__ import main

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def run_fresh(*args: str) -> subprocess.CompletedProcess:
    """Run a new interpreter from the project root, outside this test process."""
    return subprocess.run(
        [sys.executable, *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        timeout=60,
    )


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # main() points the root handler at the captured stderr
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestMain:
    def test_encodes_header(self, capsys):
        assert main(["subject", "Hi"]) == 0
        assert capsys.readouterr().out.strip() == "Subject: =?UTF-8?B?SGk=?="

    def test_address_header(self, capsys):
        assert main(["to", "John Smith <john@example.com>"]) == 0
        assert capsys.readouterr().out.strip() == "To: John Smith <john@example.com>"

    def test_boundary(self, capsys):
        assert main(["boundary", "3", "abc"]) == 0
        assert capsys.readouterr().out.strip() == "----sinikael-?=_3-abc"

    def test_usage_error(self, capsys):
        assert main([]) == 1
        assert "Usage" in capsys.readouterr().err

    def test_grammar_error_exit_code(self, capsys):
        assert main(["from", "not an address"]) == 2
        assert "Invalid address list" in capsys.readouterr().err

    def test_broken_address_syntax_exit_code(self, capsys):
        assert main(["to", "a@"]) == 2
        assert "Invalid address list" in capsys.readouterr().err


class TestFreshInterpreter:
    def test_import_writes_nothing_to_stdout(self):
        result = run_fresh("-c", "import umbrella_headers")
        assert result.returncode == 0
        assert result.stdout == ""

    def test_stdout_is_only_the_header_line(self):
        result = run_fresh("-m", "umbrella_headers", "subject", "Hi")
        assert result.returncode == 0
        assert result.stdout == "Subject: =?UTF-8?B?SGk=?=\n"

    def test_broken_address_exits_with_grammar_code(self):
        result = run_fresh("-m", "umbrella_headers", "to", "a@")
        assert result.returncode == 2
        assert result.stdout == ""
        assert "Traceback" not in result.stderr
