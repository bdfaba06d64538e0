"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


def run_cli_command(*args: str, timeout: int = 30) -> tuple[int, str, str]:
    """
    Run a CLI command and return exit code, stdout, stderr.

    Args:
        args: Arguments after 'python -m formcraft.cli'
        timeout: Maximum time to wait

    Returns:
        Tuple of (exit_code, stdout, stderr)
    """
    result = subprocess.run(
        [sys.executable, "-m", "formcraft.cli", *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        encoding="utf-8",
        timeout=timeout,
        env={**os.environ, "COLUMNS": "200", "PYTHONIOENCODING": "utf-8"},
    )

    return result.returncode, result.stdout, result.stderr


@pytest.fixture
def form_file(tmp_path, sample_form):
    path = tmp_path / "form.json"
    path.write_text(json.dumps(sample_form))
    return path


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self):
        code, stdout, stderr = run_cli_command("--help")

        assert code == 0, f"Help failed: {stderr}"
        assert "formcraft" in stdout.lower()
        assert "validate" in stdout
        assert "score" in stdout

    @pytest.mark.parametrize("command", ["validate", "score", "blanks", "new"])
    def test_command_help(self, command):
        code, stdout, stderr = run_cli_command(command, "--help")
        assert code == 0, f"{command} --help failed: {stderr}"


class TestValidateCommand:

    def test_valid_form(self, form_file):
        code, stdout, stderr = run_cli_command("validate", str(form_file))

        assert code == 0, f"validate failed: {stdout} {stderr}"
        assert "3 question(s) valid" in stdout

    def test_invalid_form(self, tmp_path, sample_form):
        sample_form["questions"][0]["config"]["text"] = "no blanks"
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(sample_form))

        code, stdout, _ = run_cli_command("validate", str(path))

        assert code == 1
        assert "INVALID_QUESTION_CONFIG" in stdout

    def test_publish_empty_form(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"title": "Empty", "questions": []}))

        code, stdout, _ = run_cli_command("validate", str(path), "--publish")

        assert code == 1
        assert "EMPTY_FORM" in stdout

    def test_missing_file(self, tmp_path):
        code, _, _ = run_cli_command("validate", str(tmp_path / "missing.json"))
        assert code == 2


class TestScoreCommand:

    def test_accepted_submission(self, tmp_path, form_file):
        answers = tmp_path / "answers.json"
        answers.write_text(json.dumps({
            "answers": [
                {"questionId": "q-cloze", "answer": {"blank-0": "capital", "blank-1": "Paris"}},
                {"questionId": "q-cat", "answer": {"dog": "mammals", "cat": "mammals", "eagle": "birds", "owl": "birds"}},
            ],
            "totalTimeSpent": 40,
        }))
        output = tmp_path / "response.json"

        code, stdout, stderr = run_cli_command("score", str(form_file), str(answers), "--output", str(output))

        assert code == 0, f"score failed: {stdout} {stderr}"
        assert "20/20" in stdout
        report = json.loads(output.read_text())
        assert report["response"]["scorePercentage"] == 100
        assert report["response"]["totalTimeSpent"] == 40

    def test_rejected_submission(self, tmp_path, form_file):
        answers = tmp_path / "answers.json"
        answers.write_text(json.dumps([{"questionId": "q-cat", "answer": "not-an-object"}]))

        code, stdout, _ = run_cli_command("score", str(form_file), str(answers))

        assert code == 1
        assert "SUBMISSION REJECTED" in stdout
        assert "REQUIRED_QUESTION_MISSING" in stdout


class TestBlanksCommand:

    def test_lists_blanks(self):
        code, stdout, stderr = run_cli_command("blanks", "The {{capital}} of France is {{Paris}}.")

        assert code == 0, f"blanks failed: {stderr}"
        assert "blank-0" in stdout
        assert "Paris" in stdout

    def test_no_blanks(self):
        code, stdout, _ = run_cli_command("blanks", "plain text")
        assert code == 0
        assert "No blanks found" in stdout


class TestNewCommand:

    def test_new_cloze(self):
        code, stdout, stderr = run_cli_command("new", "cloze", "--order", "1")

        assert code == 0, f"new failed: {stderr}"
        question = json.loads(stdout)
        assert question["type"] == "cloze"
        assert question["title"] == "Question 2"
        assert len(question["config"]["blanks"]) == 2

    def test_new_unknown_type(self):
        code, _, _ = run_cli_command("new", "essay")
        assert code == 1
