# tests/test_cli.py
"""Tests for the assetvault CLI."""

import json

import pytest

from assetvault.cli import main


@pytest.fixture
def session_file(tmp_path):
    """Write a small passing session."""
    path = tmp_path / "session.yaml"
    path.write_text(
        "name: cli demo\n"
        "calls:\n"
        "  - register: {owner: alice, name: doc, content: [1, 2, 3]}\n"
        "    expect: ok\n"
        "  - read: {id: 1, caller: carol}\n"
        "    expect: Forbidden\n"
    )
    return path


class TestCli:
    """Test CLI commands."""

    def test_run_passing_session(self, session_file, capsys):
        assert main(["run", str(session_file)]) == 0
        out = capsys.readouterr().out
        assert "Session: cli demo" in out
        assert "[PASS]" in out
        assert "Matched: 2/2" in out

    def test_run_failing_session(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("calls:\n  - list_owned: {owner: dave}\n    expect: ok\n")
        assert main(["run", str(path)]) == 1
        assert "[FAIL]" in capsys.readouterr().out

    def test_run_writes_output(self, session_file, tmp_path):
        output = tmp_path / "results.json"
        config = tmp_path / "vault.yaml"
        config.write_text("clock: logical\n")
        assert main(["run", str(session_file), "--config", str(config), "-o", str(output)]) == 0
        data = json.loads(output.read_text())
        assert data["name"] == "cli demo"
        assert len(data["calls"]) == 2

    def test_output_with_non_json_args(self, tmp_path, capsys):
        """YAML dates and binary args are echoed as strings in the results file."""
        path = tmp_path / "typed.yaml"
        path.write_text(
            "calls:\n"
            "  - list_owned: {owner: 2024-01-01}\n"
            "    expect: InvalidInput\n"
            "  - register: {owner: alice, name: doc, content: !!binary AQID}\n"
            "    expect: InvalidInput\n"
        )
        output = tmp_path / "results.json"
        assert main(["run", str(path), "-o", str(output)]) == 0
        data = json.loads(output.read_text())
        assert data["calls"][0]["args"]["owner"] == "2024-01-01"
        assert data["calls"][0]["result"]["err"]["field"] == "owner"
        assert data["calls"][1]["result"]["err"]["field"] == "content"

    def test_operations(self, capsys):
        assert main(["operations"]) == 0
        out = capsys.readouterr().out
        assert "register(owner, name, content)" in out
        assert "list_shared(caller)" in out

    def test_no_command(self, capsys):
        assert main([]) == 1
