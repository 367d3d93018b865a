"""Tests for the command line entry point and the sandbox entrypoint."""

import io
import json

import pytest

import sandbox_main
from string_check import cli
from string_check.config import CONFIG_ENV_VAR

RISK_URL = "http://bad.example/x"


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    (root / "bad.js").write_text(f"{RISK_URL} {RISK_URL}")
    (root / "clean.js").write_text("ok")
    return root


@pytest.fixture
def config(tmp_path):
    path = tmp_path / "risk-urls.json"
    path.write_text(json.dumps({"urls": [RISK_URL]}))
    return path


class TestCli:
    """Test string-check command."""

    def test_detection_only(self, project, config, capsys):
        exit_code = cli.main([str(project), "--config", str(config)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert f"[Match Found] {project / 'bad.js'}" in out
        assert "Files scanned: 2" in out
        assert "Files with matches: 1" in out
        assert "Total URL matches: 2" in out
        assert (project / "bad.js").read_text() == f"{RISK_URL} {RISK_URL}"

    def test_replace(self, project, config, capsys):
        exit_code = cli.main([str(project), "-r", "-c", str(config)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "risk URLs removed" in out
        assert "Files cleaned: 1" in out
        assert (project / "bad.js").read_text() == " "

    def test_dry_run(self, project, config, capsys):
        exit_code = cli.main([str(project), "--replace", "--dry-run", "--config", str(config)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "-> dry run" in out
        assert "Dry run: no files were modified" in out
        assert RISK_URL in (project / "bad.js").read_text()

    def test_config_from_environment(self, project, config, capsys, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config))
        assert cli.main([str(project)]) == 0
        assert "Total URL matches: 2" in capsys.readouterr().out

    def test_empty_config_fails_before_scanning(self, project, tmp_path, capsys):
        empty = tmp_path / "empty.json"
        empty.write_text("[]")

        exit_code = cli.main([str(project), "--replace", "--config", str(empty)])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert captured.err.startswith("Error: ")
        assert len(captured.err.strip().splitlines()) == 1
        assert "Scanning directory" not in captured.out
        assert (project / "bad.js").read_text() == f"{RISK_URL} {RISK_URL}"

    def test_missing_root(self, tmp_path, config, capsys):
        exit_code = cli.main([str(tmp_path / "missing"), "--config", str(config)])
        assert exit_code == 1
        assert "Directory not found" in capsys.readouterr().err

    def test_per_file_errors_do_not_change_exit_code(self, project, config, capsys):
        (project / "blob.bin").write_bytes(b"\xff\xfe\x00")

        exit_code = cli.main([str(project), "--config", str(config)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert f"[Skipped] {project / 'blob.bin'}" in out
        assert "Files scanned: 3" in out


class TestSandboxMain:
    """Test stdin/stdout JSON entrypoint."""

    def run(self, monkeypatch, capsys, payload):
        monkeypatch.setattr("sys.stdin", io.StringIO(payload))
        exit_code = sandbox_main.main()
        return exit_code, json.loads(capsys.readouterr().out)

    def test_scan(self, project, monkeypatch, capsys):
        exit_code, output = self.run(
            monkeypatch,
            capsys,
            json.dumps({"path": str(project), "risk_urls": [RISK_URL]}),
        )

        assert exit_code == 0
        assert output["stats"]["files_with_matches"] == 1
        assert output["files"][0]["outcome"] == "reported"

    def test_invalid_json(self, monkeypatch, capsys):
        exit_code, output = self.run(monkeypatch, capsys, "{not json")
        assert exit_code == 1
        assert "Invalid JSON input" in output["error"]

    def test_missing_path(self, monkeypatch, capsys):
        exit_code, output = self.run(monkeypatch, capsys, json.dumps({"risk_urls": [RISK_URL]}))
        assert exit_code == 1
        assert "example" in output

    def test_config_error(self, project, monkeypatch, capsys):
        exit_code, output = self.run(
            monkeypatch, capsys, json.dumps({"path": str(project), "risk_urls": []})
        )
        assert exit_code == 1
        assert "list of strings" in output["error"]
