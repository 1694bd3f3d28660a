"""
CLI commands via typer's CliRunner
"""

import json

import pytest
from typer.testing import CliRunner

from codegraph_leakscan.cli import app

pytestmark = pytest.mark.integration

runner = CliRunner()


class TestScanCommand:
    """leakscan scan"""

    def test_scan_writes_report(self, source_root, sample_tree, tmp_path, monkeypatch):
        monkeypatch.setenv("LEAKSCAN_MODULE_RULES", '{"com.acme.billing": "billing", "com.acme": "core"}')
        output = tmp_path / "violations.json"

        result = runner.invoke(app, ["scan", str(source_root), "-o", str(output), "--log-level", "WARNING"])

        assert result.exit_code == 0, result.output
        assert "TOTAL VIOLATIONS: 4" in result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["modules"]["billing"]["entityReturnViolations"] == 1
        assert data["modules"]["core"]["dtoEntityFieldViolations"] == 1

    def test_default_rules_put_everything_in_other(self, source_root, sample_tree, tmp_path):
        output = tmp_path / "violations.json"

        result = runner.invoke(app, ["scan", str(source_root), "--output", str(output), "--workers", "2"])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["modules"]["other"]["entityInputViolations"] == 2
        assert data["modules"]["exam"]["entityInputViolations"] == 0

    def test_missing_source_root(self, tmp_path):
        output = tmp_path / "violations.json"

        result = runner.invoke(app, ["scan", str(tmp_path / "missing"), "-o", str(output)])

        assert result.exit_code == 1
        assert "Source directory not found" in result.output
        assert not output.exists()

    def test_invalid_workers(self, source_root):
        result = runner.invoke(app, ["scan", str(source_root), "--workers", "0"])
        assert result.exit_code == 2

    def test_invalid_log_format(self, source_root):
        result = runner.invoke(app, ["scan", str(source_root), "--log-format", "xml"])
        assert result.exit_code == 2

    @pytest.mark.parametrize("level", ["verbose", "basic_format"])
    def test_invalid_log_level(self, source_root, level):
        result = runner.invoke(app, ["scan", str(source_root), "--log-level", level])
        assert result.exit_code == 2
        assert "log_level" in result.output

    def test_bracketed_paths_printed_verbatim(self, tmp_path):
        root = tmp_path / "repo[/x]" / "src[id]"
        (root / "com" / "acme").mkdir(parents=True)
        (root / "com" / "acme" / "Student.java").write_text(
            "package com.acme;\n@Entity public class Student {}\n", encoding="utf-8"
        )
        (root / "com" / "acme" / "StudentResource.java").write_text(
            "package com.acme;\n@RestController public class StudentResource {\n"
            "    @GetMapping(\"/s\") public Student get() { return null; }\n}\n",
            encoding="utf-8",
        )
        output = tmp_path / "out[/y]" / "violations.json"

        result = runner.invoke(app, ["scan", str(root), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "repo[/x]/src[id]" in result.output.replace("\n", "")
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["totals"]["entityReturnViolations"] == 1


class TestThresholdsCommand:
    """leakscan thresholds"""

    def test_reads_thresholds(self, tmp_path):
        test_root = tmp_path / "architecture"
        test_root.mkdir()
        (test_root / "TextEntityUsageArchitectureTest.java").write_text(
            "class TextEntityUsageArchitectureTest {\n"
            "    protected int getMaxEntityInputViolations() {\n"
            "        return 5;\n"
            "    }\n"
            "}\n",
            encoding="utf-8",
        )
        output = tmp_path / "thresholds.json"

        result = runner.invoke(app, ["thresholds", str(test_root), "-o", str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["modules"]["text"]["entityInputViolations"] == 5
        assert data["totals"]["entityInputViolations"] == 5

    def test_invalid_log_level(self, tmp_path):
        result = runner.invoke(app, ["thresholds", str(tmp_path), "--log-level", "verbose"])
        assert result.exit_code == 2
        assert "Unknown log level" in result.output
