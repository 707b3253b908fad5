#!/usr/bin/env python3
"""Integration tests for projection, lead-time and snapshot commands."""

import json

from click.testing import CliRunner

from cashplan.cli.main import main
from cashplan.core.document import SnapshotStore


class TestProjectionCLI:
    """Test `cashplan projection`."""

    def setup_method(self):
        """Set up test runner."""
        self.runner = CliRunner()

    def test_show_table(self, snapshot_file):
        """Test the table output with summary."""
        result = self.runner.invoke(main, ["projection", "show", "--snapshot", str(snapshot_file)])

        assert result.exit_code == 0, result.output
        assert "2025-11" in result.output
        assert "2026-02" in result.output
        assert "42.500,00 €" in result.output
        assert "Locked Months: 1" in result.output

    def test_show_json(self, snapshot_file):
        """Test JSON output is parseable and re-based by actuals."""
        result = self.runner.invoke(
            main, ["projection", "show", "--snapshot", str(snapshot_file), "--format", "json"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert [row["closing"] for row in payload["series"]] == [16000.0, 25000.0, 34500.0, 42500.0]
        assert payload["actualComparisons"][0]["closingDelta"] == -2500.5
        assert payload["summary"]["locked_months"] == 1

    def test_show_reads_snapshot_document(self, temp_dir, sample_state):
        """Test a versioned snapshot document is unwrapped."""
        path = temp_dir / "doc.json"
        SnapshotStore(path).save(sample_state)

        result = self.runner.invoke(main, ["projection", "show", "--snapshot", str(path), "--format", "json"])

        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)["series"]) == 4

    def test_show_missing_snapshot(self, temp_dir):
        """Test a missing snapshot file is a CLI error."""
        result = self.runner.invoke(main, ["projection", "show", "--snapshot", str(temp_dir / "nope.json")])

        assert result.exit_code == 1
        assert "Snapshot not found" in result.output

    def test_show_bad_schema_version(self, temp_dir, sample_state):
        """Test a non-integer schemaVersion is a CLI error, not a traceback."""
        path = temp_dir / "doc.json"
        path.write_text(json.dumps({"schemaVersion": "v1", "rev": "1-abc", "data": sample_state}))

        result = self.runner.invoke(main, ["projection", "show", "--snapshot", str(path)])

        assert result.exit_code == 1
        assert "Invalid schemaVersion" in result.output

    def test_chart(self, snapshot_file, temp_dir):
        """Test chart rendering to an output directory."""
        out_dir = temp_dir / "charts"
        result = self.runner.invoke(
            main, ["projection", "chart", "--snapshot", str(snapshot_file), "--output-dir", str(out_dir)]
        )

        assert result.exit_code == 0, result.output
        assert len(list(out_dir.glob("*.png"))) == 1


class TestLeadTimeCLI:
    """Test `cashplan leadtime`."""

    def setup_method(self):
        """Set up test runner."""
        self.runner = CliRunner()

    def test_resolve(self, snapshot_file):
        """Test a resolved lead time with its source."""
        result = self.runner.invoke(
            main, ["leadtime", "resolve", "sku-a", "sup-1", "--snapshot", str(snapshot_file)]
        )

        assert result.exit_code == 0, result.output
        assert "12 days (Supplier×SKU)" in result.output

    def test_resolve_missing(self, snapshot_file):
        """Test an unknown pair reports missing."""
        result = self.runner.invoke(
            main, ["leadtime", "resolve", "sku-z", "sup-9", "--snapshot", str(snapshot_file)]
        )

        assert result.exit_code == 0
        assert "missing" in result.output

    def test_report(self, snapshot_file):
        """Test the mapping report."""
        result = self.runner.invoke(main, ["leadtime", "report", "--snapshot", str(snapshot_file)])

        assert result.exit_code == 0, result.output
        assert "Supplier Default" in result.output


class TestSnapshotCLI:
    """Test `cashplan snapshot`."""

    def setup_method(self):
        """Set up test runner."""
        self.runner = CliRunner()

    def test_init_and_info(self, temp_dir):
        """Test creating and inspecting an empty workspace."""
        path = temp_dir / "ws.json"

        result = self.runner.invoke(main, ["snapshot", "init", "--snapshot", str(path)])
        assert result.exit_code == 0, result.output
        assert path.exists()

        info = self.runner.invoke(main, ["snapshot", "info", "--snapshot", str(path)])
        assert info.exit_code == 0, info.output
        assert "Schema Version: 1" in info.output
        assert SnapshotStore(path).load().rev in info.output

    def test_init_refuses_overwrite(self, temp_dir):
        """Test init does not clobber an existing workspace."""
        path = temp_dir / "ws.json"
        self.runner.invoke(main, ["snapshot", "init", "--snapshot", str(path)])

        result = self.runner.invoke(main, ["snapshot", "init", "--snapshot", str(path)])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_empty_workspace_projects_defaults(self, temp_dir):
        """Test an initialized workspace projects the default horizon."""
        path = temp_dir / "ws.json"
        self.runner.invoke(main, ["snapshot", "init", "--snapshot", str(path)])

        result = self.runner.invoke(main, ["projection", "show", "--snapshot", str(path), "--format", "json"])

        assert result.exit_code == 0, result.output
        series = json.loads(result.output)["series"]
        assert len(series) == 18
        assert series[0]["month"] == "2025-02"
