"""Tests for main module."""

import tempfile
from pathlib import Path

import pandas as pd

from hanoi_moves.main import main


def test_main_exports_configured_tower(monkeypatch, capsys):
    """Test a full run driven by environment variables."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "tower.parquet"
        monkeypatch.setenv("HANOI_HEIGHT", "4")
        monkeypatch.setenv("HANOI_BATCH_SIZE", "5")
        monkeypatch.setenv("HANOI_OUTPUT_FILE", str(output_path))
        monkeypatch.delenv("HANOI_CSV_VERIFICATION", raising=False)

        assert main() == 0

        assert len(pd.read_parquet(output_path)) == 15
        assert "Moves written: 15" in capsys.readouterr().out


def test_main_reports_invalid_height(monkeypatch):
    """Test that a bad height is logged and turned into exit status 1."""
    monkeypatch.setenv("HANOI_HEIGHT", "0")

    assert main() == 1
