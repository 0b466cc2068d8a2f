"""Tests for the command-line summary tool."""

import sys

import pytest

from tradelog import cli
from tradelog.schemas.dashboard import SummaryMetrics


def test_summary_prints_metrics(sample_export, capsys):
    cli.summary(str(sample_export))
    out = capsys.readouterr().out
    assert "Wins / Losses: 3 / 2" in out
    assert "Win rate:      60.0%" in out
    assert "Total P&L:     1,495.00" in out


def test_summary_date_range(sample_export, capsys):
    cli.summary(str(sample_export), "2024-03-05", "2024-03-05")
    out = capsys.readouterr().out
    assert "Trades:        2 (2 wins/losses)" in out
    assert "Total P&L:     125.00" in out


def test_format_summary_shows_missing_values():
    text = cli.format_summary(SummaryMetrics())
    assert "Average win:   n/a" in text
    assert "Win multiple:  n/a" in text


def test_check(sample_export, capsys):
    cli.check(str(sample_export))
    out = capsys.readouterr().out
    assert "6 trades" in out
    assert "CLJ4, ESH4, NQH4" in out
    assert "2024-03-04 .. 2024-03-07" in out


def test_missing_file_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.summary(str(tmp_path / "missing.txt"))
    assert exc.value.code == 1
    assert "Could not read" in capsys.readouterr().out


def test_bad_date_exits(sample_export):
    with pytest.raises(SystemExit):
        cli.summary(str(sample_export), "03/05/2024")


@pytest.mark.parametrize("argv", [["tradelog"], ["tradelog", "explode", "file.txt"]])
def test_main_usage_errors(argv, monkeypatch):
    monkeypatch.setattr(sys, "argv", argv)
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 1
