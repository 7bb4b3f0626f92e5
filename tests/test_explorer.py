"""Tests for the CLI."""
import importlib

import pytest

import explorer
from library_catalog import config as config_module


def test_no_command_exits(capsys):
    """Test that running without a command prints help and exits 1."""
    with pytest.raises(SystemExit) as exc:
        explorer.main([])
    assert exc.value.code == 1
    assert "Catalog Explorer" in capsys.readouterr().out


def test_stats_command(capsys):
    """Test the stats command."""
    explorer.main(["stats"])
    out = capsys.readouterr().out
    assert "LIBRARY STATISTICS" in out
    assert "Total books:" in out


def test_list_available_compact(capsys):
    """Test listing available books."""
    explorer.main(["list", "--status", "available", "--format", "compact"])
    out = capsys.readouterr().out
    assert "Books (available)" in out
    assert "The Clean Coder" in out
    assert "Design Patterns" not in out


def test_search_command(capsys):
    """Test searching by author."""
    explorer.main(["search", "--author", "kyle"])
    out = capsys.readouterr().out
    assert "Matches Found: 1" in out
    assert "You Don't Know JS" in out


def test_search_case_sensitive(capsys):
    """Test that --case-sensitive changes the results."""
    explorer.main(["search", "--author", "kyle", "--case-sensitive"])
    assert "Matches Found: 0" in capsys.readouterr().out


def test_titles_and_summary(capsys):
    """Test the titles and summary commands."""
    explorer.main(["titles"])
    assert "Clean Architecture" in capsys.readouterr().out

    explorer.main(["summary"])
    assert "Status: Available at A1-23" in capsys.readouterr().out


def test_groups_and_analysis(capsys):
    """Test the groups and analysis commands."""
    explorer.main(["groups"])
    assert "Software Engineering (1)" in capsys.readouterr().out

    explorer.main(["analysis"])
    assert "Publication by Decade" in capsys.readouterr().out


def test_errors_exit_with_status_1(monkeypatch):
    """Test that unexpected errors are logged and exit 1."""
    def broken(*args):
        raise RuntimeError("boom")

    monkeypatch.setitem(explorer.COMMANDS, "stats", broken)
    with pytest.raises(SystemExit) as exc:
        explorer.main(["stats"])
    assert exc.value.code == 1


def test_config_reads_environment(monkeypatch):
    """Test that Config picks up environment overrides."""
    monkeypatch.setenv("CATALOG_DEFAULT_FORMAT", "compact")
    monkeypatch.setenv("CATALOG_TRUNCATE_WIDTH", "12")
    monkeypatch.setenv("CATALOG_CASE_SENSITIVE", "yes")
    monkeypatch.setenv("CATALOG_LOG_LEVEL", "debug")

    reloaded = importlib.reload(config_module)
    try:
        assert reloaded.Config.DEFAULT_FORMAT == "compact"
        assert reloaded.Config.TRUNCATE_WIDTH == 12
        assert reloaded.Config.CASE_SENSITIVE_SEARCH is True
        assert reloaded.Config.LOG_LEVEL == "DEBUG"
    finally:
        monkeypatch.undo()
        importlib.reload(config_module)


def test_summary_reuses_cache_between_runs(capsys):
    """Test that a second summary run is served from the shared cache."""
    explorer.cached_summary.cache_clear()

    explorer.main(["summary"])
    first_size = explorer.cached_summary.cache_size()
    explorer.main(["summary"])

    assert first_size == len(explorer.get_catalog())
    assert explorer.cached_summary.cache_size() == first_size
    assert capsys.readouterr().out.count("Status:") == 2 * first_size
