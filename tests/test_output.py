"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb colour disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- print_document in JSON and plain modes
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from paramauth import output as output_module
from paramauth.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("paramauth.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("paramauth.output._is_tty", lambda: True)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("TERM", "xterm-256color")


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.RICH

    def test_auto_with_no_color_is_plain(self, tty):
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_format_is_kept(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_enabled(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        assert _should_disable_color() is False


class TestStreams:
    def test_data_goes_to_stdout(self, capsys):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_data("tok123")
        captured = capsys.readouterr()
        assert captured.out == "tok123\n"
        assert captured.err == ""

    def test_diagnostics_go_to_stderr(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.info("hello")
        mgr.warning("careful")
        mgr.error("broken")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "hello\nWarning: careful\nError: broken\n"

    def test_quiet_suppresses_info_but_not_errors(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("hello")
        mgr.error("broken")
        assert capsys.readouterr().err == "Error: broken\n"

    def test_debug_only_when_verbose(self, capsys):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("hidden")
        assert capsys.readouterr().err == ""
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
        assert mgr.is_verbose
        mgr.debug("shown")
        assert capsys.readouterr().err == "[debug] shown\n"

    def test_styled_messages_are_not_markup(self, capsys, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        OutputManager(format=OutputFormat.PLAIN).error("[bold]key[/bold] acme")
        assert capsys.readouterr().err == "Error: [bold]key[/bold] acme\n"


class TestPrintDocument:
    def test_json(self, capsys):
        OutputManager(format=OutputFormat.JSON, no_color=True).print_document(
            {"key": "acme", "cached": True}
        )
        assert json.loads(capsys.readouterr().out) == {"key": "acme", "cached": True}

    def test_plain(self, capsys):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_document(
            {"key": "acme", "valid": False}
        )
        assert capsys.readouterr().out == "key\tacme\nvalid\tFalse\n"


class TestGlobalInstance:
    def test_lazy_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_and_helpers(self, capsys):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.print_data("x")
        output_module.error("y")
        captured = capsys.readouterr()
        assert captured.out == "x\n"
        assert captured.err == "Error: y\n"
