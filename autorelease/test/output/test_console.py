"""Tests for autorelease.output.console module."""

from __future__ import annotations

import pytest

from autorelease.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_captures_styles(self) -> None:
        console = MockConsole()
        console.success("done")
        console.warning("careful")
        console.error("broken")
        console.print("plain", Style.DIM)

        assert console.messages == ["OK done", "warning: careful", "error: broken", "plain"]
        assert console.has_success()
        assert console.has_warning()
        assert console.has_error()

    def test_find_and_clear(self) -> None:
        console = MockConsole()
        console.info("Release v1.4.0")
        assert len(console.find("v1.4.0")) == 1
        console.clear()
        assert console.text == ""


class TestRichConsole:
    def test_print_does_not_interpret_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("- [x] bump [bold]lib[/bold]")

        assert "- [x] bump [bold]lib[/bold]" in capsys.readouterr().out

    def test_error_escapes_message(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("tag [v1]")

        assert "error: tag [v1]" in capsys.readouterr().out
