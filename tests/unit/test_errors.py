#!/usr/bin/env python3
"""
Tests for diagnostics and ErrorReporter formatting.
"""

from tmplexpr.shared import (
    CompilerError,
    ErrorCode,
    ErrorReporter,
    Position,
    SourceLocation,
    create_compiler_error,
)


def _error(detail=None, loc=None, source="foo("):
    return create_compiler_error(ErrorCode.X_INVALID_EXPRESSION, loc, source=source, detail=detail)


class TestCompilerError:
    def test_message_without_detail(self):
        assert _error().message == "Invalid JavaScript expression"

    def test_message_with_detail(self):
        error = _error("Unexpected end of expression")
        assert error.message == "Invalid JavaScript expression: Unexpected end of expression"

    def test_factory_builds_dataclass(self):
        assert isinstance(_error(), CompilerError)


class TestErrorReporter:
    """Rendering with a snippet and caret underline"""

    def test_collects_errors(self):
        reporter = ErrorReporter()
        assert not reporter.has_errors()
        reporter.report_error(_error())
        assert reporter.has_errors()
        assert len(reporter.errors) == 1

    def test_format_with_template(self):
        template = '<div :id="foo(" />'
        loc = SourceLocation(Position(10, 1, 11), Position(14, 1, 15), "foo(")
        reporter = ErrorReporter(template=template, filename="App.vue")
        text = reporter.format_error(_error(loc=loc), color=False)
        lines = text.split("\n")
        assert lines[0] == "error[X_INVALID_EXPRESSION]: Invalid JavaScript expression"
        assert lines[1] == " --> App.vue:1:11"
        assert lines[3] == "1 | " + template
        assert lines[4] == "  | " + " " * 10 + "^^^^"
        assert "note: while parsing `foo(`" in text

    def test_format_without_location(self):
        text = ErrorReporter().format_error(_error(), color=False)
        assert "<unknown location>" in text

    def test_format_all_errors_summary(self):
        reporter = ErrorReporter()
        reporter.report_error(_error())
        reporter.report_error(_error())
        text = reporter.format_all_errors(color=False)
        assert text.endswith("error: aborting due to 2 previous errors")

    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        reporter = ErrorReporter()
        reporter.report_error(_error())
        assert "\033[" not in reporter.format_all_errors()

    def test_color(self):
        text = ErrorReporter().format_error(_error(), color=True)
        assert "\033[31m" in text

    def test_print_errors_writes_stderr(self, monkeypatch, capsys):
        monkeypatch.setenv("NO_COLOR", "1")
        reporter = ErrorReporter()
        reporter.report_error(_error())
        reporter.print_errors()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("error[X_INVALID_EXPRESSION]")
        assert captured.err.endswith("1 previous error\n")

    def test_print_errors_silent_when_clean(self, capsys):
        ErrorReporter().print_errors()
        assert capsys.readouterr().err == ""
