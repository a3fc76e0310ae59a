"""
Error Reporting

Compiler diagnostics for template expressions and a collecting reporter
that renders them with a source snippet and caret underline.
"""

import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .source_location import SourceLocation
from ..utils.config import ERROR_POINTER_CHAR


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("TMPLEXPR_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------

class ErrorCode(Enum):
    """Diagnostic codes raised by expression transforms."""
    X_INVALID_EXPRESSION = "X_INVALID_EXPRESSION"


ERROR_MESSAGES = {
    ErrorCode.X_INVALID_EXPRESSION: "Invalid JavaScript expression",
}


# ---------------------------------------------------------------------------
# Error dataclass
# ---------------------------------------------------------------------------

@dataclass
class CompilerError:
    """
    A diagnostic reported through a transform context's error sink.

    - code: what went wrong
    - loc: template-relative location of the offending expression
    - source: the offending raw expression text
    - detail: parser-specific explanation (optional)
    """
    code: ErrorCode
    loc: Optional[SourceLocation]
    source: str = ""
    detail: Optional[str] = None

    @property
    def message(self) -> str:
        base = ERROR_MESSAGES[self.code]
        return f"{base}: {self.detail}" if self.detail else base


ErrorHandler = Callable[[CompilerError], None]


def create_compiler_error(
    code: ErrorCode,
    loc: Optional[SourceLocation],
    source: str = "",
    detail: Optional[str] = None,
) -> CompilerError:
    return CompilerError(code=code, loc=loc, source=source, detail=detail)


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def _format_diagnostic(
    error: CompilerError,
    template: Optional[str],
    filename: str,
    color: bool = False,
) -> str:
    """
    Render a single diagnostic.

    Example output (plain, no color)::

        error[X_INVALID_EXPRESSION]: Invalid JavaScript expression
         --> App.vue:1:11
          |
        1 | <div :id="foo(" />
          |           ^^^^
    """
    out: List[str] = []
    out.append(
        _style(f"error[{error.code.value}]", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    )

    loc = error.loc
    if loc is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        return "\n".join(out)

    if template is not None:
        src_lines = template.split("\n")
        line_num = loc.start.line
        column = loc.start.column
        code_line = src_lines[line_num - 1] if 0 < line_num <= len(src_lines) else ""
    else:
        # Without the template, show the expression on its own line
        line_num = loc.start.line
        column = 1
        code_line = error.source.split("\n")[0]

    if loc.end.line == loc.start.line and loc.end.column > loc.start.column:
        span_len = loc.end.column - loc.start.column
    else:
        span_len = max(1, len(code_line) - column + 1)

    gw = max(len(str(line_num)), 1)
    out.append(
        _style(" " * gw + "--> ", _BOLD, _BLUE, color=color)
        + f"{filename}:{loc.start.line}:{loc.start.column}"
    )
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    out.append(_style(str(line_num).rjust(gw) + " | ", _BOLD, _BLUE, color=color) + code_line)
    carets = " " * (column - 1) + ERROR_POINTER_CHAR * max(1, span_len)
    out.append(_style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color) + _style(carets, _BOLD, _RED, color=color))

    if error.source and template is not None:
        pad = " " * (gw + 1)
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("note: ", _BOLD, color=color)
            + f"while parsing `{error.source}`"
        )
    return "\n".join(out)


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """
    Collects diagnostics for one template.

    `report_error` has the `ErrorHandler` signature so a reporter can be
    passed directly as a context's `on_error` sink.
    """

    def __init__(self, template: Optional[str] = None, filename: str = "<template>"):
        self.template = template
        self.filename = filename
        self.errors: List[CompilerError] = []

    def report_error(self, error: CompilerError) -> None:
        self.errors.append(error)

    def format_error(self, error: CompilerError, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(error, self.template, self.filename, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        parts = [self.format_error(e, color=color) for e in self.errors]
        use_color = color if color is not None else _use_color()
        count = len(self.errors)
        summary = f"aborting due to {count} previous error{'s' if count != 1 else ''}"
        parts.append(
            _style("error", _BOLD, _RED, color=use_color)
            + _style(f": {summary}", _BOLD, color=use_color)
        )
        return "\n\n".join(parts)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def print_errors(self) -> None:
        if self.errors:
            print(self.format_all_errors(), file=sys.stderr)


# ============================================================================
# Exception Classes
# ============================================================================

class ExpressionSyntaxError(Exception):
    """
    Raised by the expression parser when text is not a valid expression.

    Offsets are relative to the buffer handed to the parser.
    """
    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.offset = offset
