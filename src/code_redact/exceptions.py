"""
Error taxonomy for the code redaction tool.

Validation problems with a request (no source text, unknown language hint)
are reported precisely as bad requests. Everything that goes wrong after
validation is collapsed into a single opaque ``RedactionFailedError``.
"""

from typing import Optional


class CodeRedactError(Exception):
    """Base class for all errors raised by code_redact."""

    status_code = 500


class BadRequestError(CodeRedactError):
    """The request itself is malformed."""

    status_code = 400


class EmptyInputError(BadRequestError):
    """No source code was supplied."""

    def __init__(self, message: str = "No source code provided"):
        super().__init__(message)


class InvalidGrammarHintError(BadRequestError):
    """A non-empty language hint did not match any grammar profile."""

    def __init__(self, hint: str):
        super().__init__("Invalid language specified")
        self.hint = hint


class ParseError(CodeRedactError):
    """
    Source text is not valid under the selected grammar profile.

    Internal to the redaction pipeline; callers of the orchestrator only
    ever see ``RedactionFailedError``.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} ({line}:{column})"
        super().__init__(message)


class RedactionFailedError(CodeRedactError):
    """Redaction failed after the request was validated."""

    status_code = 500

    def __init__(self, message: str = "Failed to redact source code"):
        super().__init__(message)
