"""Exception hierarchy for fillpdf.

Every error carries an `error_code` keyed into config.ERROR_MESSAGES so
callers can map failures to stable identifiers.
"""
from __future__ import annotations
from typing import Optional, Sequence

from .config import ERROR_MESSAGES


class FillPDFError(Exception):
    """Base error for all fillpdf failures."""
    error_code = 'internal_error'

    def __init__(self, message: Optional[str] = None):
        self.message = message or ERROR_MESSAGES.get(self.error_code, self.error_code)
        super().__init__(self.message)


class ToolSetupError(FillPDFError):
    error_code = 'tool_setup'


class FormIOError(FillPDFError):
    error_code = 'io_failed'


class FieldDumpParseError(FillPDFError):
    error_code = 'dump_parse'

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"cannot parse line {line!r} of field dump")


class NotAcroFormError(FillPDFError):
    error_code = 'not_acroform'


class FieldValidationError(FillPDFError):
    error_code = 'invalid_field'

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(message)


class CommandError(FillPDFError):
    """Non-zero exit of an external tool; stderr is kept for diagnosis."""
    error_code = 'command_failed'

    def __init__(self, command: Sequence[str], returncode: int, stderr: str):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"{self.command[0]} exited with status {returncode}: {stderr.strip()}"
        )


class SessionClosedError(FillPDFError):
    error_code = 'session_closed'
