"""
errors.py

PURPOSE: The single exception type for lexing, parsing and type resolution.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
Position information travels on the error itself rather than in a
subclass per failure site, so callers handle every failure the same way.
"""


class ParseError(Exception):
    """
    A failure to read a command file.

    Attributes:
        message: Human-readable description of the problem
        line: 1-based source line where the problem was detected
        cause: Lower-level exception that triggered this one, if any
    """

    def __init__(self, message: str, line: int, cause: BaseException | None = None):
        super().__init__(message, line)
        self.message = message
        self.line = line
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"
