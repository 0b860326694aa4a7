"""Exception hierarchy for shellexec."""

from typing import Optional


class ShellExecError(Exception):
    """Base exception for shellexec errors."""

    pass


class ParseError(ShellExecError, ValueError):
    """Raised when a command line is malformed."""

    def __init__(self, message: str, line: Optional[str] = None):
        super().__init__(message)
        self.line = line


class SpawnError(ShellExecError):
    """Raised when a process could not be started at all.

    The underlying ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, command: str, message: str = "could not execute command"):
        super().__init__(f"{message}: {command}")
        self.command = command


class NonZeroExit(ShellExecError):
    """Raised when a process ran but returned a non-zero exit code."""

    def __init__(self, code: int, output: str = ""):
        super().__init__(f"process returned with code {code}")
        self.code = code
        self.output = output
