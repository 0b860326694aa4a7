"""Execution of command lines as local processes, or through a mock for tests."""

import abc
import codecs
import logging
import subprocess
from typing import Callable, Optional

from . import config
from .errors import NonZeroExit, SpawnError
from .quoting import join
from .shlex_parser import parse

logger = logging.getLogger(__name__)

RunCallback = Callable[..., tuple[str, int]]


class Executor(abc.ABC):
    """Interface for command execution."""

    @abc.abstractmethod
    def run(self, command: str, *args: str) -> tuple[str, int]:
        """Execute a command with separated arguments.

        Returns:
            Tuple of the combined stdout/stderr output and the exit code
        """

    def run_line(self, command_line: str) -> tuple[str, int]:
        """Parse an escaped single string command line and execute it."""
        command, args = parse(command_line)
        return self.run(command, *args)


class LocalExecutor(Executor):
    """Executes commands as local processes without an intermediate shell."""

    def __init__(self, encoding: Optional[str] = None):
        """
        Args:
            encoding: Codec for decoding output, ``SHELLEXEC_ENCODING`` or the
                locale when omitted

        Raises:
            LookupError: If the encoding is unknown
        """
        self.encoding = codecs.lookup(encoding).name if encoding else None

    def run(self, command: str, *args: str) -> tuple[str, int]:
        # Unknown codecs fail before the process is spawned
        encoding = self.encoding or codecs.lookup(config.default_encoding()).name

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Running %s", join(command, args))

        try:
            proc = subprocess.run(
                [command, *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
            )
        except (OSError, ValueError) as e:
            # ValueError: NUL in the command or an argument
            logger.warning("Could not execute %s: %s", command, e)
            raise SpawnError(command) from e

        output = proc.stdout.decode(encoding, errors="replace")
        if proc.returncode != 0:
            logger.debug("%s returned with code %d", command, proc.returncode)
        return output, proc.returncode


class MockExecutor(Executor):
    """Forwards executed commands to a callback instead of running them.

    ``run_line`` still goes through the real parser, so malformed lines raise
    ``ParseError`` without reaching the callback.
    """

    def __init__(self, run_callback: RunCallback):
        self.run_callback = run_callback

    def run(self, command: str, *args: str) -> tuple[str, int]:
        return self.run_callback(command, *args)


DEFAULT_EXECUTOR: Executor = LocalExecutor()


def set_default_executor(executor: Executor) -> Executor:
    """Replace the executor used by the module level functions.

    Returns:
        The previous default executor
    """
    global DEFAULT_EXECUTOR
    previous = DEFAULT_EXECUTOR
    DEFAULT_EXECUTOR = executor
    return previous


def run(command: str, *args: str) -> tuple[str, int]:
    """Execute a command with given arguments using the default executor."""
    return DEFAULT_EXECUTOR.run(command, *args)


def run_line(command_line: str) -> tuple[str, int]:
    """Parse the given command line and run it using the default executor."""
    return DEFAULT_EXECUTOR.run_line(command_line)


def should_run(command: str, *args: str) -> str:
    """
    Execute a command like ``run`` but fail on non-zero exit codes.

    Returns:
        The combined output of the process

    Raises:
        NonZeroExit: If the process returned a non-zero exit code
    """
    output, code = run(command, *args)
    if code != 0:
        raise NonZeroExit(code, output)
    return output


def should_run_line(command_line: str) -> str:
    """Execute a command line like ``run_line`` but fail on non-zero exit codes."""
    output, code = run_line(command_line)
    if code != 0:
        raise NonZeroExit(code, output)
    return output
