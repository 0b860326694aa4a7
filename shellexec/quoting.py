"""Quoting of tokens into command lines that shlex_parser splits back unchanged."""

from typing import Iterable

from .shlex_parser import DQT, ESC, SQT, is_space


def quote(value: str) -> str:
    """
    Return the shortest safe representation of a token.

    Three renderings are built (backslash escaped, single quoted and double
    quoted) and the shortest wins. Ties go to double quotes over raw, and to
    either of those over single quotes.

    Args:
        value: The token to quote

    Returns:
        A line fragment that splits back to exactly ``value``
    """
    if not value:
        return DQT + DQT

    raw = _quote_raw(value)
    single = _quote_single(value)
    double = _quote_double(value)

    winner = double if len(raw) >= len(double) else raw
    if len(single) < len(winner):
        return single
    return winner


def join(command: str, args: Iterable[str] = ()) -> str:
    """Assemble a command line that parses back to ``command`` and ``args``."""
    parts = [quote(command)]
    for arg in args:
        parts.append(quote(arg))
    return " ".join(parts)


def _quote_raw(value: str) -> str:
    chars = []
    for c in value:
        if is_space(c) or c in (SQT, DQT, ESC):
            chars.append(ESC)
        chars.append(c)
    return "".join(chars)


def _quote_single(value: str) -> str:
    chars = [SQT]
    for c in value:
        if c == SQT:
            # No escapes inside single quotes: close, escape raw, reopen
            chars.append(SQT + ESC + SQT + SQT)
        else:
            chars.append(c)
    chars.append(SQT)
    return "".join(chars)


def _quote_double(value: str) -> str:
    chars = [DQT]
    for c in value:
        if c in (DQT, ESC):
            chars.append(ESC)
        chars.append(c)
    chars.append(DQT)
    return "".join(chars)
