"""Shell-like lexer for splitting a command line into a command and arguments."""

from .errors import ParseError

EOL = "\0"
ESC = "\\"
SQT = "'"
DQT = '"'

DEFAULT = 0
SINGLE_QUOTE = 1
DOUBLE_QUOTE = 2

# str.isspace also accepts the ASCII information separators, which are not
# Unicode White_Space
INFO_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_space(c: str) -> bool:
    """Check if a character separates tokens."""
    return c.isspace() and c not in INFO_SEPARATORS


def split(line: str) -> list[str]:
    """
    Split a line into tokens, handling quotes and escapes.

    Rules:
    - Whitespace separates tokens, runs of whitespace count as one separator
    - Single quotes (') group characters literally, no escapes inside
    - Double quotes (") group characters, only \\" and \\\\ are escapes inside
    - Backslash (\\) outside quotes escapes the next character
    - Adjacent quoted and unquoted spans join into one token
    - An empty quote pair ("" or '') produces an empty token

    Args:
        line: The line to split

    Returns:
        List of parsed tokens, empty for a blank line

    Raises:
        ParseError: If the line contains a NUL character, or ends inside a
            quote or after a lone backslash
    """
    tokens = []
    state = DEFAULT
    escape = False
    # True once the current token has a character or a quote pair
    opened = False
    token_chars = []

    chars = line + EOL
    last = len(chars) - 1

    for i, c in enumerate(chars):
        if c == EOL:
            if i < last:
                raise ParseError("invalid control character", line)
            if state != DEFAULT or escape:
                raise ParseError("unexpected end of line", line)

        if state == DEFAULT:
            if escape:
                escape = False
                token_chars.append(c)
                opened = True
            elif is_space(c) or c == EOL:
                if opened:
                    tokens.append("".join(token_chars))
                    token_chars = []
                    opened = False
            elif c == SQT:
                state = SINGLE_QUOTE
                opened = True
            elif c == DQT:
                state = DOUBLE_QUOTE
                opened = True
            elif c == ESC:
                escape = True
            else:
                token_chars.append(c)
                opened = True

        elif state == SINGLE_QUOTE:
            if c == SQT:
                state = DEFAULT
            else:
                token_chars.append(c)

        elif state == DOUBLE_QUOTE:
            if escape:
                escape = False
                # Unknown escapes keep their backslash
                if c != ESC and c != DQT:
                    token_chars.append(ESC)
                token_chars.append(c)
            elif c == DQT:
                state = DEFAULT
            elif c == ESC:
                escape = True
            else:
                token_chars.append(c)

    return tokens


def parse(line: str) -> tuple[str, list[str]]:
    """
    Parse a command line into its command and arguments.

    Args:
        line: The command line to parse

    Returns:
        Tuple of the command and the list of its arguments

    Raises:
        ParseError: If the line is malformed or contains no tokens
    """
    tokens = split(line)
    if not tokens:
        raise ParseError("empty command line", line)
    return tokens[0], tokens[1:]
