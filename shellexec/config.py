"""Environment-driven defaults."""

import locale
import os

ENCODING_ENV = "SHELLEXEC_ENCODING"
LOG_LEVEL_ENV = "SHELLEXEC_LOG_LEVEL"


def default_encoding() -> str:
    """Get the encoding used to decode process output."""
    return os.environ.get(ENCODING_ENV) or locale.getpreferredencoding(False)


def default_log_level() -> str:
    """Get the CLI log level name."""
    return os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
