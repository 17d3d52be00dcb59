"""
Record suppliers.
Every supplier returns a finite tuple of text records known up front.
Input is decoded as strict UTF-8 whether it comes from a file or stdin.
"""

import io
import sys
from typing import Optional, TextIO, Tuple

ENCODING = 'utf-8'

# Default corpus when no input is given
SAMPLE_CORPUS: Tuple[str, ...] = (
    "This is sentence one.",
    "This is sentence two.",
    "This is a sentence that ends with red.",
    "This is a sentence that ends with blue.",
)


def read_records(stream: TextIO) -> Tuple[str, ...]:
    """Read one record per line, without the trailing newline."""
    return tuple(line.rstrip('\r\n') for line in stream)


def _read_stdin() -> Tuple[str, ...]:
    buffer = getattr(sys.stdin, 'buffer', None)
    if buffer is None:
        # Already text (e.g. replaced by a StringIO)
        return read_records(sys.stdin)
    # Decode the raw bytes ourselves so the locale's error handler does not apply
    return read_records(io.StringIO(buffer.read().decode(ENCODING)))


def load_records(path: Optional[str] = None) -> Tuple[str, ...]:
    """
    Load records for a run.

    Args:
        path: File to read, '-' for stdin, or None for the sample corpus

    Returns:
        Tuple of records

    Raises:
        OSError: If the input file cannot be opened or read
        UnicodeDecodeError: If the input is not valid UTF-8
    """
    if path is None:
        return SAMPLE_CORPUS
    if path == '-':
        return _read_stdin()
    with open(path, 'r', encoding=ENCODING) as f:
        return read_records(f)
