"""pass-entry - Structured decoding of pass password store entries.

Parses the text of a single ``pass`` entry into its secret, the ``login``
and ``url`` directives, and the remaining free-form comment lines.
Provides an importable library and a small CLI for use in pipes.
"""

__version__ = "0.1.0"

from pass_entry.entry import (  # noqa: F401
    Entry,
    decode,
    decode_str,
    DecodeError,
    InvalidEncodingError,
    EmptyEntryError,
)
from pass_entry.cli import main  # noqa: F401
