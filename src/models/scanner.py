"""
Scanner-specific data models

Delimiters, scan states and the value types returned by buffer scans.
"""

from enum import Enum
from dataclasses import dataclass


LEFT_DELIM = "{{"
RIGHT_DELIM = "}}"
COMMENT_OPEN = "/*"

# Returned by next()/peek() once the buffer is exhausted; never a valid character
EOF = ""

# Position reported by a delimiter scan that ran off the end of the buffer
END_OF_INPUT = -1


class ScanState(Enum):
    """
    States of the expansion state machine

    Each state is a step on the Template; running it consumes from the
    buffer and yields the next state. HALT ends the expansion run.
    """
    TEXT = "text"                # copy plain text up to the next {{
    DIRECTIVE = "directive"      # read the directive keyword
    HANDLER = "handler"          # run the selected directive handler
    COMMENT = "comment"          # discard a {{ /* ... }} comment
    SKIP_TO_END = "skip_to_end"  # discard the rest of a directive body
    HALT = "halt"


class HaltReason(Enum):
    """
    Why an expansion run stopped

    Only END_OF_INPUT means the whole source was scanned. The other two
    are silent truncations: the output collected so far is kept.
    """
    END_OF_INPUT = "end_of_input"
    UNKNOWN_DIRECTIVE = "unknown_directive"
    UNREADABLE_FILE = "unreadable_file"


@dataclass
class DelimitedText:
    """
    Result of scanning the buffer up to a delimiter

    Returned by SourceBuffer.delimiter_scanTo() and delimiter_consume().

    Attributes:
        text: Characters consumed before the delimiter (or all remaining
              characters if the delimiter never appears)
        position: Buffer position after the scan, or END_OF_INPUT when the
                  delimiter was not found

    Example:
        Scanning "hello {{ var a }}" for "{{" from position 0:
        DelimitedText(text="hello ", position=6)
    """
    text: str
    position: int

    @property
    def found(self) -> bool:
        return self.position != END_OF_INPUT
