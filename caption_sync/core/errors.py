"""Exception types raised while reading caption sources.

WHY: Callers need to tell a bad time code from a structurally broken SRT
block from an unreadable file, and the top-level document loader needs a
single base class to catch when it degrades to an empty document.

HOW: CaptionParseError is the base for everything the parsers raise.
CaptionSourceError derives from OSError instead, because it describes the
file, not its content.

RULES:
- Readers raise only CaptionParseError subclasses
- Messages always include the offending token or block number
- CaptionSourceError is raised by file loading, never by a reader
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class CaptionParseError(Exception):
    """Base class for caption parsing failures."""


class InvalidTimeCodeError(CaptionParseError):
    """Raised when a clock token does not match ``H+:MM:SS,mmm``.

    RULES:
    - token holds the exact text that failed to decode
    """

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__("Invalid time code: {!r}".format(token))


class InvalidFormatError(CaptionParseError):
    """Raised when an SRT block cannot be scanned.

    WHY: SRT parsing is all-or-nothing. The error names the block that
    broke the document so the file can be fixed by hand.

    RULES:
    - block_number is 1-based over the non-empty blocks of the file
    - reason is a short human-readable description of the failed step
    """

    def __init__(self, block_number: int, reason: str) -> None:
        self.block_number = block_number
        self.reason = reason
        super().__init__("Invalid SRT block {}: {}".format(block_number, reason))


class CaptionSourceError(OSError):
    """Raised when caption text cannot be read from its source."""

    def __init__(self, path: Union[str, Path], detail: Optional[str] = None) -> None:
        self.path = Path(path)
        message = "Cannot read caption file {}".format(self.path)
        if detail:
            message = "{}: {}".format(message, detail)
        super().__init__(message)
