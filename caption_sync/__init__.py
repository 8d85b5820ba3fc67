"""Caption Sync — SRT and XML transcript parsing for synchronized playback.

WHY: A media player that shows captions needs one thing from a caption
file: an ordered list of plain-text entries with start and end times, and
a fast answer to "which one is on screen now?". Caption files arrive as
SRT blocks or as XML timed-text transcripts, both full of markup.

HOW: Three-stage pipeline: sniff (pick a reader from the leading
bytes), read (format-specific scanning into CaptionEntry values), look up
(SubtitleDocument answers entry_active_at() on every playback tick).
Formatters, the CLI and the HTTP service sit on top of the document.

RULES:
- SubtitleDocument.load() never raises; broken input yields an empty
  document and a logged warning
- Entries are immutable and kept in source order
- Parsing keeps no global state; documents can be built concurrently
"""

from caption_sync.core.errors import (
    CaptionParseError,
    CaptionSourceError,
    InvalidFormatError,
    InvalidTimeCodeError,
)
from caption_sync.core.ir import CaptionEntry, FormatKind, ParseOptions
from caption_sync.document import SubtitleDocument, read_caption_file

__version__ = "0.1.0"

__all__ = [
    "CaptionEntry",
    "CaptionParseError",
    "CaptionSourceError",
    "FormatKind",
    "InvalidFormatError",
    "InvalidTimeCodeError",
    "ParseOptions",
    "SubtitleDocument",
    "read_caption_file",
]
