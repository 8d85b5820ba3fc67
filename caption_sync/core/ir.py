"""Intermediate representation shared by both caption readers.

WHY: SRT files and XML transcripts describe the same thing, text shown
over a playback interval, in very different shapes. Everything downstream
of parsing (lookups, formatters, the CLI, the HTTP service) should see one
normalized form and never care where an entry came from.

HOW: Three small types:
  FormatKind   — which grammar a piece of text was read with
  ParseOptions — the two tunable parsing constants, passed explicitly
  CaptionEntry — one displayable unit of text with its time interval

RULES:
- CaptionEntry is frozen: entries are never mutated after a reader emits them
- lines is a tuple of non-empty, markup-free strings
- Times are float seconds from playback start
- Intervals are half-open: an entry is active for start <= t < end
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple


class FormatKind(str, enum.Enum):
    """Caption encodings the readers understand.

    Inherits from str so values serialize cleanly to JSON and CLI output.
    """

    SRT = "srt"
    XML_TRANSCRIPT = "xml_transcript"


@dataclass(frozen=True)
class ParseOptions:
    """Tunable constants for the readers.

    WHY: The end-time epsilon and the letter threshold have no documented
    origin. They are kept at their historical values but live here so
    callers and tests can change them without touching reader code.

    RULES:
    - xml_end_epsilon: seconds subtracted from the next node's start when
      inferring an XML entry's end time
    - min_letter_count: an SRT text line is kept only if it has MORE than
      this many alphabetic characters
    """

    xml_end_epsilon: float = 0.01
    min_letter_count: int = 2


@dataclass(frozen=True)
class CaptionEntry:
    """One caption shown over a playback interval.

    Attributes:
        sequence_index: 1-based ordinal, as declared in SRT or assigned to
                        emitted XML nodes. Used for diagnostics only.
        start_seconds: Interval start, in seconds.
        end_seconds: Interval end, in seconds (exclusive).
        lines: Plain-text display lines, in order.
    """

    sequence_index: int
    start_seconds: float
    end_seconds: float
    lines: Tuple[str, ...]

    @property
    def duration_seconds(self) -> float:
        return self.end_seconds - self.start_seconds

    def contains(self, time_seconds: float) -> bool:
        """True if the entry is on screen at ``time_seconds``."""
        return self.start_seconds <= time_seconds < self.end_seconds

    def text(self, separator: str = "\n") -> str:
        return separator.join(self.lines)
