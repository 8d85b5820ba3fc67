"""SRT clock time codes: decoding and rendering.

WHY: Falling back to zero for an unreadable hour or millisecond field would
silently shift a caption by minutes. Decoding is therefore strict, and a
bad token surfaces as an error the SRT reader turns into a document-level
failure.

HOW: A single anchored regex captures the four numeric fields. Rendering
works on integer milliseconds so values survive a decode/format cycle.

RULES:
- Accepted grammar: one or more hour digits, two minute digits, two second
  digits, a comma, one or more millisecond digits (``H+:MM:SS,mmm``)
- Minutes and seconds are not range-checked beyond their two-digit width
- The millisecond field is a count of thousandths, whatever its width
- format_timecode() rejects negative input
"""

from __future__ import annotations

import re

from caption_sync.core.errors import InvalidTimeCodeError

TIMECODE_RE = re.compile(r"^(\d+):(\d{2}):(\d{2}),(\d+)$", re.ASCII)


def decode_timecode(token: str) -> float:
    """Convert ``HH:MM:SS,mmm`` to seconds.

    Args:
        token: The clock string, without surrounding whitespace.

    Returns:
        Offset from playback start in seconds.

    Raises:
        InvalidTimeCodeError: If any component is missing or non-numeric.
    """
    match = TIMECODE_RE.fullmatch(token)
    if match is None:
        raise InvalidTimeCodeError(token)
    hours, minutes, seconds, millis = (int(group) for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds + millis / 1000


def format_timecode(seconds: float) -> str:
    """Render seconds as an SRT time code (``HH:MM:SS,mmm``).

    Hours widen past two digits when needed.
    """
    if seconds < 0:
        raise ValueError("Time code cannot be negative: {}".format(seconds))
    total_ms = int(round(seconds * 1000))
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)
