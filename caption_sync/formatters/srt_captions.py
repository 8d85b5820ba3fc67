"""SRT caption formatter: normalized SRT from any input format.

WHY: XML transcripts cannot be loaded by most players and editors, and
real-world SRT files are full of markup, CRLF/LF mixes and filler lines.
Writing the parsed document back out as clean SRT gives one portable,
markup-free file whatever the source was.

HOW: One block per entry: the entry's sequence index, the time range
rendered with format_timecode(), the entry's lines, and a blank line.
Lines hold decoded text, so ``<``, ``>`` and ``&`` are escaped as entities
again; otherwise the reader would take them for markup.

RULES:
- Output uses "\\n" line endings and ends with a single newline
- Sequence indexes are written as stored (XML entries are already 1..N)
- Re-reading the output of an SRT-sourced document yields the same entries
- Text is entity-escaped (quotes left alone); timing lines are not
- An empty document produces an empty string
- Media type: "application/x-subrip"
"""

from __future__ import annotations

import html
from typing import List

from caption_sync.core.ir import CaptionEntry
from caption_sync.core.timecode import format_timecode
from caption_sync.document import SubtitleDocument
from caption_sync.formatters.base import BaseFormatter, FormatterOutput


def render_block(entry: CaptionEntry) -> str:
    """Render a single entry as an SRT block (without trailing blank line)."""
    header = "{}\n{} --> {}".format(
        entry.sequence_index,
        format_timecode(entry.start_seconds),
        format_timecode(entry.end_seconds),
    )
    return "\n".join([header, *(html.escape(line, quote=False) for line in entry.lines)])


def generate_srt(entries: List[CaptionEntry]) -> str:
    if not entries:
        return ""
    return "\n\n".join(render_block(entry) for entry in entries) + "\n"


class SRTCaptionFormatter(BaseFormatter):
    """Formatter that writes the document as a normalized SRT file."""

    @property
    def name(self) -> str:
        return "SRT Captions"

    def format(self, document: SubtitleDocument) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="-captions.srt",
                content=generate_srt(list(document.entries)),
                media_type="application/x-subrip",
            ),
        ]
