"""Plain text formatter: the caption text without timing.

WHY: Language learners and reviewers want to read the dialogue as a
script, without indexes or time codes. This is the simplest
output format and the quickest check that a file parsed sensibly.

HOW: Each entry's lines are joined with a space into one paragraph;
paragraphs are separated by a blank line. Consecutive entries with
identical text (common in XML transcripts re-timed for roll-up display)
are written once.

RULES:
- One paragraph per entry, lines joined with a single space
- Consecutive duplicate paragraphs collapse into one
- Double newline between paragraphs, single trailing newline
- Empty document produces an empty string
- Output suffix: "-captions.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List

from caption_sync.document import SubtitleDocument
from caption_sync.formatters.base import BaseFormatter, FormatterOutput


def document_paragraphs(document: SubtitleDocument) -> List[str]:
    paragraphs: List[str] = []
    for entry in document:
        paragraph = entry.text(" ")
        if paragraphs and paragraphs[-1] == paragraph:
            continue
        paragraphs.append(paragraph)
    return paragraphs


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces the caption text as readable paragraphs."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, document: SubtitleDocument) -> List[FormatterOutput]:
        paragraphs = document_paragraphs(document)
        content = "\n\n".join(paragraphs) + "\n" if paragraphs else ""
        return [
            FormatterOutput(
                suffix="-captions.txt",
                content=content,
                media_type="text/plain",
            ),
        ]
