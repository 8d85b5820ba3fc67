"""XML transcript reader: ``<transcript><text start=".." dur="..">`` files.

WHY: Timed-text transcripts (the format video sites export) carry a start
offset and a duration per node, in decimal seconds. Durations in these
files routinely overlap the next line, which makes captions flicker when
two are active at once, so the end of each entry is inferred from where
the next one begins.

HOW: The document is parsed with xml.etree.ElementTree. The children of
the ``transcript`` element are walked in document order; each child with
usable ``start`` and ``dur`` attributes becomes one single-line entry. The
end time is the next child's start minus ``xml_end_epsilon`` when the next
child has a start, otherwise start + dur.

RULES:
- Never raises: a bad node is skipped, a document that is not XML yields
  no entries (both logged)
- The next child is the positional next sibling, even if that sibling is
  itself skipped for missing ``dur``
- The inferred end is used only if it lies strictly after the start;
  otherwise start + dur stands
- Nodes whose text strips to nothing are skipped
- sequence_index counts emitted entries only: 1, 2, 3, ...
"""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from typing import List, Optional

from caption_sync.core.ir import CaptionEntry, FormatKind
from caption_sync.core.markup import strip_markup
from caption_sync.readers.base import BaseReader

logger = logging.getLogger(__name__)

TRANSCRIPT_TAG = "transcript"


def _seconds_attr(node: ET.Element, name: str) -> Optional[float]:
    """Read a non-negative decimal-seconds attribute, or None."""
    raw = node.get(name)
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def find_transcript(text: str) -> Optional[ET.Element]:
    """Parse ``text`` and return its ``transcript`` element, if any."""
    try:
        root = ET.fromstring(text.lstrip())
    except ET.ParseError as exc:
        logger.warning("Transcript is not well-formed XML: %s", exc)
        return None

    if root.tag == TRANSCRIPT_TAG:
        return root
    transcript = root.find(".//{}".format(TRANSCRIPT_TAG))
    if transcript is None:
        logger.warning("No <%s> element in XML document (root is <%s>)", TRANSCRIPT_TAG, root.tag)
    return transcript


class XMLTranscriptReader(BaseReader):
    """Reader for XML timed-text transcripts."""

    @property
    def kind(self) -> FormatKind:
        return FormatKind.XML_TRANSCRIPT

    def parse(self, text: str) -> List[CaptionEntry]:
        transcript = find_transcript(text)
        if transcript is None:
            return []

        epsilon = self.options.xml_end_epsilon
        nodes = list(transcript)
        entries: List[CaptionEntry] = []

        for position, node in enumerate(nodes):
            start = _seconds_attr(node, "start")
            duration = _seconds_attr(node, "dur")
            if start is None or duration is None:
                logger.debug("Skipping transcript node %d: missing or invalid start/dur", position)
                continue

            end = start + duration
            if position + 1 < len(nodes):
                next_start = _seconds_attr(nodes[position + 1], "start")
                if next_start is not None and next_start - epsilon > start:
                    end = next_start - epsilon

            line = strip_markup("".join(node.itertext()))
            if not line:
                logger.debug("Skipping transcript node %d: no text", position)
                continue

            entries.append(CaptionEntry(
                sequence_index=len(entries) + 1,
                start_seconds=start,
                end_seconds=end,
                lines=(line,),
            ))

        logger.debug("Read %d transcript entries from %d nodes", len(entries), len(nodes))
        return entries
