"""Caption reader registry.

WHY: SubtitleDocument picks a reader from the sniffed format. A central
dict keeps that dispatch to one lookup and makes a new format one new
module plus one line here.

HOW: READERS maps FormatKind to reader *classes* (not instances).
Callers instantiate with their options:
``reader = READERS[FormatKind.SRT](options)``.

RULES:
- Every FormatKind member has exactly one reader
- Values are BaseReader subclasses (not instances)
- Importing a reader has no side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Type

from caption_sync.core.ir import FormatKind
from caption_sync.readers.srt import SRTReader
from caption_sync.readers.xml_transcript import XMLTranscriptReader

if TYPE_CHECKING:
    from caption_sync.readers.base import BaseReader

READERS: Dict[FormatKind, Type[BaseReader]] = {
    FormatKind.SRT: SRTReader,
    FormatKind.XML_TRANSCRIPT: XMLTranscriptReader,
}

__all__ = ["READERS", "SRTReader", "XMLTranscriptReader"]
