"""Formatter contract for caption document exports.

WHY: A parsed SubtitleDocument leaves the process in several shapes: SRT
for players, plain text for reading, JSON for web clients. The CLI's
--formats flag and the HTTP export endpoint pick a formatter by key and
must not care which one they got.

HOW: BaseFormatter subclasses render a whole document into
FormatterOutput values. The output carries its own file suffix and MIME
type so the caller can name the file or set Content-Type without knowing
the format.

RULES:
- ``format()`` takes the document as loaded, including an empty document
  from a failed load, and must not raise for it
- Formatters read entries only; documents are immutable and never altered
- An export in a format a reader understands (SRT) must load back into
  the same entries with SubtitleDocument.load()
- Entry lines are decoded plain text; each formatter applies its own
  escaping (SRT re-escapes entities, JSON escapes via pydantic, plain text
  writes them raw)
- ``suffix`` starts with a hyphen and is appended to the source stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from caption_sync.document import SubtitleDocument


@dataclass
class FormatterOutput:
    """One exported file.

    Attributes:
        suffix: Appended to the caption file stem, e.g. ``"-captions.srt"``
                for ``episode.srt`` gives ``episode-captions.srt``.
        content: Full file text.
        media_type: MIME type served by the HTTP export endpoint.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Renders a SubtitleDocument in one export format.

    Register new formats in FORMATTERS (formatters/__init__.py); the key
    becomes the --formats value and the export URL segment.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name listed by GET /formats, e.g. 'SRT Captions'."""

    @abstractmethod
    def format(self, document: SubtitleDocument) -> List[FormatterOutput]:
        """Render every entry of ``document``, in document order."""
