"""SubtitleDocument: a parsed caption file ready for playback lookups.

WHY: The playback UI samples "what caption is on screen now?" twice a
second for the whole length of a video. It needs a value built once, never
re-parsed, safe to read from a timer thread, and one that never takes
playback down because a caption file is broken.

HOW: load() strips a byte-order mark, sniffs the format, and runs the
matching reader from READERS. A CaptionParseError is logged and turned
into an empty document that remembers the error. Lookups bisect over
arrays precomputed at construction: entry starts, and the running maximum
of entry ends ("reach"), which bounds where a containing entry can be.

RULES:
- load() and from_file() never raise for bad content or unreadable files
- Entries keep source order; nothing is re-sorted
- entry_active_at() returns the FIRST entry in source order whose
  [start, end) interval contains the time, or None
- Documents whose starts decrease somewhere fall back to a linear scan
- Instances are immutable after __init__
"""

from __future__ import annotations

import bisect
import itertools
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from caption_sync.config import default_parse_options
from caption_sync.core.errors import CaptionParseError, CaptionSourceError
from caption_sync.core.ir import CaptionEntry, FormatKind, ParseOptions
from caption_sync.core.sniffer import BYTE_ORDER_MARK, detect_format
from caption_sync.readers import READERS

logger = logging.getLogger(__name__)


def read_caption_file(path: Union[str, Path]) -> str:
    """Read a caption file as UTF-8 text.

    Raises:
        CaptionSourceError: If the file is missing, unreadable, or not
            valid UTF-8.
    """
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise CaptionSourceError(p, "not valid UTF-8 ({})".format(exc.reason)) from exc
    except OSError as exc:
        raise CaptionSourceError(p, exc.strerror or str(exc)) from exc


def parse_entries(text: str, options: Optional[ParseOptions] = None) -> Tuple[FormatKind, List[CaptionEntry]]:
    """Sniff and parse ``text`` without the best-effort fallback.

    ``options`` defaults to the configured parsing constants.

    Returns:
        (format, entries) for callers that want parse errors raised.

    Raises:
        CaptionParseError: If the selected reader fails.
    """
    if options is None:
        options = default_parse_options()
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK):]
    kind = detect_format(text)
    reader = READERS[kind](options)
    return kind, reader.parse(text)


class SubtitleDocument:
    """An immutable, time-ordered sequence of caption entries.

    Build with load() or from_file() rather than the constructor.
    """

    def __init__(
        self,
        entries: Iterable[CaptionEntry],
        format: FormatKind,
        error: Optional[Exception] = None,
    ) -> None:
        self._entries: Tuple[CaptionEntry, ...] = tuple(entries)
        self._format = format
        self._error = error

        self._starts = [entry.start_seconds for entry in self._entries]
        self._reach = list(itertools.accumulate(
            (entry.end_seconds for entry in self._entries), max,
        ))
        self._ordered = all(a <= b for a, b in zip(self._starts, self._starts[1:]))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, text: str, options: Optional[ParseOptions] = None) -> "SubtitleDocument":
        """Parse caption text, degrading to an empty document on failure.

        Args:
            text: Full caption file content (SRT or XML transcript).
            options: Parsing constants; defaults to the configured values.

        Returns:
            A document. If parsing failed it has no entries and ``error``
            holds the CaptionParseError.
        """
        try:
            kind, entries = parse_entries(text, options)
        except CaptionParseError as exc:
            kind = detect_format(text)
            logger.warning("Could not parse %s captions, continuing without them: %s", kind.value, exc)
            return cls([], kind, error=exc)

        logger.info("Loaded %d %s caption entries", len(entries), kind.value)
        return cls(entries, kind)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        options: Optional[ParseOptions] = None,
    ) -> "SubtitleDocument":
        """Read and parse a caption file, degrading to an empty document.

        An unreadable file is logged and recorded in ``error``; the empty
        document reports the SRT format since nothing could be sniffed.
        """
        try:
            text = read_caption_file(path)
        except CaptionSourceError as exc:
            logger.warning("%s", exc)
            return cls([], FormatKind.SRT, error=exc)
        return cls.load(text, options)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def entries(self) -> Tuple[CaptionEntry, ...]:
        return self._entries

    @property
    def format(self) -> FormatKind:
        return self._format

    @property
    def error(self) -> Optional[Exception]:
        """The failure that emptied this document, if any."""
        return self._error

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def duration_seconds(self) -> float:
        """Largest end time, or 0.0 for an empty document."""
        return self._reach[-1] if self._reach else 0.0

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CaptionEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return "SubtitleDocument(format={}, entries={})".format(self._format.value, len(self._entries))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def entry_active_at(self, time_seconds: float) -> Optional[CaptionEntry]:
        """Return the entry on screen at ``time_seconds``, or None.

        WHY: Called by the playback observer on every tick; must be cheap.

        HOW: Entries before ``first`` all end at or before the time
        (their running max end is <= it). Entries from ``stop`` on all
        start after it. Only the slice between can contain the time, and
        for non-overlapping captions that slice holds one entry.
        """
        if not self._ordered:
            for entry in self._entries:
                if entry.contains(time_seconds):
                    return entry
            return None

        first = bisect.bisect_right(self._reach, time_seconds)
        stop = bisect.bisect_right(self._starts, time_seconds)
        for entry in self._entries[first:stop]:
            if entry.contains(time_seconds):
                return entry
        return None

    def text_at(self, time_seconds: float, separator: str = "\n") -> Optional[str]:
        """The active entry's lines joined for display, or None."""
        entry = self.entry_active_at(time_seconds)
        if entry is None:
            return None
        return entry.text(separator)
