"""SRT reader: blank-line separated numbered blocks.

WHY: SRT is the most common caption format in the wild and the one the
playback UI exercises most. It has no formal grammar, so the reader
follows the shape real files have: an index, a time range, text lines.

HOW: The file is split into blocks on a blank line (CRLF first, then bare
LF when CRLF splitting finds nothing to split). Each block is scanned with
an explicit cursor: every scanning step is a regex anchored at the current
position that returns the captured value and the next position. Text lines
are cleaned with strip_markup() and filtered for readable content.

RULES:
- One structurally broken block fails the whole document
  (InvalidFormatError); this is the long-standing SRT behavior and differs
  on purpose from the XML reader
- Blocks that are empty or whitespace-only are ignored
- A block whose lines are all filtered out contributes no entry, no error
- A line survives only with more than ``min_letter_count`` letters
- Entries keep source order and the index declared in the file
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from caption_sync.core.errors import InvalidFormatError, InvalidTimeCodeError
from caption_sync.core.ir import CaptionEntry, FormatKind, ParseOptions
from caption_sync.core.markup import strip_markup
from caption_sync.core.timecode import decode_timecode
from caption_sync.readers.base import BaseReader

logger = logging.getLogger(__name__)

CRLF_SEPARATOR = "\r\n\r\n"
LF_SEPARATOR = "\n\n"
ARROW = "-->"

_INDEX_RE = re.compile(r"\s*([+-]?\d+)", re.ASCII)
# The start code ends at whitespace or where the arrow begins.
_START_CODE_RE = re.compile(r"\s*(\S+?)(?=[ \t]*-->|\s|\Z)")
_ARROW_RE = re.compile(r"[ \t]*-->")
# Anything after the end code on the same line (display coordinates) is skipped.
_END_CODE_RE = re.compile(r"[ \t]*(\S+)[^\r\n]*")


def split_blocks(text: str) -> List[str]:
    """Split SRT text into non-empty blocks.

    CRLF-doubled separators are tried first; if they produce a single
    block the file has none, and bare doubled newlines are used instead.
    """
    blocks = text.split(CRLF_SEPARATOR)
    if len(blocks) == 1:
        blocks = text.split(LF_SEPARATOR)
    return [block for block in blocks if block.strip()]


def _scan(pattern: re.Pattern[str], block: str, pos: int) -> Optional[Tuple[str, int]]:
    match = pattern.match(block, pos)
    if match is None:
        return None
    value = match.group(1) if pattern.groups else match.group()
    return value, match.end()


def _expect(
    pattern: re.Pattern[str],
    block: str,
    pos: int,
    block_number: int,
    reason: str,
) -> Tuple[str, int]:
    scanned = _scan(pattern, block, pos)
    if scanned is None:
        raise InvalidFormatError(block_number, reason)
    return scanned


def _decode(token: str, block_number: int) -> float:
    try:
        return decode_timecode(token)
    except InvalidTimeCodeError as exc:
        raise InvalidFormatError(block_number, str(exc)) from exc


def count_letters(text: str) -> int:
    """Number of alphabetic characters in ``text`` (any script)."""
    return sum(1 for char in text.lower() if char.isalpha())


def _read_text_lines(block: str, pos: int, min_letter_count: int) -> List[str]:
    lines: List[str] = []
    for raw_line in block[pos:].splitlines():
        if not raw_line.strip():
            continue
        plain = strip_markup(raw_line)
        if count_letters(plain) > min_letter_count:
            lines.append(plain)
    return lines


def read_block(
    block: str,
    block_number: int,
    options: ParseOptions,
) -> Optional[CaptionEntry]:
    """Scan one SRT block.

    Args:
        block: Block text, without the surrounding blank lines.
        block_number: 1-based position among non-empty blocks, for errors.
        options: Parsing constants.

    Returns:
        The caption entry, or None if no text line survives filtering.

    Raises:
        InvalidFormatError: If the index, either time code, or the arrow is
            missing, or a time code does not decode.
    """
    index_text, pos = _expect(_INDEX_RE, block, 0, block_number, "missing sequence index")
    start_token, pos = _expect(_START_CODE_RE, block, pos, block_number, "missing start time code")
    _, pos = _expect(_ARROW_RE, block, pos, block_number, "missing '{}' separator".format(ARROW))
    end_token, pos = _expect(_END_CODE_RE, block, pos, block_number, "missing end time code")

    start_seconds = _decode(start_token, block_number)
    end_seconds = _decode(end_token, block_number)

    lines = _read_text_lines(block, pos, options.min_letter_count)
    if not lines:
        return None

    return CaptionEntry(
        sequence_index=int(index_text),
        start_seconds=start_seconds,
        end_seconds=end_seconds,
        lines=tuple(lines),
    )


class SRTReader(BaseReader):
    """Reader for SRT caption files."""

    @property
    def kind(self) -> FormatKind:
        return FormatKind.SRT

    def parse(self, text: str) -> List[CaptionEntry]:
        """Parse a complete SRT document.

        Raises:
            InvalidFormatError: On the first block that fails to scan.
        """
        blocks = split_blocks(text)
        entries: List[CaptionEntry] = []
        for block_number, block in enumerate(blocks, start=1):
            entry = read_block(block, block_number, self.options)
            if entry is not None:
                entries.append(entry)

        logger.debug("Read %d SRT entries from %d blocks", len(entries), len(blocks))
        return entries
