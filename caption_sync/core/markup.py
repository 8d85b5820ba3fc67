"""Markup stripping for caption text.

WHY: Both caption formats carry embedded HTML-ish markup: ``<i>`` and
``<font>`` in SRT, escaped tags and entities inside XML transcript nodes.
The display collaborator wants plain text, but naive tag deletion glues
words together ("line<br>break") and naive tag-to-space replacement tears
words apart ("don<b>'</b>t").

HOW: strip_markup() walks the fragment once with an explicit cursor.
Each scanning helper takes ``(text, pos)`` and returns the next position,
so there is no scanner object and no state shared between calls. Text runs
are copied, whitespace runs and non-inline tags become one separator space,
inline tags vanish, comments and script blocks are skipped with their
content. Entities are decoded once scanning is done.

RULES:
- Never raises; malformed or unterminated markup just ends the scan
- Inline tags (INLINE_TAGS), opening or closing, never add a separator
- Separators never repeat and never lead or trail the result
- Entities are decoded after tags are removed, so ``&lt;i&gt;`` stays
  visible as ``<i>``
"""

from __future__ import annotations

import html
import re
from typing import List, Tuple

# Tags that wrap a span of running text rather than delimit blocks.
INLINE_TAGS = frozenset({
    "a", "b", "i", "q", "span", "em", "strong",
    "cite", "abbr", "acronym", "label",
})

_WHITESPACE = " \t\n\r\x0c\x85\u2028\u2029"

_TEXT_RUN_RE = re.compile("[^<{}]+".format(_WHITESPACE))
_WHITESPACE_RUN_RE = re.compile("[{}]+".format(_WHITESPACE))
_TAG_NAME_RE = re.compile(r"[A-Za-z]*")
_COMMENT_END_RE = re.compile(r"-->")
_SCRIPT_END_RE = re.compile(r"</script\s*>", re.IGNORECASE)
_TAG_END_RE = re.compile(r">")


def _skip_past(pattern: re.Pattern[str], text: str, pos: int) -> int:
    """Return the position just after the next ``pattern`` match, or the end."""
    match = pattern.search(text, pos)
    if match is None:
        return len(text)
    return match.end()


def _scan_markup(text: str, pos: int) -> Tuple[bool, int]:
    """Skip one tag, comment or script block.

    Args:
        text: The fragment being scanned.
        pos: Position just after the opening ``<``.

    Returns:
        (separates, next_pos) where ``separates`` says whether the skipped
        markup stands for a word boundary.
    """
    if text.startswith("!--", pos):
        return False, _skip_past(_COMMENT_END_RE, text, pos + 3)

    name_match = _TAG_NAME_RE.match(text, pos)
    name = name_match.group().lower()
    if name == "script":
        return False, _skip_past(_SCRIPT_END_RE, text, name_match.end())

    if text.startswith("/", pos):
        name_match = _TAG_NAME_RE.match(text, pos + 1)
        name = name_match.group().lower()

    return name not in INLINE_TAGS, _skip_past(_TAG_END_RE, text, name_match.end())


def _append_separator(pieces: List[str]) -> None:
    if pieces and pieces[-1] != " ":
        pieces.append(" ")


def strip_markup(fragment: str) -> str:
    """Convert a markup fragment to plain text.

    Args:
        fragment: Caption text that may contain tags, comments, script
                  blocks and character entities.

    Returns:
        Plain text with single spaces between words and no leading or
        trailing whitespace. Empty string when nothing readable remains.
    """
    pieces: List[str] = []
    pos = 0
    end = len(fragment)

    while pos < end:
        run = _TEXT_RUN_RE.match(fragment, pos)
        if run is not None:
            pieces.append(run.group())
            pos = run.end()
            continue

        if fragment[pos] == "<":
            separates, pos = _scan_markup(fragment, pos + 1)
        else:
            separates = True
            pos = _WHITESPACE_RUN_RE.match(fragment, pos).end()

        if separates:
            _append_separator(pieces)

    return html.unescape("".join(pieces)).strip()
