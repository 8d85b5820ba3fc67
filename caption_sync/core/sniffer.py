"""Format detection for raw caption text."""

from __future__ import annotations

from caption_sync.core.ir import FormatKind

XML_MARKER = "<?xml"
BYTE_ORDER_MARK = "\ufeff"


def detect_format(text: str) -> FormatKind:
    """Decide which reader should handle ``text``.

    Only the leading non-whitespace content is inspected: an XML
    declaration means XML transcript, anything else is treated as SRT.
    XML without a declaration is therefore read as SRT.
    """
    head = text.lstrip()
    if head.startswith(BYTE_ORDER_MARK):
        head = head[len(BYTE_ORDER_MARK):].lstrip()
    if head.startswith(XML_MARKER):
        return FormatKind.XML_TRANSCRIPT
    return FormatKind.SRT
