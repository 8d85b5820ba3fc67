"""Output formatter registry — pluggable export hub.

WHY: The CLI and HTTP service need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["srt"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and URLs)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Type

from caption_sync.formatters.json_document import JSONDocumentFormatter
from caption_sync.formatters.plain_text import PlainTextFormatter
from caption_sync.formatters.srt_captions import SRTCaptionFormatter

if TYPE_CHECKING:
    from caption_sync.formatters.base import BaseFormatter

FORMATTERS: Dict[str, Type[BaseFormatter]] = {
    "srt": SRTCaptionFormatter,
    "plain_text": PlainTextFormatter,
    "json": JSONDocumentFormatter,
}
