"""JSON formatter — the parsed document as structured data.

WHY: Web players, notebooks and the HTTP service need the entries in a
machine-readable form with explicit numeric times instead of SRT clocks.
The same pydantic models serve as the HTTP response schema, so the file
export and the API never drift apart.

HOW: The document is mapped onto DocumentExport / CaptionEntryModel and
serialized with pydantic's model_dump_json(). The shape is pinned by
caption_document_schema.json next to this module.

RULES:
- Times are float seconds, entries in document order
- ``error`` is the load error message for emptied documents, else null
- Output validates against caption_document_schema.json
- Output suffix: "-captions.json"
- Media type: "application/json"
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from caption_sync.core.ir import CaptionEntry
from caption_sync.document import SubtitleDocument
from caption_sync.formatters.base import BaseFormatter, FormatterOutput

SCHEMA_PATH = Path(__file__).resolve().parent / "caption_document_schema.json"


class CaptionEntryModel(BaseModel):
    """Serialized caption entry."""

    sequence_index: int = Field(description="Index declared in the source (SRT) or assigned (XML).")
    start_seconds: float = Field(ge=0, description="Start of the display interval, in seconds.")
    end_seconds: float = Field(ge=0, description="End of the display interval (exclusive), in seconds.")
    lines: List[str] = Field(description="Plain-text display lines.")

    @classmethod
    def from_entry(cls, entry: CaptionEntry) -> "CaptionEntryModel":
        return cls(
            sequence_index=entry.sequence_index,
            start_seconds=entry.start_seconds,
            end_seconds=entry.end_seconds,
            lines=list(entry.lines),
        )


class DocumentExport(BaseModel):
    """Serialized caption document."""

    format: str = Field(description="Detected source format: 'srt' or 'xml_transcript'.")
    entry_count: int = Field(ge=0, description="Number of entries.")
    duration_seconds: float = Field(ge=0, description="Largest entry end time, 0 when empty.")
    error: Optional[str] = Field(default=None, description="Load error for emptied documents.")
    entries: List[CaptionEntryModel] = Field(default_factory=list)

    @classmethod
    def from_document(cls, document: SubtitleDocument) -> "DocumentExport":
        return cls(
            format=document.format.value,
            entry_count=len(document),
            duration_seconds=document.duration_seconds,
            error=str(document.error) if document.error is not None else None,
            entries=[CaptionEntryModel.from_entry(entry) for entry in document],
        )


class JSONDocumentFormatter(BaseFormatter):
    """Formatter that produces the document as JSON."""

    @property
    def name(self) -> str:
        return "JSON Document"

    def format(self, document: SubtitleDocument) -> List[FormatterOutput]:
        export = DocumentExport.from_document(document)
        return [
            FormatterOutput(
                suffix="-captions.json",
                content=export.model_dump_json(indent=2),
                media_type="application/json",
            ),
        ]
