"""Pydantic response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for response serialization
and automatic OpenAPI documentation. Entry serialization is shared with
the JSON formatter (CaptionEntryModel) so the export file and the API
describe captions identically.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Response models never expose internal implementation details
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from caption_sync.formatters.json_document import CaptionEntryModel
from caption_sync.server.store import StoredDocument


class DocumentSummary(BaseModel):
    """Metadata for a stored caption document.

    RULES:
    - error is only set when parsing failed and the document is empty
    """

    id: str = Field(description="Unique document identifier.")
    filename: str = Field(description="Original uploaded filename.")
    format: str = Field(description="Detected format: 'srt' or 'xml_transcript'.")
    entry_count: int = Field(description="Number of caption entries.")
    duration_seconds: float = Field(description="Largest entry end time, in seconds.")
    created_at: float = Field(description="Upload timestamp (Unix epoch seconds).")
    error: Optional[str] = Field(
        default=None,
        description="Parse error message, only present when parsing failed.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "id": "550e8400e29b41d4a716446655440000",
                "filename": "episode.srt",
                "format": "srt",
                "entry_count": 812,
                "duration_seconds": 1324.5,
                "created_at": 1739959200.0,
                "error": None,
            }
        ]
    }}

    @classmethod
    def from_stored(cls, stored: StoredDocument) -> "DocumentSummary":
        document = stored.document
        return cls(
            id=stored.id,
            filename=stored.filename,
            format=document.format.value,
            entry_count=len(document),
            duration_seconds=document.duration_seconds,
            created_at=stored.created_at,
            error=str(document.error) if document.error is not None else None,
        )


class EntryListResponse(BaseModel):
    """All entries of a document, in document order."""

    document_id: str = Field(description="The document these entries belong to.")
    entries: List[CaptionEntryModel] = Field(description="Caption entries.")


class ActiveCaptionResponse(BaseModel):
    """The caption on screen at a playback time.

    RULES:
    - entry and text are null in gaps between captions
    - text is the entry's lines joined with a newline
    """

    time_seconds: float = Field(description="The queried playback time.")
    entry: Optional[CaptionEntryModel] = Field(default=None, description="Active entry, if any.")
    text: Optional[str] = Field(default=None, description="Display text of the active entry.")


class FormatInfo(BaseModel):
    """Description of an available export format."""

    key: str = Field(description="Format identifier used in export URLs.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-captions.srt').")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
