"""FastAPI application serving caption lookups to playback clients.

WHY: A browser or set-top player cannot link Python. It can upload a
caption file once and poll "what is on screen at t?" on its playback
timer, the same question the native player asks SubtitleDocument.

HOW: Uploaded files are decoded and parsed with SubtitleDocument.load()
on the worker threadpool, so a large upload does not stall lookups running
on the event loop. Parsing is best effort: a broken file yields an empty
document with an error message rather than a failed upload. Documents are
kept in a DocumentStore.
Lookup, listing and export endpoints read from the store.

RULES:
- All endpoints have OpenAPI descriptions on every parameter and response
- Error responses use a consistent ErrorResponse schema
- Upload validation checks extension against SUPPORTED_EXTENSIONS
- Uploads must be UTF-8; other encodings are rejected with 400
- Unknown document IDs return 404, a full store returns 429
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, List

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from caption_sync import __version__
from caption_sync.config import MAX_DOCUMENTS, SERVER_HOST, SERVER_PORT, SUPPORTED_EXTENSIONS
from caption_sync.core.ir import FormatKind
from caption_sync.document import SubtitleDocument
from caption_sync.formatters import FORMATTERS
from caption_sync.formatters.json_document import CaptionEntryModel
from caption_sync.server.models import (
    ActiveCaptionResponse,
    DocumentSummary,
    EntryListResponse,
    ErrorResponse,
    FormatInfo,
    HealthResponse,
)
from caption_sync.server.store import DocumentStore, StoredDocument, StoreFullError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and store setup
# ---------------------------------------------------------------------------

document_store = DocumentStore(max_documents=MAX_DOCUMENTS)

app = FastAPI(
    title="Caption Sync API",
    description=(
        "Upload SRT or XML transcript caption files and look up the caption "
        "that is on screen at any playback time. Documents can also be "
        "exported as normalized SRT, plain text or JSON."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _validate_file_extension(filename: str) -> None:
    """Raise HTTPException if the file extension is not supported."""
    ext = Path(filename).suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted(SUPPORTED_EXTENSIONS))
            ),
        )


def _get_or_404(document_id: str) -> StoredDocument:
    stored = document_store.get(document_id)
    if stored is None:
        raise HTTPException(status_code=404, detail="Document not found: {}".format(document_id))
    return stored


# ---------------------------------------------------------------------------
# Endpoints: Documents
# ---------------------------------------------------------------------------


@app.post(
    "/documents",
    response_model=DocumentSummary,
    status_code=201,
    tags=["documents"],
    summary="Upload a caption file",
    description=(
        "Upload an SRT or XML transcript file. The file is parsed immediately. "
        "A file that fails to parse is still stored, as an empty document "
        "whose 'error' field explains the failure."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported file type or encoding"},
        429: {"model": ErrorResponse, "description": "Too many stored documents"},
    },
)
async def create_document(
    file: Annotated[
        UploadFile,
        File(description="Caption file (.srt or .xml), UTF-8 encoded."),
    ],
) -> DocumentSummary:
    # Sanitize filename to prevent path traversal
    filename = Path(file.filename or "upload").name
    _validate_file_extension(filename)

    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Caption file must be UTF-8 encoded")

    document = await run_in_threadpool(SubtitleDocument.load, text)
    try:
        stored = document_store.add(filename, document)
    except StoreFullError as exc:
        raise HTTPException(status_code=429, detail=str(exc))

    return DocumentSummary.from_stored(stored)


@app.get(
    "/documents",
    response_model=List[DocumentSummary],
    tags=["documents"],
    summary="List stored documents",
    description="Returns metadata for all stored documents, oldest first.",
)
async def list_documents() -> List[DocumentSummary]:
    return [DocumentSummary.from_stored(stored) for stored in document_store.list_documents()]


@app.get(
    "/documents/{document_id}",
    response_model=DocumentSummary,
    tags=["documents"],
    summary="Get document metadata",
    responses={404: {"model": ErrorResponse, "description": "Document not found"}},
)
async def get_document(document_id: str) -> DocumentSummary:
    return DocumentSummary.from_stored(_get_or_404(document_id))


@app.get(
    "/documents/{document_id}/entries",
    response_model=EntryListResponse,
    tags=["documents"],
    summary="List caption entries",
    description="Returns every caption entry of the document in document order.",
    responses={404: {"model": ErrorResponse, "description": "Document not found"}},
)
async def list_entries(document_id: str) -> EntryListResponse:
    stored = _get_or_404(document_id)
    return EntryListResponse(
        document_id=stored.id,
        entries=[CaptionEntryModel.from_entry(entry) for entry in stored.document],
    )


@app.get(
    "/documents/{document_id}/active",
    response_model=ActiveCaptionResponse,
    tags=["playback"],
    summary="Caption on screen at a playback time",
    description=(
        "Returns the first entry whose [start, end) interval contains the "
        "given time. Designed to be polled from a playback timer."
    ),
    responses={404: {"model": ErrorResponse, "description": "Document not found"}},
)
async def active_caption(
    document_id: str,
    t: Annotated[
        float,
        Query(ge=0, description="Playback position in seconds."),
    ],
) -> ActiveCaptionResponse:
    stored = _get_or_404(document_id)
    entry = stored.document.entry_active_at(t)
    if entry is None:
        return ActiveCaptionResponse(time_seconds=t)
    return ActiveCaptionResponse(
        time_seconds=t,
        entry=CaptionEntryModel.from_entry(entry),
        text=entry.text("\n"),
    )


@app.get(
    "/documents/{document_id}/export/{format_key}",
    tags=["documents"],
    summary="Export a document",
    description="Render the document with one of the formatters listed by GET /formats.",
    responses={
        200: {"description": "The exported file"},
        400: {"model": ErrorResponse, "description": "Unknown format"},
        404: {"model": ErrorResponse, "description": "Document not found"},
    },
)
async def export_document(document_id: str, format_key: str) -> Response:
    stored = _get_or_404(document_id)
    if format_key not in FORMATTERS:
        raise HTTPException(
            status_code=400,
            detail="Unknown format '{}'. Available: {}".format(
                format_key, ", ".join(sorted(FORMATTERS.keys()))
            ),
        )

    output = FORMATTERS[format_key]().format(stored.document)[0]
    download_name = "{}{}".format(Path(stored.filename).stem, output.suffix)
    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(download_name)},
    )


@app.delete(
    "/documents/{document_id}",
    status_code=204,
    tags=["documents"],
    summary="Delete a document",
    responses={404: {"model": ErrorResponse, "description": "Document not found"}},
)
async def delete_document(document_id: str) -> Response:
    if not document_store.delete(document_id):
        raise HTTPException(status_code=404, detail="Document not found: {}".format(document_id))
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Endpoints: Formats and health
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available export formats",
)
async def list_formats() -> List[FormatInfo]:
    empty = SubtitleDocument([], FormatKind.SRT)
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        outputs = formatter.format(empty)
        result.append(FormatInfo(
            key=key,
            name=formatter.name,
            suffix=outputs[0].suffix if outputs else "",
        ))
    return result


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api() -> None:
    """Entry point for the caption-sync-api console script."""
    import uvicorn

    from caption_sync.config import LOG_LEVEL
    from caption_sync.logging_setup import configure_logging

    configure_logging(LOG_LEVEL)
    logger.info("Serving caption lookups on %s:%d", SERVER_HOST, SERVER_PORT)
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
