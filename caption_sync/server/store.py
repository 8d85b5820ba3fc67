"""In-memory store of loaded caption documents.

WHY: A web player uploads its caption file once and then polls "what is
on screen at t?" twice a second. The parsed document must outlive the
upload request, and many requests read it at the same time.

HOW: StoredDocument pairs a SubtitleDocument with its upload metadata.
DocumentStore keeps them in a dict keyed by a UUID4 hex id; every access
to the dict takes a threading.Lock. The documents themselves are
immutable, so lookups run outside the lock.

RULES:
- All store mutations are protected by threading.Lock for thread safety
- Document IDs are UUID4 hex strings generated at creation time
- get() returns None for unknown IDs (no exceptions)
- add() raises StoreFullError once max_documents is reached
- list_documents() returns a new list, oldest first
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional

from caption_sync.document import SubtitleDocument

logger = logging.getLogger(__name__)

DEFAULT_MAX_DOCUMENTS = 100


class StoreFullError(ValueError):
    """Raised when the store already holds ``max_documents`` documents."""


@dataclass(frozen=True)
class StoredDocument:
    """A loaded document and where it came from.

    Attributes:
        id: UUID4 hex string, unique and immutable after creation.
        filename: Original uploaded filename.
        created_at: Epoch timestamp of the upload.
        document: The parsed (possibly empty) document.
    """

    id: str
    filename: str
    created_at: float
    document: SubtitleDocument


class DocumentStore:
    """Thread-safe in-memory store for caption documents."""

    def __init__(self, max_documents: int = DEFAULT_MAX_DOCUMENTS) -> None:
        self._documents: Dict[str, StoredDocument] = {}
        self._lock = threading.Lock()
        self.max_documents = max_documents

    def add(self, filename: str, document: SubtitleDocument) -> StoredDocument:
        """Store a document under a fresh ID.

        Raises:
            StoreFullError: If the store is at capacity.
        """
        with self._lock:
            if len(self._documents) >= self.max_documents:
                raise StoreFullError(
                    "Maximum number of stored documents ({}) reached".format(
                        self.max_documents
                    )
                )
            stored = StoredDocument(
                id=uuid.uuid4().hex,
                filename=filename,
                created_at=time.time(),
                document=document,
            )
            self._documents[stored.id] = stored

        logger.info("Stored document %s (%s, %d entries)", stored.id, filename, len(document))
        return stored

    def get(self, document_id: str) -> Optional[StoredDocument]:
        with self._lock:
            return self._documents.get(document_id)

    def list_documents(self) -> List[StoredDocument]:
        with self._lock:
            return sorted(self._documents.values(), key=lambda d: d.created_at)

    def delete(self, document_id: str) -> bool:
        """Remove a document. Returns False if the ID was unknown."""
        with self._lock:
            stored = self._documents.pop(document_id, None)
        if stored is None:
            return False
        logger.info("Deleted document %s", document_id)
        return True

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()
