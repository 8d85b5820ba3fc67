"""Abstract base reader.

WHY: SubtitleDocument, the CLI and the HTTP service should be able to run
any reader the same way once the format is known. A shared interface keeps
the dispatch to a registry lookup.

HOW: BaseReader is an ABC with a ``kind`` property and a ``parse()``
method. Readers receive their ParseOptions at construction and keep
nothing else, so one instance can parse any number of documents, from any
number of threads.

RULES:
- Subclasses MUST implement ``kind`` and ``parse()``
- parse() returns entries in source order and never re-sorts them
- parse() may raise only CaptionParseError subclasses
- Readers hold no mutable state between parse() calls
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from caption_sync.core.ir import CaptionEntry, FormatKind, ParseOptions


class BaseReader(ABC):
    """Abstract base for caption readers.

    To add a new input format:
    1. Add a member to FormatKind and teach detect_format() about it
    2. Create a module in readers/ with a BaseReader subclass
    3. Register it in READERS in readers/__init__.py
    """

    def __init__(self, options: Optional[ParseOptions] = None) -> None:
        self.options = options if options is not None else ParseOptions()

    @property
    @abstractmethod
    def kind(self) -> FormatKind:
        """The format this reader understands."""

    @abstractmethod
    def parse(self, text: str) -> List[CaptionEntry]:
        """Read caption entries from ``text``.

        Args:
            text: The full caption file content.

        Returns:
            Entries in source order.
        """
