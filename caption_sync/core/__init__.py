"""Core parsing building blocks.

WHY: The readers, the document and every output surface share a small
set of pieces: the entry model, the error types, format sniffing, clock
decoding and markup stripping. Keeping them here, free of I/O and
configuration, lets them be tested and reused on their own.

HOW: ir.py defines the data types, errors.py the exception hierarchy,
sniffer.py detects the format, timecode.py decodes SRT clocks and
markup.py turns tagged text into plain text.

RULES:
- No module here reads files, environment variables or configuration
- Every function is pure and re-entrant
"""
