"""Shared test fixtures for the caption_sync test suite.

WHY: Reader, document, formatter, CLI and API tests all need the same
small caption files. Centralizing them here keeps the expected entries in
one place.

HOW: Module-level constants hold the raw sample texts; fixtures return
them as strings or write them to tmp_path for tests that need files.

RULES:
- SAMPLE_SRT has three well-formed blocks, one using display coordinates
  and one with inline markup.
- SAMPLE_XML has three text nodes; the middle node's duration overlaps
  the next node, so its end is inferred from the next start.
- Every kept text line has more than two letters.
"""

from pathlib import Path

import pytest

SAMPLE_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:03,500\n"
    "Hello <i>there</i>, friend.\n"
    "\n"
    "2\n"
    "00:00:04,000 --> 00:00:06,000 X1:100 X2:200 Y1:10 Y2:50\n"
    "Second caption\n"
    "with two lines\n"
    "\n"
    "3\n"
    "00:00:10,250 --> 00:00:12,000\n"
    "<font color=\"red\">Last</font> one&amp;done\n"
)

SAMPLE_XML = (
    '<?xml version="1.0" encoding="utf-8" ?>\n'
    "<transcript>\n"
    '  <text start="0.5" dur="2.0">Good morning</text>\n'
    '  <text start="2.0" dur="3.0">It&#39;s a &lt;b&gt;lovely&lt;/b&gt; day</text>\n'
    '  <text start="4.0" dur="1.5">See you soon</text>\n'
    "</transcript>\n"
)

BROKEN_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:02,000\n"
    "Fine first block\n"
    "\n"
    "2\n"
    "00:00:03 --> 00:00:04,000\n"
    "Missing milliseconds above\n"
)


@pytest.fixture
def sample_srt():
    return SAMPLE_SRT


@pytest.fixture
def sample_xml():
    return SAMPLE_XML


@pytest.fixture
def broken_srt():
    return BROKEN_SRT


@pytest.fixture
def srt_file(tmp_path) -> Path:
    """SAMPLE_SRT written to ``episode.srt``."""
    path = tmp_path / "episode.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path


@pytest.fixture
def xml_file(tmp_path) -> Path:
    """SAMPLE_XML written to ``episode.xml``."""
    path = tmp_path / "episode.xml"
    path.write_text(SAMPLE_XML, encoding="utf-8")
    return path
