"""Unit tests for all formatter modules.

WHY: Each formatter turns a SubtitleDocument into a file someone else
loads: a player (SRT), a reader (plain text) or a web client (JSON).
Invalid output breaks those consumers silently.

HOW: Each formatter runs on documents loaded from the conftest samples:
  - SRT: block layout, time codes, re-reading yields the same entries
  - Plain text: one paragraph per entry, duplicates collapsed
  - JSON: schema validation with jsonschema, error field for empty docs

RULES:
- Schema validation uses caption_document_schema.json from the package.
- The registry test pins the keys used by the CLI and HTTP service.
"""

import json

import jsonschema
import pytest

from caption_sync.core.ir import CaptionEntry, FormatKind
from caption_sync.document import SubtitleDocument
from caption_sync.formatters import FORMATTERS
from caption_sync.formatters.base import BaseFormatter
from caption_sync.formatters.json_document import SCHEMA_PATH, JSONDocumentFormatter
from caption_sync.formatters.plain_text import PlainTextFormatter
from caption_sync.formatters.srt_captions import SRTCaptionFormatter, render_block


def _load_schema():
    with open(SCHEMA_PATH) as f:
        return json.load(f)


@pytest.fixture
def srt_doc(sample_srt):
    return SubtitleDocument.load(sample_srt)


@pytest.fixture
def xml_doc(sample_xml):
    return SubtitleDocument.load(sample_xml)


@pytest.fixture
def failed_doc(broken_srt):
    return SubtitleDocument.load(broken_srt)


class TestRegistry:

    def test_keys(self):
        assert set(FORMATTERS) == {"srt", "plain_text", "json"}

    def test_all_subclass_base(self):
        for formatter_cls in FORMATTERS.values():
            assert issubclass(formatter_cls, BaseFormatter)
            assert formatter_cls().name

    def test_every_formatter_handles_failed_document(self, failed_doc):
        for formatter_cls in FORMATTERS.values():
            for output in formatter_cls().format(failed_doc):
                assert output.suffix.startswith("-")
                assert output.media_type


# ---------------------------------------------------------------------------
# SRT
# ---------------------------------------------------------------------------


class TestSRTCaptionFormatter:

    def test_single_output(self, srt_doc):
        outputs = SRTCaptionFormatter().format(srt_doc)
        assert len(outputs) == 1
        assert outputs[0].suffix == "-captions.srt"
        assert outputs[0].media_type == "application/x-subrip"

    def test_block_layout(self):
        entry = CaptionEntry(7, 61.5, 3725.042, ("First line", "Second line"))
        assert render_block(entry) == "7\n00:01:01,500 --> 01:02:05,042\nFirst line\nSecond line"

    def test_markup_free_output(self, srt_doc):
        content = SRTCaptionFormatter().format(srt_doc)[0].content
        assert "<i>" not in content
        assert "X1:" not in content
        assert content.endswith("Last one&amp;done\n")
        assert "\r" not in content

    def test_rereading_srt_output(self, srt_doc):
        content = SRTCaptionFormatter().format(srt_doc)[0].content
        assert SubtitleDocument.load(content).entries == srt_doc.entries

    def test_rereading_keeps_literal_brackets_and_ampersands(self):
        source = (
            "1\n00:00:01,000 --> 00:00:02,000\n"
            "Five &lt; six apples &gt; here\n"
            "Salt &amp; pepper\n"
            "\n"
            "2\n00:00:03,000 --> 00:00:04,000\n"
            "use &amp;lt; literally\n"
        )
        doc = SubtitleDocument.load(source)
        assert [e.lines for e in doc] == [
            ("Five < six apples > here", "Salt & pepper"),
            ("use &lt; literally",),
        ]
        content = SRTCaptionFormatter().format(doc)[0].content
        assert SubtitleDocument.load(content).entries == doc.entries

    def test_text_escaped_in_block(self):
        entry = CaptionEntry(1, 0.0, 1.0, ("<b> & \"quoted\"",))
        assert render_block(entry) == '1\n00:00:00,000 --> 00:00:01,000\n&lt;b&gt; &amp; "quoted"'

    def test_xml_source_rendered(self, xml_doc):
        content = SRTCaptionFormatter().format(xml_doc)[0].content
        assert content.startswith("1\n00:00:00,500 --> 00:00:01,990\nGood morning\n\n2\n")

    def test_empty_document(self, failed_doc):
        assert SRTCaptionFormatter().format(failed_doc)[0].content == ""


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------


class TestPlainTextFormatter:

    def test_paragraphs(self, srt_doc):
        content = PlainTextFormatter().format(srt_doc)[0].content
        assert content == (
            "Hello there, friend.\n\n"
            "Second caption with two lines\n\n"
            "Last one&done\n"
        )

    def test_consecutive_duplicates_collapse(self):
        doc = SubtitleDocument([
            CaptionEntry(1, 0.0, 1.0, ("Same words",)),
            CaptionEntry(2, 1.0, 2.0, ("Same words",)),
            CaptionEntry(3, 2.0, 3.0, ("Other words",)),
            CaptionEntry(4, 3.0, 4.0, ("Same words",)),
        ], FormatKind.XML_TRANSCRIPT)
        content = PlainTextFormatter().format(doc)[0].content
        assert content == "Same words\n\nOther words\n\nSame words\n"

    def test_output_suffix_and_media_type(self, srt_doc):
        output = PlainTextFormatter().format(srt_doc)[0]
        assert output.suffix == "-captions.txt"
        assert output.media_type == "text/plain"

    def test_empty_document(self, failed_doc):
        assert PlainTextFormatter().format(failed_doc)[0].content == ""


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


class TestJSONDocumentFormatter:

    def test_schema_validation(self, srt_doc, xml_doc, failed_doc):
        schema = _load_schema()
        for doc in (srt_doc, xml_doc, failed_doc):
            data = json.loads(JSONDocumentFormatter().format(doc)[0].content)
            jsonschema.validate(instance=data, schema=schema)

    def test_fields(self, xml_doc):
        data = json.loads(JSONDocumentFormatter().format(xml_doc)[0].content)
        assert data["format"] == "xml_transcript"
        assert data["entry_count"] == 3
        assert data["duration_seconds"] == pytest.approx(5.5)
        assert data["error"] is None
        assert data["entries"][1] == {
            "sequence_index": 2,
            "start_seconds": 2.0,
            "end_seconds": pytest.approx(3.99),
            "lines": ["It's a lovely day"],
        }

    def test_failed_document_reports_error(self, failed_doc):
        data = json.loads(JSONDocumentFormatter().format(failed_doc)[0].content)
        assert data["entries"] == []
        assert "Invalid SRT block 2" in data["error"]

    def test_schema_rejects_unknown_format(self, srt_doc):
        data = json.loads(JSONDocumentFormatter().format(srt_doc)[0].content)
        data["format"] = "vtt"
        with pytest.raises(jsonschema.ValidationError):
            jsonschema.validate(instance=data, schema=_load_schema())

    def test_output_suffix_and_media_type(self, srt_doc):
        output = JSONDocumentFormatter().format(srt_doc)[0]
        assert output.suffix == "-captions.json"
        assert output.media_type == "application/json"
