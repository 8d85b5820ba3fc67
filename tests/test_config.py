"""Tests for configuration loading, logging setup and the document store."""

import importlib
import logging
import threading

import pytest

import caption_sync.config as config
from caption_sync.core.ir import FormatKind, ParseOptions
from caption_sync.document import SubtitleDocument
from caption_sync.logging_setup import PACKAGE_LOGGER, configure_logging
from caption_sync.server.store import DocumentStore, StoreFullError


@pytest.fixture
def reload_config(monkeypatch):
    """Reload caption_sync.config under patched environment variables."""
    monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **kw: False)

    def _reload(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


class TestConfig:

    def test_defaults(self, reload_config, monkeypatch):
        for name in ("CAPTION_SYNC_XML_END_EPSILON", "CAPTION_SYNC_MIN_LETTER_COUNT", "CAPTION_SYNC_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        cfg = reload_config()
        assert cfg.XML_END_EPSILON_S == 0.01
        assert cfg.MIN_LETTER_COUNT == 2
        assert cfg.LOG_LEVEL == "WARNING"
        assert cfg.default_parse_options() == ParseOptions()

    def test_overrides(self, reload_config):
        cfg = reload_config(
            CAPTION_SYNC_XML_END_EPSILON="0.05",
            CAPTION_SYNC_MIN_LETTER_COUNT="0",
            CAPTION_SYNC_LOG_LEVEL=" debug ",
        )
        assert cfg.default_parse_options() == ParseOptions(xml_end_epsilon=0.05, min_letter_count=0)
        assert cfg.LOG_LEVEL == "DEBUG"

    def test_invalid_number(self, reload_config):
        with pytest.raises(ValueError, match="CAPTION_SYNC_MIN_LETTER_COUNT"):
            reload_config(CAPTION_SYNC_MIN_LETTER_COUNT="two")

    def test_supported_extensions(self):
        assert config.SUPPORTED_EXTENSIONS == {".srt", ".xml"}


class TestConfigureLogging:

    @pytest.fixture(autouse=True)
    def _restore_logger(self):
        logger = logging.getLogger(PACKAGE_LOGGER)
        handlers, level = list(logger.handlers), logger.level
        yield
        logger.handlers[:] = handlers
        logger.setLevel(level)

    def test_level_by_name(self):
        assert configure_logging("info").level == logging.INFO

    def test_idempotent(self):
        logger = configure_logging(logging.DEBUG)
        count = len(logger.handlers)
        configure_logging("WARNING")
        assert len(logger.handlers) == count
        assert logger.level == logging.WARNING

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("LOUD")


class TestDocumentStore:

    def _doc(self):
        return SubtitleDocument([], FormatKind.SRT)

    def test_add_get_delete(self):
        store = DocumentStore()
        stored = store.add("a.srt", self._doc())
        assert store.get(stored.id) is stored
        assert store.delete(stored.id) is True
        assert store.get(stored.id) is None
        assert store.delete(stored.id) is False

    def test_capacity(self):
        store = DocumentStore(max_documents=2)
        store.add("a.srt", self._doc())
        store.add("b.srt", self._doc())
        with pytest.raises(StoreFullError):
            store.add("c.srt", self._doc())

    def test_concurrent_adds(self):
        store = DocumentStore(max_documents=1000)
        threads = [
            threading.Thread(target=lambda: [store.add("x.srt", self._doc()) for _ in range(50)])
            for _ in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        docs = store.list_documents()
        assert len(docs) == 400
        assert len({d.id for d in docs}) == 400
