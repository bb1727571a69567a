"""Tests for findash.config — paths, upload formats, logging setup."""

import logging

from findash import config


class TestPaths:
    def test_exports_live_under_base_folder(self):
        assert config.EXPORTS_FOLDER == config.BASE_FOLDER / "exports"


class TestUploadFormats:
    def test_every_mime_type_has_a_reader(self):
        assert config.SPREADSHEET_MIME_TYPES == set(config.SPREADSHEET_MIME_FORMATS)
        assert set(config.SPREADSHEET_MIME_FORMATS.values()) == {"xlsx", "xls", "csv"}


class TestConfigureLogging:
    def test_single_handler(self):
        config.configure_logging("DEBUG")
        config.configure_logging("WARNING")
        logger = logging.getLogger("findash")
        marked = [h for h in logger.handlers if getattr(h, "_findash", False)]
        assert len(marked) == 1
        assert logger.level == logging.WARNING
