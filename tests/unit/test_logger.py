"""
Unit tests for src/common/logger.py
"""

import logging

from src.common.logger import ListLogger, get_logger, is_debug_mode, set_global_debug_mode


class TestListLogger:
    def test_prefixes_resource_and_sequence(self, caplog):
        logger = ListLogger("test.list", resource="/jobs")

        with caplog.at_level(logging.INFO):
            logger.info("Applied page 2", seq=7)

        assert "[/jobs] [req:7] Applied page 2" in caplog.text

    def test_no_prefix_without_context(self, caplog):
        with caplog.at_level(logging.WARNING):
            ListLogger("test.bare").warning("plain")

        assert caplog.records[-1].getMessage() == "plain"

    def test_debug_mode_lowers_level(self):
        logger = ListLogger("test.debug.explicit", debug_mode=True)

        assert logger.level == logging.DEBUG


class TestGlobalDebugMode:
    def test_global_flag_applies_to_new_loggers(self):
        try:
            set_global_debug_mode(True)
            assert is_debug_mode() is True
            assert get_logger("test.debug.global").level == logging.DEBUG
        finally:
            set_global_debug_mode(False)
