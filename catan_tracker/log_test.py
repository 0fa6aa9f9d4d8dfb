"""Unit tests for catan_tracker/log.py."""

import logging
import unittest

import catan_tracker.log
import catan_tracker.settings


class TestConfigureLogging(unittest.TestCase):
    """Tests for configure_logging()."""

    def setUp(self) -> None:
        self.logger = logging.getLogger('catan_tracker')
        self.level_before = self.logger.level

    def tearDown(self) -> None:
        self.logger.setLevel(self.level_before)

    def test_explicit_level(self) -> None:
        """configure_logging() applies the level it is given."""
        catan_tracker.log.configure_logging('debug')
        self.assertEqual(self.logger.level, logging.DEBUG)

    def test_level_from_settings(self) -> None:
        """Without an argument the level comes from settings.LOG_LEVEL."""
        catan_tracker.log.configure_logging()
        self.assertEqual(
            self.logger.level,
            logging.getLevelName(catan_tracker.settings.LOG_LEVEL),
        )

    def test_keeps_existing_root_handlers(self) -> None:
        """An already configured root logger keeps its handlers."""
        root = logging.getLogger()
        handler = logging.NullHandler()
        root.addHandler(handler)
        try:
            before = list(root.handlers)
            catan_tracker.log.configure_logging('warning')
            self.assertEqual(root.handlers, before)
        finally:
            root.removeHandler(handler)


if __name__ == '__main__':
    unittest.main()
