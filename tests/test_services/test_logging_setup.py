# tests/test_services/test_logging_setup.py
import logging
import tempfile
import unittest
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.logging import setup_logging


class SetupLoggingTests(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self.saved_handlers = list(root.handlers)
        self.saved_level = root.level
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        root = logging.getLogger()
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in self.saved_handlers:
            root.addHandler(h)
        root.setLevel(self.saved_level)
        self.tmp.cleanup()

    def test_console_only_without_log_dir(self):
        setup_logging("availability", "debug")
        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertNotIsInstance(root.handlers[0], TimedRotatingFileHandler)

    def test_file_handler_writes_plain_lines(self):
        log_dir = Path(self.tmp.name) / "logs"
        setup_logging("availability", "INFO", str(log_dir))
        root = logging.getLogger()
        files = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        self.assertEqual(len(files), 1)

        files[0].flush()
        text = (log_dir / "availability.log").read_text(encoding="utf-8")
        self.assertIn("INFO core.logging logging initialized for availability", text)

    def test_repeat_setup_does_not_stack_handlers(self):
        setup_logging("availability", "INFO", self.tmp.name)
        setup_logging("availability", "INFO", self.tmp.name)
        self.assertEqual(len(logging.getLogger().handlers), 2)


if __name__ == "__main__":
    unittest.main()
