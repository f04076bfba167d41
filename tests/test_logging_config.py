"""
Tests for logging setup.
"""
import io
import json
import logging
import sys

from shortlink_app.logging_config import JsonFormatter, setup_logging


def _format(formatter, msg, *args):
    record = logging.LogRecord("shortlink_app.test", logging.INFO, __file__, 1, msg, args, None)
    return formatter.format(record)


class TestJsonFormatter:

    def test_quotes_in_message_stay_valid_json(self):
        line = _format(JsonFormatter(), "Custom code already in use: %s", 'a"b\\c')

        entry = json.loads(line)
        assert entry["message"] == 'Custom code already in use: a"b\\c'
        assert entry["level"] == "INFO"
        assert entry["logger"] == "shortlink_app.test"

    def test_exception_is_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                "shortlink_app.test", logging.ERROR, __file__, 1, "failed", None,
                exc_info=sys.exc_info(),
            )

        entry = json.loads(JsonFormatter().format(record))
        assert "ValueError: boom" in entry["exc_info"]


class TestSetupLogging:

    def test_json_output_parses(self):
        logger = setup_logging(level="DEBUG", json_format=True)
        stream = io.StringIO()
        logger.handlers[0].setStream(stream)

        logging.getLogger("shortlink_app.services").info('code "x" taken')

        entry = json.loads(stream.getvalue().strip())
        assert entry["message"] == 'code "x" taken'

    def test_reconfiguring_does_not_stack_handlers(self):
        setup_logging()
        logger = setup_logging(level="WARNING")

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
