"""Tests for the queue-backed logging helpers."""

import logging
from queue import Queue

from quickget_wizard.gui.utils.logging_utils import (
    QueueLogHandler,
    attach_queue_handler,
    configure_logging,
    detach_queue_handler,
    drain_queue,
)


def test_handler_maps_debug_to_info():
    log_queue: Queue = Queue()
    handler = QueueLogHandler(log_queue, level=logging.DEBUG)
    record = logging.LogRecord("quickget_wizard.test", logging.DEBUG, __file__, 1, "hello %s", ("vm",), None)
    handler.emit(record)
    assert log_queue.get_nowait() == ("hello vm", "INFO")


def test_attach_and_detach_round_trip():
    log_queue: Queue = Queue()
    logger = logging.getLogger("quickget_wizard.tests.logging")
    logger.setLevel(logging.INFO)
    handler = attach_queue_handler(log_queue, "quickget_wizard.tests.logging")
    try:
        logger.warning("catalog cached")
    finally:
        detach_queue_handler(handler, "quickget_wizard.tests.logging")
    logger.warning("not captured")

    assert drain_queue(log_queue) == [("catalog cached", "WARNING")]
    assert handler not in logger.handlers


def test_drain_queue_respects_limit():
    log_queue: Queue = Queue()
    for i in range(5):
        log_queue.put((f"message {i}", "INFO"))
    assert len(drain_queue(log_queue, limit=3)) == 3
    assert drain_queue(log_queue) == [("message 3", "INFO"), ("message 4", "INFO")]
    assert drain_queue(log_queue) == []


def test_configure_logging_keeps_existing_handlers():
    root = logging.getLogger()
    previous_level = root.level
    before = list(root.handlers)
    try:
        configure_logging(logging.DEBUG)
        configure_logging(logging.DEBUG)
        assert root.level == logging.DEBUG
        if before:
            assert root.handlers == before
        else:
            assert len(root.handlers) == 1
    finally:
        for handler in root.handlers:
            if handler not in before:
                root.removeHandler(handler)
        root.setLevel(previous_level)
