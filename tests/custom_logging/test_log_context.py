import logging

from function_score_simulator.custom_logging.log_context import (
    ContextFilter,
    setup_logging,
    simulation_field_context,
)


def create_log_record(msg):
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname=__file__, lineno=0, msg=msg, args=(), exc_info=None
    )


def test_context_filter_injects_field_name():
    token = simulation_field_context.set("popularity")
    try:
        record = create_log_record("Test message")
        result = ContextFilter().filter(record)
    finally:
        simulation_field_context.reset(token)

    assert result is True
    assert record.msg == "[popularity] Test message"


def test_context_filter_without_field_name():
    simulation_field_context.set(None)
    record = create_log_record("Test message")

    result = ContextFilter().filter(record)

    assert result is True
    assert record.msg == "Test message"


def test_setup_logging_sets_root_logger(monkeypatch):
    class DummyHandler(logging.StreamHandler):
        def __init__(self):
            super().__init__()
            self.filters = []
            self.formatter = None

        def setFormatter(self, fmt):
            self.formatter = fmt

        def addFilter(self, filter):
            self.filters.append(filter)

    dummy_logger = logging.getLogger("test_logger")
    monkeypatch.setattr(logging, "getLogger", lambda: dummy_logger)
    dummy_logger.handlers.clear()
    monkeypatch.setattr(logging, "StreamHandler", DummyHandler)

    setup_logging()

    assert len(dummy_logger.handlers) == 1
    handler = dummy_logger.handlers[0]
    assert any(isinstance(f, ContextFilter) for f in handler.filters)
    assert handler.formatter is not None
    assert dummy_logger.level == logging.INFO
