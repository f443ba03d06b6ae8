"""
structlog and stdlib logging bridge tests.
"""

from __future__ import annotations

import logging

import pytest
import structlog

from pluginlog import Logger, LogLevel
from pluginlog.interceptors import (
    ForwardingHandler,
    LoggerRenderer,
    configure_structlog,
    intercept_stdlib_loggers,
    release_stdlib_loggers,
)


def passthrough(record):
    return record


@pytest.fixture
def target(sink):
    return Logger(level="TRACE", formatter=passthrough, sink=sink)


class TestStructlogBridge:
    """structlog events routed into a Logger"""

    def test_event_becomes_record(self, target, sink) -> None:
        """Method name, event and extra keys map to level, message and params"""
        configure_structlog(target)
        structlog.get_logger().warning("disk low", free_mb=12)
        record = sink.outputs[0]
        assert record.level is LogLevel.WARN
        assert record.message == "disk low"
        assert record.params == {"free_mb": 12}

    def test_bound_context_travels_as_params(self, target, sink) -> None:
        """Bound values arrive as params"""
        configure_structlog(target)
        structlog.get_logger().bind(stage="prod").info("deployed")
        assert sink.outputs[0].params == {"stage": "prod"}

    def test_exc_info_becomes_error(self, target, sink) -> None:
        """exc_info is attached as the record's error"""
        configure_structlog(target)
        err = RuntimeError("boom")
        structlog.get_logger().error("failed", exc_info=err)
        record = sink.outputs[0]
        assert record.error is err
        assert record.params is None

    def test_exception_method_uses_active_exception(self, target, sink) -> None:
        """.exception() picks up the exception being handled"""
        configure_structlog(target)
        try:
            raise KeyError("missing")
        except KeyError:
            structlog.get_logger().exception("lookup failed")
        record = sink.outputs[0]
        assert record.level is LogLevel.ERROR
        assert isinstance(record.error, KeyError)

    def test_target_threshold_applies(self, sink) -> None:
        """The target's threshold gates forwarded events"""
        configure_structlog(Logger(level="WARN", formatter=passthrough, sink=sink))
        structlog.get_logger().info("hidden")
        assert sink.outputs == []

    def test_renderer_drops_event(self, target) -> None:
        """The renderer stops structlog from printing the event itself"""
        with pytest.raises(structlog.DropEvent):
            LoggerRenderer(target)(None, "info", {"event": "m"})


class TestStdlibBridge:
    """stdlib logging records routed into a Logger"""

    def test_handler_forwards_records(self, target, sink) -> None:
        """Records arrive with mapped level, rendered message and logger name"""
        lg = logging.getLogger("pluginlog.tests.handler")
        lg.setLevel(logging.DEBUG)
        lg.propagate = False
        handler = ForwardingHandler(target)
        lg.addHandler(handler)
        try:
            lg.warning("retry %d", 3)
        finally:
            lg.removeHandler(handler)
        record = sink.outputs[0]
        assert record.level is LogLevel.WARN
        assert record.message == "retry 3"
        assert record.params == {"logger": "pluginlog.tests.handler"}

    def test_exc_info_becomes_error(self, target, sink) -> None:
        """logger.exception() attaches the active exception"""
        lg = logging.getLogger("pluginlog.tests.exc")
        handler = intercept_stdlib_loggers(target, "pluginlog.tests.exc")
        try:
            try:
                raise ValueError("bad")
            except ValueError:
                lg.exception("failed")
        finally:
            release_stdlib_loggers(handler)
        record = sink.outputs[0]
        assert record.level is LogLevel.ERROR
        assert isinstance(record.error, ValueError)

    def test_intercept_lets_target_gate(self, sink) -> None:
        """Only the target's threshold filters intercepted records"""
        target = Logger(level="INFO", formatter=passthrough, sink=sink)
        handler = intercept_stdlib_loggers(target, "pluginlog.tests.gate")
        lg = logging.getLogger("pluginlog.tests.gate")
        try:
            lg.debug("hidden")
            lg.info("shown")
        finally:
            release_stdlib_loggers(handler)
        assert [r.message for r in sink.outputs] == ["shown"]

    def test_release_restores_logger_state(self, target, sink) -> None:
        """Releasing detaches the handler and restores level and propagation"""
        lg = logging.getLogger("pluginlog.tests.release")
        lg.setLevel(logging.WARNING)
        lg.propagate = True
        handler = intercept_stdlib_loggers(target, "pluginlog.tests.release")
        assert lg.level == 1
        assert lg.propagate is False

        release_stdlib_loggers(handler)
        assert lg.level == logging.WARNING
        assert lg.propagate is True
        assert handler not in lg.handlers
        lg.warning("after release")
        assert sink.outputs == []

    def test_release_restores_root_level(self, target) -> None:
        """Intercepting the root logger is undone by releasing it"""
        root = logging.getLogger()
        before = root.level
        handler = intercept_stdlib_loggers(target)
        assert root.level == 1
        release_stdlib_loggers(handler)
        assert root.level == before
        assert handler not in root.handlers
