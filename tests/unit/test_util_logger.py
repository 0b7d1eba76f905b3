"""
Structured logger tests: context dimensions, JSON lines, exception decorator.
"""

import json
import logging
import sys

import pytest

from util_logger import (
    ComponentConfig, ComponentType, JSONFormatter, LogContext, LogLevel, LoggerFactory, log_exceptions
)


class TestLogContext:

    def test_unset_fields_are_dropped(self):
        context = LogContext(request_id="r-1", product_id="p-1")
        assert context.to_dict() == {"request_id": "r-1", "product_id": "p-1"}

    def test_as_extra(self):
        context = LogContext(request_id="r-1", container="uploads", file_name="a.csv")
        assert context.as_extra() == {
            "custom_dimensions": {"request_id": "r-1", "container": "uploads", "file_name": "a.csv"}
        }


class TestLoggerFactory:

    def test_custom_config_sets_level(self):
        logger = LoggerFactory.create_logger(
            ComponentType.CACHE, "QuietCatalog",
            config=ComponentConfig(component_type=ComponentType.CACHE, log_level=LogLevel.WARNING),
        )
        assert logger.name == "cache.QuietCatalog"
        assert logger.level == logging.WARNING

    def test_repositories_log_at_debug(self):
        logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "DebugRepo")
        assert logger.level == logging.DEBUG

    def test_single_json_handler(self):
        first = LoggerFactory.create_logger(ComponentType.SERVICE, "Twice")
        second = LoggerFactory.create_logger(ComponentType.SERVICE, "Twice")
        assert first is second
        assert sum(isinstance(h.formatter, JSONFormatter) for h in second.handlers) == 1

    def test_call_dimensions_merge_with_component(self, caplog):
        caplog.set_level(logging.INFO)
        logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "ContextTrigger")
        logger.info("started", extra=LogContext(request_id="r-7", customer_id="c-1").as_extra())

        record = [r for r in caplog.records if r.name == "trigger.ContextTrigger"][-1]
        assert record.custom_dimensions == {
            "component_type": "trigger",
            "component_name": "ContextTrigger",
            "request_id": "r-7",
            "customer_id": "c-1",
        }


class TestJSONFormatter:

    def _record(self, **kwargs):
        return logging.LogRecord("service.Orders", logging.ERROR, __file__, 10, "failed %s", ("o-1",), **kwargs)

    def test_custom_dimensions_key(self):
        record = self._record(exc_info=None)
        record.custom_dimensions = {"request_id": "r-1"}
        line = json.loads(JSONFormatter().format(record))
        assert line["message"] == "failed o-1"
        assert line["level"] == "ERROR"
        assert line["customDimensions"] == {"request_id": "r-1"}
        assert "exception" not in line

    def test_exception_block(self):
        try:
            raise KeyError("missing")
        except KeyError:
            record = self._record(exc_info=sys.exc_info())
        line = json.loads(JSONFormatter().format(record))
        assert line["exception"]["type"] == "KeyError"
        assert "missing" in line["exception"]["traceback"]
        assert "customDimensions" not in line


class TestLogExceptions:

    async def test_async_reraises_and_logs(self, caplog):
        @log_exceptions(ComponentType.SERVICE, "DecoratedService")
        async def explode(order_id):
            raise ValueError(f"bad {order_id}")

        with pytest.raises(ValueError, match="bad o-1"):
            await explode("o-1")

        record = [r for r in caplog.records if r.name == "service.DecoratedService"][-1]
        assert record.getMessage() == "Exception in explode"
        assert record.custom_dimensions["exception_type"] == "ValueError"
        assert record.custom_dimensions["component_name"] == "DecoratedService"

    def test_sync_reraises_with_default_logger(self, caplog):
        @log_exceptions()
        def explode():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            explode()

        record = [r for r in caplog.records if r.name == f"service.{__name__}"][-1]
        assert record.custom_dimensions["function_name"] == "explode"

    def test_return_value_passes_through(self):
        @log_exceptions(logger=logging.getLogger("plain"))
        def ok():
            return 42

        assert ok() == 42
