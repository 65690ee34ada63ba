import io
import json
import logging

from structlog.processors import JSONRenderer

from lakemeta.core.logging import LogContext, build_formatter, get_logger


def _capture(name: str) -> io.StringIO:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(build_formatter(JSONRenderer()))
    stdlib_logger = logging.getLogger(name)
    stdlib_logger.addHandler(handler)
    stdlib_logger.propagate = False
    stdlib_logger.setLevel(logging.INFO)
    return stream


def test_structlog_event_is_rendered_once_as_json():
    stream = _capture("lakemeta.tests.render")

    get_logger("lakemeta.tests.render").info("Registered table SALES.ORDERS", uuid="u-1")

    record = json.loads(stream.getvalue().strip())
    assert record["event"] == "Registered table SALES.ORDERS"
    assert record["uuid"] == "u-1"
    assert record["level"] == "info"


def test_log_context_binds_and_unbinds():
    stream = _capture("lakemeta.tests.context")
    logger = get_logger("lakemeta.tests.context")

    with LogContext(database="sales", table="orders"):
        logger.info("inside")
    logger.info("outside")

    inside, outside = (json.loads(line) for line in stream.getvalue().splitlines())
    assert (inside["database"], inside["table"]) == ("sales", "orders")
    assert "database" not in outside


def test_foreign_stdlib_records_are_rendered():
    stream = _capture("lakemeta.tests.foreign")

    logging.getLogger("lakemeta.tests.foreign").warning("plain %s", "record")

    record = json.loads(stream.getvalue().strip())
    assert record["event"] == "plain record"
    assert record["level"] == "warning"
