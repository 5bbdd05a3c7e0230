from __future__ import annotations

import json
import logging

import pytest
import structlog

from payment_hub.logging_config import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


def test_configure_logging_renders_json_with_library_context(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO)
    configure_logging(logging.INFO)
    logger = get_logger("payment_hub.tests")

    logger.info("paytech_payment_created", reference="order-123")

    entry = json.loads(caplog.records[-1].getMessage())
    assert entry["event"] == "paytech_payment_created"
    assert entry["reference"] == "order-123"
    assert entry["library"] == "payment-hub"
    assert entry["level"] == "info"
    assert entry["logger"] == "payment_hub.tests"
    assert "timestamp" in entry


def test_configure_logging_drops_records_below_level(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.WARNING)
    configure_logging(logging.WARNING)
    logger = get_logger("payment_hub.tests")

    logger.info("paytech_payment_created", reference="order-123")

    assert caplog.records == []
