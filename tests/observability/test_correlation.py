"""
Test suite for correlation ID propagation.

System role: Verification of request tracing
"""

import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from mediator.observability.correlation import (
    CorrelationIdFilter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from mediator.observability.middleware import CORRELATION_HEADER, CorrelationMiddleware


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(CorrelationMiddleware)

    @app.get("/echo")
    async def echo():
        return {"correlation_id": get_correlation_id()}

    return app


class TestCorrelationMiddleware:
    """Test suite for CorrelationMiddleware."""

    def test_should_reuse_incoming_header(self) -> None:
        client = TestClient(build_app())

        response = client.get("/echo", headers={CORRELATION_HEADER: "req-123"})

        assert response.headers[CORRELATION_HEADER] == "req-123"

    def test_should_generate_id_when_missing(self) -> None:
        client = TestClient(build_app())

        response = client.get("/echo")

        assert response.headers[CORRELATION_HEADER]


class TestCorrelationIdFilter:
    """Test suite for CorrelationIdFilter."""

    def test_should_attach_current_id(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        set_correlation_id("abc")

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "abc"
        clear_correlation_id()

    def test_should_use_dash_outside_request(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        clear_correlation_id()

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "-"
