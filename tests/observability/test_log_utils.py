"""
Test suite for structured logging helpers.

System role: Verification of safe log context
"""

import logging
import uuid

import pytest

from mediator.core.roles import PartnerRole
from mediator.observability.log_utils import (
    MASK,
    context_fields,
    log_with_context,
    safe_log_value,
)


class TestSafeLogValue:
    """Test suite for safe_log_value()."""

    def test_enums_and_uuids_render_as_values(self) -> None:
        value = uuid.UUID(int=7)

        assert safe_log_value(PartnerRole.PARTNER_B) == "partner_b"
        assert safe_log_value(value) == str(value)

    def test_collections_are_summarized(self) -> None:
        assert safe_log_value(["a", "b"]) == "list(2 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"

    def test_long_text_is_truncated(self) -> None:
        result = safe_log_value("x" * 50, max_length=10)

        assert result.startswith("x" * 10 + "...")
        assert "50 total" in result


class TestContextFields:
    """Test suite for context_fields()."""

    def test_credentials_are_masked(self) -> None:
        fields = context_fields(pin="1111", email="alex@example.com", role=PartnerRole.PARTNER_A)

        assert fields == {"pin": MASK, "email": MASK, "role": "partner_a"}

    def test_log_with_context_attaches_fields(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("tests.log_utils")

        with caplog.at_level(logging.INFO, logger="tests.log_utils"):
            log_with_context(logger, logging.INFO, "Joined", partner_b_pin="9999", delivered=3)

        record = caplog.records[-1]
        assert record.partner_b_pin == MASK
        assert record.delivered == "3"
