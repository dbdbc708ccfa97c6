"""
Test suite for ThreadSync.

System role: Verification of live-feed deduplication
"""

import uuid
from datetime import datetime, timedelta

from mediator.application.services.thread_sync import ThreadSync
from mediator.core.roles import MessageRole, PartnerRole
from mediator.models.chat import MessageRecord

T0 = datetime(2026, 1, 1, 12, 0, 0)


def record(role: MessageRole, seconds: int, id: uuid.UUID | None = None) -> MessageRecord:
    return MessageRecord(
        id=id or uuid.uuid4(),
        session_id=uuid.UUID(int=1),
        role=role,
        content=f"{role.value}@{seconds}",
        created_at=T0 + timedelta(seconds=seconds),
    )


class TestThreadSync:
    """Test suite for ThreadSync.accept()."""

    def test_should_drop_other_partners_messages(self) -> None:
        # Arrange
        sync = ThreadSync(PartnerRole.PARTNER_A)
        batch = [
            record(MessageRole.PARTNER_A, 1),
            record(MessageRole.PARTNER_B, 2),
            record(MessageRole.BOT_TO_B, 3),
            record(MessageRole.BOT_TO_A, 4),
        ]

        # Act
        accepted = sync.accept(batch)

        # Assert
        assert [m.role for m in accepted] == [MessageRole.PARTNER_A, MessageRole.BOT_TO_A]

    def test_notify_then_poll_should_deliver_each_id_once(self) -> None:
        # Arrange
        sync = ThreadSync(PartnerRole.PARTNER_B)
        pushed = record(MessageRole.PARTNER_B, 5)
        older = record(MessageRole.BOT_TO_B, 1)

        # Act
        from_feed = sync.accept([pushed])
        from_poll = sync.accept([older, pushed])

        # Assert
        assert from_feed == [pushed]
        assert from_poll == [older]
        assert sync.delivered == 2

    def test_batch_should_be_ordered_by_creation(self) -> None:
        sync = ThreadSync(PartnerRole.PARTNER_A)
        late = record(MessageRole.BOT_TO_A, 9)
        early = record(MessageRole.PARTNER_A, 2)

        assert sync.accept([late, early]) == [early, late]

    def test_duplicates_within_a_batch_should_collapse(self) -> None:
        sync = ThreadSync(PartnerRole.PARTNER_A)
        message = record(MessageRole.PARTNER_A, 1)

        assert sync.accept([message, message]) == [message]
