"""
Client-side view of a partner's thread.

Messages reach a live client two ways: the insert feed and periodic
re-polls. Both go through `ThreadSync.accept`, which keeps only this
role's rows and drops ids already delivered.
"""

from collections.abc import Iterable
from uuid import UUID

from mediator.core.roles import PartnerRole
from mediator.models.chat import MessageRecord


class ThreadSync:
    """Deduplicating merge of thread messages for one partner."""

    def __init__(self, role: PartnerRole) -> None:
        self.role = role
        self._seen: set[UUID] = set()

    def accept(self, messages: Iterable[MessageRecord]) -> list[MessageRecord]:
        """
        Filter a batch down to unseen messages of this thread.

        Returns:
            New messages ordered by created_at ascending
        """
        fresh: list[MessageRecord] = []
        for message in messages:
            if message.role not in self.role.thread or message.id in self._seen:
                continue
            self._seen.add(message.id)
            fresh.append(message)
        return sorted(fresh, key=lambda m: m.created_at)

    @property
    def delivered(self) -> int:
        return len(self._seen)
