"""
Message roles and the partner-to-thread mapping.

Every message carries one of four tags. A partner's private thread is the
pair (human tag, bot tag) for that partner; the mapping below is the only
place those pairs are defined.

Dependencies: enum
System role: Thread isolation scheme
"""

from dataclasses import dataclass
from enum import Enum


class MessageRole(str, Enum):
    """Tag stored on every message row."""

    PARTNER_A = "partner_a"
    PARTNER_B = "partner_b"
    BOT_TO_A = "bot_to_a"
    BOT_TO_B = "bot_to_b"

    @property
    def is_human(self) -> bool:
        return self in (MessageRole.PARTNER_A, MessageRole.PARTNER_B)


class PartnerRole(str, Enum):
    """Role a participant enters a session as."""

    PARTNER_A = "partner_a"
    PARTNER_B = "partner_b"

    @property
    def thread(self) -> "ThreadTags":
        return THREAD_TAGS[self]

    @property
    def human_tag(self) -> MessageRole:
        return THREAD_TAGS[self].human

    @property
    def bot_tag(self) -> MessageRole:
        return THREAD_TAGS[self].bot


@dataclass(frozen=True)
class ThreadTags:
    """The two message tags that make up one partner's thread."""

    human: MessageRole
    bot: MessageRole

    @property
    def tags(self) -> tuple[MessageRole, MessageRole]:
        return (self.human, self.bot)

    def __contains__(self, role: object) -> bool:
        return role in self.tags


THREAD_TAGS: dict[PartnerRole, ThreadTags] = {
    PartnerRole.PARTNER_A: ThreadTags(human=MessageRole.PARTNER_A, bot=MessageRole.BOT_TO_A),
    PartnerRole.PARTNER_B: ThreadTags(human=MessageRole.PARTNER_B, bot=MessageRole.BOT_TO_B),
}


class SessionStatus(str, Enum):
    """Lifecycle of a mediation session."""

    WAITING = "waiting"
    ACTIVE = "active"
    RESOLVED = "resolved"
