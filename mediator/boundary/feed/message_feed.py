"""
In-process message insert feed.

Subscribers register per session id and receive every message published
for that session after it has been committed. Delivery is best-effort:
a slow subscriber whose queue is full drops events and relies on the
re-poll path to catch up.

Dependencies: asyncio
System role: Change notification for live thread updates
"""

import asyncio
import logging
from collections import defaultdict
from uuid import UUID

from mediator.models.chat import MessageRecord

logger = logging.getLogger(__name__)


class FeedSubscription:
    """A single subscriber's queue for one session."""

    def __init__(self, feed: "MessageFeed", session_id: UUID, maxsize: int) -> None:
        self.feed = feed
        self.session_id = session_id
        self.queue: asyncio.Queue[MessageRecord] = asyncio.Queue(maxsize=maxsize)

    async def get(self, timeout: float | None = None) -> MessageRecord | None:
        """
        Wait for the next event.

        Returns:
            MessageRecord, or None if the timeout elapsed first
        """
        try:
            return await asyncio.wait_for(self.queue.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None

    def close(self) -> None:
        self.feed.unsubscribe(self)

    def __enter__(self) -> "FeedSubscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class MessageFeed:
    """Fan-out of message insert events keyed by session id."""

    def __init__(self, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._subscribers: dict[UUID, set[FeedSubscription]] = defaultdict(set)

    def subscribe(self, session_id: UUID) -> FeedSubscription:
        subscription = FeedSubscription(self, session_id, self._queue_size)
        self._subscribers[session_id].add(subscription)
        logger.debug("Feed subscriber added", extra={"session_id": str(session_id)})
        return subscription

    def unsubscribe(self, subscription: FeedSubscription) -> None:
        subscribers = self._subscribers.get(subscription.session_id)
        if not subscribers:
            return
        subscribers.discard(subscription)
        if not subscribers:
            del self._subscribers[subscription.session_id]

    def subscriber_count(self, session_id: UUID) -> int:
        return len(self._subscribers.get(session_id, ()))

    def publish(self, message: MessageRecord) -> None:
        """Deliver an inserted message to every subscriber of its session."""
        for subscription in list(self._subscribers.get(message.session_id, ())):
            try:
                subscription.queue.put_nowait(message)
            except asyncio.QueueFull:
                logger.warning(
                    "Feed subscriber queue full, event dropped",
                    extra={"session_id": str(message.session_id), "message_id": str(message.id)},
                )


_message_feed = MessageFeed()


def get_message_feed() -> MessageFeed:
    """Get the process-wide message feed."""
    return _message_feed
