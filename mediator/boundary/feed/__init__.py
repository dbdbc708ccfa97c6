"""Change-notification feed for inserted messages."""

from mediator.boundary.feed.message_feed import MessageFeed, FeedSubscription, get_message_feed

__all__ = ["MessageFeed", "FeedSubscription", "get_message_feed"]
