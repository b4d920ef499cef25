"""
Outbound message models.

Each model is immutable once built and exposes `to_send_object()`,
which returns the JSON payload expected by the webhook.
"""

from .base import Message, MessagePart
from .text import MessageText, MessageMarkdown
from .image import MessageImage
from .news import MessageNews, Article, MAX_ARTICLES
from .attachment import Attachment, AttachmentActionButton

__all__ = [
    "Message",
    "MessagePart",
    "MessageText",
    "MessageMarkdown",
    "MessageImage",
    "MessageNews",
    "Article",
    "MAX_ARTICLES",
    "Attachment",
    "AttachmentActionButton",
]
