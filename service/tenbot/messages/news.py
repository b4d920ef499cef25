from pydantic import Field
from typing import Any, ClassVar, Optional

from .base import Message, MessagePart

MAX_ARTICLES = 8


class Article(MessagePart):
    """One article of a news message."""

    title: str
    url: str
    description: Optional[str] = None
    picurl: Optional[str] = None

    def to_send_object(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class MessageNews(Message):
    msgtype: ClassVar[str] = "news"

    articles: list[Article] = Field(..., min_length=1, max_length=MAX_ARTICLES)

    def _body(self) -> dict[str, Any]:
        return {"news": {"articles": [a.to_send_object() for a in self.articles]}}
