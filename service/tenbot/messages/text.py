from pydantic import Field
from typing import Any, ClassVar

from .attachment import Attachment
from .base import Message


class _WithAttachments(Message):
    attachments: list[Attachment] = Field(default_factory=list)

    def _attachments(self) -> dict[str, Any]:
        if not self.attachments:
            return {}
        return {"attachments": [a.to_send_object() for a in self.attachments]}


class MessageText(_WithAttachments):
    msgtype: ClassVar[str] = "text"

    content: str
    mentioned_list: list[str] = Field(default_factory=list)  # user ids, "@all" for everyone
    mentioned_mobile_list: list[str] = Field(default_factory=list)

    def _body(self) -> dict[str, Any]:
        text: dict[str, Any] = {"content": self.content}
        if self.mentioned_list:
            text["mentioned_list"] = list(self.mentioned_list)
        if self.mentioned_mobile_list:
            text["mentioned_mobile_list"] = list(self.mentioned_mobile_list)
        return {"text": text, **self._attachments()}


class MessageMarkdown(_WithAttachments):
    msgtype: ClassVar[str] = "markdown"

    content: str

    def _body(self) -> dict[str, Any]:
        return {"markdown": {"content": self.content}, **self._attachments()}
