from pydantic import Field
from typing import Any, Literal, Optional

from .base import MessagePart


class AttachmentActionButton(MessagePart):
    """A clickable button inside an attachment."""

    name: str
    text: str
    value: str
    replace_text: Optional[str] = None  # shown in place of the message once clicked
    border_color: Optional[str] = None
    text_color: Optional[str] = None
    type: Literal["button"] = "button"

    def to_send_object(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Attachment(MessagePart):
    callback_id: str
    actions: list[AttachmentActionButton] = Field(default_factory=list)

    def to_send_object(self) -> dict[str, Any]:
        return {
            "callback_id": self.callback_id,
            "actions": [action.to_send_object() for action in self.actions],
        }
