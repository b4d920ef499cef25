from pydantic import BaseModel, ConfigDict
from typing import Any, ClassVar, Optional, Union


def _join(value: Union[str, list[str]]) -> str:
    # The platform takes several ids as one "|"-separated string
    if isinstance(value, str):
        return value
    return "|".join(value)


class MessagePart(BaseModel):
    """Immutable value object that serializes itself into the wire payload."""

    model_config = ConfigDict(frozen=True)

    def to_send_object(self) -> dict[str, Any]:
        raise NotImplementedError


class Message(MessagePart):
    """
    A message that can be POSTed to a webhook.

    `chat_id` and `visible_to_user` accept a single id or a list of ids.
    Fields left unset are not sent.
    """

    msgtype: ClassVar[str]

    chat_id: Optional[Union[str, list[str]]] = None
    visible_to_user: Optional[Union[str, list[str]]] = None
    post_id: Optional[str] = None

    def _body(self) -> dict[str, Any]:
        raise NotImplementedError

    def to_send_object(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"msgtype": self.msgtype}
        if self.chat_id:
            payload["chatid"] = _join(self.chat_id)
        if self.visible_to_user:
            payload["visible_to_user"] = _join(self.visible_to_user)
        if self.post_id:
            payload["post_id"] = self.post_id
        payload.update(self._body())
        return payload
