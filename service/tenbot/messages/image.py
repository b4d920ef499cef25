from typing import Any, ClassVar

from .base import Message


class MessageImage(Message):
    """Image message; `base64` is the encoded file, `md5` the digest of the raw bytes."""

    msgtype: ClassVar[str] = "image"

    base64: str
    md5: str

    def _body(self) -> dict[str, Any]:
        return {"image": {"base64": self.base64, "md5": self.md5}}
