"""
Message context.

Builds outbound messages and sends them to a webhook. A context is
either bound to a `Bot` (shares its HTTP client and webhook) or
standalone (own HTTP client, every send needs an explicit URL).
"""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING, Any, Optional

import httpx

from tenbot.chat import ChatInfo, ChatInfoResponse
from tenbot.config import get_settings
from tenbot.errors import ChatInfoError, WebhookNotConfiguredError
from tenbot.messages import (
    Article,
    Attachment,
    AttachmentActionButton,
    Message,
    MessageImage,
    MessageMarkdown,
    MessageNews,
    MessageText,
)
from tenbot.utils.hash import md5

if TYPE_CHECKING:
    from tenbot.bot import Bot

logger = logging.getLogger(__name__)


class Context:
    def __init__(self, bot: Optional[Bot] = None, http: Optional[httpx.AsyncClient] = None):
        self.bot = bot
        self._owns_http = bot is None and http is None
        if bot is not None:
            self.http = bot.http
        elif http is not None:
            self.http = http
        else:
            self.http = httpx.AsyncClient(timeout=get_settings().http_timeout)

    @property
    def webhook(self) -> Optional[str]:
        if self.bot is None:
            return None
        return self.bot.webhook or None

    # ------------------------------------------------------------------
    # Chat info
    # ------------------------------------------------------------------

    async def get_chat_info(self, url: str) -> Optional[ChatInfo]:
        """
        Fetch chat info from `url`.

        Returns None if not available. Transport and platform errors are
        not raised: they are logged and reported to the bot's error
        observers instead.
        """
        try:
            response = await self.http.get(url)
            response.raise_for_status()
            data = ChatInfoResponse.model_validate(response.json())

            if data.errcode != 0:
                raise ChatInfoError(data.errmsg, errcode=data.errcode)

            return data.to_chat_info()
        except Exception as e:
            if self.bot is not None:
                self.bot.debug(f"Failed to get chat info from {url}: {e!r}")
                self.bot.emit_error(e)
            else:
                logger.debug(f"Failed to get chat info from {url}: {e!r}")
            return None

    # ------------------------------------------------------------------
    # Message construction
    # ------------------------------------------------------------------

    async def create_text(self, **options: Any) -> MessageText:
        return MessageText(**options)

    async def create_markdown(self, **options: Any) -> MessageMarkdown:
        return MessageMarkdown(**options)

    async def create_image(self, **options: Any) -> MessageImage:
        return MessageImage(**options)

    async def create_image_by_url(
        self,
        url: str,
        options: Optional[dict[str, Any]] = None,
        http_options: Optional[dict[str, Any]] = None,
    ) -> MessageImage:
        """
        Download an image and build an image message from it.

        `http_options` is passed as is to the HTTP client (timeout,
        headers, follow_redirects, ...). Keys in `options` are applied
        after the computed `md5`/`base64`, so they take precedence.
        """
        response = await self.http.get(url, **(http_options or {}))
        response.raise_for_status()

        image = response.content

        return await self.create_image(**{
            "md5": md5(image),
            "base64": base64.b64encode(image).decode("ascii"),
            **(options or {}),
        })

    async def create_news(self, **options: Any) -> MessageNews:
        return MessageNews(**options)

    async def create_article(self, **options: Any) -> Article:
        return Article(**options)

    async def create_attachment(self, **options: Any) -> Attachment:
        return Attachment(**options)

    async def create_attachment_action_button(self, **options: Any) -> AttachmentActionButton:
        return AttachmentActionButton(**options)

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    async def send_message(self, message: Message, url: Optional[str] = None) -> httpx.Response:
        """
        POST a message to `url`, or to the bot's webhook by default.

        HTTP error statuses raise `httpx.HTTPStatusError`. Otherwise the
        response is returned as is: a non-zero `errcode` in its body is
        not treated as an error here.
        """
        target = url or self.webhook
        if not target:
            raise WebhookNotConfiguredError(
                "No URL given and no webhook configured for this context"
            )
        response = await self.http.post(target, json=message.to_send_object())
        response.raise_for_status()
        return response

    async def send_text(self, url: Optional[str] = None, **options: Any) -> httpx.Response:
        message = await self.create_text(**options)
        return await self.send_message(message, url)

    async def send_markdown(self, url: Optional[str] = None, **options: Any) -> httpx.Response:
        message = await self.create_markdown(**options)
        return await self.send_message(message, url)

    async def send_image(self, url: Optional[str] = None, **options: Any) -> httpx.Response:
        message = await self.create_image(**options)
        return await self.send_message(message, url)

    async def send_image_by_url(
        self,
        url: str,
        options: Optional[dict[str, Any]] = None,
        http_options: Optional[dict[str, Any]] = None,
        webhook: Optional[str] = None,
    ) -> httpx.Response:
        message = await self.create_image_by_url(url, options, http_options)
        return await self.send_message(message, webhook)

    async def send_news(self, url: Optional[str] = None, **options: Any) -> httpx.Response:
        message = await self.create_news(**options)
        return await self.send_message(message, url)

    async def aclose(self) -> None:
        """Close the HTTP client if this context created it."""
        if self._owns_http:
            await self.http.aclose()
