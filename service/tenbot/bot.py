"""
Bot: one webhook, one HTTP client, one router for inbound callbacks.

Bots do not listen on their own; an `App` mounts their routers.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

import httpx
from fastapi import APIRouter, HTTPException, Request

from tenbot.config import get_settings

if TYPE_CHECKING:
    from tenbot.context import Context

logger = logging.getLogger(__name__)

ErrorObserver = Callable[[BaseException], Any]
MessageHandler = Callable[[dict, "Context"], Awaitable[Any]]


class Bot:
    """
    A chat bot bound to one WeChat Work webhook.

    `name` is only used in diagnostics and does not need to be unique.
    """

    def __init__(
        self,
        name: str,
        webhook: str = "",
        http: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.name = name
        self.webhook = webhook
        self._owns_http = http is None
        if http is None:
            if timeout is None:
                timeout = get_settings().http_timeout
            http = httpx.AsyncClient(timeout=timeout)
        self.http = http
        self._error_observers: list[ErrorObserver] = []
        self._message_handlers: list[MessageHandler] = []
        self._context: Context | None = None

    def __repr__(self) -> str:
        return f"Bot(name={self.name!r}, webhook={self.webhook!r})"

    @property
    def context(self) -> Context:
        """Context bound to this bot (created once, then reused)."""
        if self._context is None:
            from tenbot.context import Context
            self._context = Context(self)
        return self._context

    # ------------------------------------------------------------------
    # Diagnostics and error observers
    # ------------------------------------------------------------------

    def debug(self, msg: Any, *args: Any) -> None:
        logger.debug(f"[{self.name}] {msg}", *args)

    def on_error(self, observer: ErrorObserver) -> ErrorObserver:
        """Register an error observer. Can be used as a decorator."""
        self._error_observers.append(observer)
        return observer

    def emit_error(self, err: BaseException) -> None:
        """Call every error observer synchronously, in registration order."""
        for observer in list(self._error_observers):
            try:
                observer(err)
            except Exception as e:
                logger.error(f"[{self.name}] Error observer {observer!r} failed: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Inbound callbacks
    # ------------------------------------------------------------------

    def on_message(self, handler: MessageHandler) -> MessageHandler:
        """Register an async callback handler. Can be used as a decorator."""
        self._message_handlers.append(handler)
        return handler

    async def handle_callback(self, payload: dict) -> None:
        """Run every message handler on one inbound payload."""
        for handler in list(self._message_handlers):
            try:
                await handler(payload, self.context)
            except Exception as e:
                logger.error(f"[{self.name}] Handler error: {e}", exc_info=True)
                self.emit_error(e)

    def create_router(self, path: str = "/") -> APIRouter:
        """
        Build a fresh router serving this bot on `path`.

        POST receives webhook callbacks; GET answers liveness probes.
        """
        router = APIRouter()

        async def callback(request: Request) -> dict:
            try:
                payload = await request.json()
            except (json.JSONDecodeError, UnicodeDecodeError):
                raise HTTPException(status_code=400, detail="Invalid JSON body")

            self.debug(f"Received callback on '{path}'")
            await self.handle_callback(payload)
            return {"ok": True}

        async def probe() -> dict:
            return {"bot": self.name}

        router.add_api_route(path, callback, methods=["POST"])
        router.add_api_route(path, probe, methods=["GET"])
        return router

    async def aclose(self) -> None:
        """Close the HTTP client if this bot created it."""
        if self._owns_http:
            await self.http.aclose()
