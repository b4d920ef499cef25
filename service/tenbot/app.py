"""
App: registry of bots keyed by path, served from a single HTTP server.
"""

import asyncio
import logging
import socket
from types import MappingProxyType
from typing import Mapping, Optional

import uvicorn
from fastapi import APIRouter, FastAPI

from tenbot import __version__
from tenbot.bot import Bot
from tenbot.config import Settings, get_settings
from tenbot.errors import BotAlreadyRegisteredError, NoBotsRegisteredError
from tenbot.utils.path import format_path

logger = logging.getLogger(__name__)

# How often run() checks whether uvicorn has started (seconds)
STARTUP_POLL_INTERVAL = 0.01


class RunningServer:
    """Handle to a server started by `App.run()`."""

    def __init__(self, server: uvicorn.Server, task: asyncio.Task, sock: socket.socket):
        self.server = server
        self.task = task
        self.socket = sock
        self.host, self.port = sock.getsockname()[:2]

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    async def close(self) -> None:
        """Stop serving and release the socket."""
        self.server.should_exit = True
        try:
            await self.wait_closed()
        finally:
            self.socket.close()

    async def wait_closed(self) -> None:
        await asyncio.shield(self.task)


class App:
    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.settings = settings
        self.host = host if host is not None else settings.host
        self.port = port if port is not None else settings.port
        self._bots: dict[str, Bot] = {}

    @property
    def bots(self) -> Mapping[str, Bot]:
        """Registered bots by normalized path, in registration order."""
        return MappingProxyType(self._bots)

    def register(self, bot: Bot, path: str = "/") -> "App":
        """Register a bot on a particular path."""
        bot_path = format_path(path)
        current_bot = self._bots.get(bot_path)
        if current_bot is not None:
            raise BotAlreadyRegisteredError(current_bot.name, bot_path)

        self._bots[bot_path] = bot

        logger.debug(f"registered bot [{bot.name}] on '{path}'")

        return self

    def create_server(self) -> FastAPI:
        """Build the ASGI app with every bot's router mounted on its path."""
        router = APIRouter()
        for path, bot in self._bots.items():
            router.include_router(bot.create_router(path))

        # Only the bots' routes are served
        server = FastAPI(
            title="tenbot",
            version=__version__,
            docs_url=None,
            redoc_url=None,
            openapi_url=None,
        )
        server.include_router(router)
        return server

    def _bind_socket(self) -> socket.socket:
        family = socket.AF_INET6 if ":" in self.host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.port))
        except OSError:
            sock.close()
            raise
        return sock

    async def run(self) -> RunningServer:
        """
        Listen on the configured host and port.

        Returns once the server accepts connections. Raises
        NoBotsRegisteredError before touching any socket if nothing was
        registered, and the bind error if the address is unavailable.
        """
        bots_count = len(self._bots)

        logger.debug(f"registered {bots_count} bot(s) in total")

        if bots_count < 1:
            raise NoBotsRegisteredError()

        config = uvicorn.Config(
            self.create_server(),
            log_config=None,
            log_level=self.settings.log_level.lower(),
            lifespan="off",
        )
        server = uvicorn.Server(config)

        sock = self._bind_socket()

        try:
            task = asyncio.create_task(server.serve(sockets=[sock]))
            while not server.started:
                if task.done():
                    # Stopped before listening: surface the error (if any)
                    task.result()
                    raise RuntimeError("Server stopped before it started listening")
                await asyncio.sleep(STARTUP_POLL_INTERVAL)
        except BaseException as e:
            logger.debug(f"server failed to start: {e!r}")
            server.should_exit = True
            sock.close()
            raise

        running = RunningServer(server, task, sock)
        task.add_done_callback(self._on_server_done)

        print(f"tenbot app is listening at {running.url}")
        return running

    @staticmethod
    def _on_server_done(task: asyncio.Task) -> None:
        # Startup already succeeded; errors can only be reported here
        if task.cancelled():
            return
        err = task.exception()
        if err is not None:
            logger.error(f"server stopped with error: {err!r}", exc_info=err)
