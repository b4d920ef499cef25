"""
tenbot: WeChat Work group bots over HTTP webhooks.

- App: registers bots on paths and serves them from one HTTP server
- Bot: owns a webhook URL and an HTTP client, routes inbound callbacks
- Context: builds and sends messages, fetches chat info
"""

__version__ = "0.1.0"

from .bot import Bot
from .context import Context
from .app import App, RunningServer
from .chat import ChatInfo, ChatMember
from .errors import (
    TenbotError,
    ConfigurationError,
    BotAlreadyRegisteredError,
    NoBotsRegisteredError,
    WebhookNotConfiguredError,
    ChatInfoError,
)

__all__ = [
    "__version__",
    "App",
    "RunningServer",
    "Bot",
    "Context",
    "ChatInfo",
    "ChatMember",
    "TenbotError",
    "ConfigurationError",
    "BotAlreadyRegisteredError",
    "NoBotsRegisteredError",
    "WebhookNotConfiguredError",
    "ChatInfoError",
]
