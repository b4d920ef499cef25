"""
Exceptions raised by tenbot.

Transport failures are not wrapped: they surface as `httpx.HTTPError`
subclasses straight from the HTTP client.
"""


class TenbotError(Exception):
    """Base class for all tenbot errors."""


class ConfigurationError(TenbotError):
    """The app or a bot is set up in a way that cannot work."""


class BotAlreadyRegisteredError(ConfigurationError):
    def __init__(self, bot_name: str, path: str):
        self.bot_name = bot_name
        self.path = path
        super().__init__(f"bot [{bot_name}] has already registered on path '{path}'")


class NoBotsRegisteredError(ConfigurationError):
    def __init__(self):
        super().__init__("No bots registered")


class WebhookNotConfiguredError(ConfigurationError):
    """A message was sent without an explicit URL and no webhook to fall back on."""


class ChatInfoError(TenbotError):
    """The platform answered a chat info request with a non-zero errcode."""

    def __init__(self, errmsg: str | None, errcode: int | None = None):
        self.errcode = errcode
        super().__init__(errmsg or f"errcode {errcode}")
