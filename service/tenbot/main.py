"""
Run a single bot from settings.

    TENBOT_WEBHOOK=https://... python -m tenbot.main
"""

import asyncio
from typing import Optional

from tenbot.app import App
from tenbot.bot import Bot
from tenbot.config import Settings, get_settings
from tenbot.errors import WebhookNotConfiguredError
from tenbot.logging_config import setup_logging


def build_app(settings: Optional[Settings] = None) -> App:
    """Create an app with one bot, configured from settings."""
    settings = settings or get_settings()

    if not settings.webhook:
        raise WebhookNotConfiguredError("TENBOT_WEBHOOK is not set")

    bot = Bot(settings.bot_name, settings.webhook, timeout=settings.http_timeout)
    return App(settings=settings).register(bot)


async def serve(settings: Optional[Settings] = None) -> None:
    app = build_app(settings)
    try:
        running = await app.run()
        await running.wait_closed()
    finally:
        for bot in app.bots.values():
            await bot.aclose()


def main() -> None:
    settings = get_settings()
    logger = setup_logging(settings.log_level.upper())
    logger.info(f"[STARTUP] environment={settings.environment}")
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
