import logging
import sys

from fashion_store import config
from fashion_store.bot import create_admin_bot
from fashion_store.logging_setup import setup_logging
from fashion_store.telegram.polling import Poller

log = logging.getLogger("fashion_store.bot")


def main() -> None:
    setup_logging()
    if not config.admin_bot_configured():
        log.error("❌ Установи TELEGRAM_BOT_TOKEN и TELEGRAM_ADMIN_ID в .env")
        sys.exit(1)

    bot = create_admin_bot()
    bot.load()
    poller = Poller(bot.client, bot.handle_update, timeout=config.TELEGRAM_POLL_TIMEOUT)
    log.info("🤖 Telegram админка запущена. Команды: /start, /orders, /new, /stats")
    try:
        poller.run()
    except KeyboardInterrupt:
        poller.stop()


if __name__ == "__main__":
    main()
