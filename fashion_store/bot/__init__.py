import logging
from typing import Optional

from fashion_store import config
from fashion_store.bot.dispatcher import AdminBot
from fashion_store.services.order_store import OrderStore, get_order_store
from fashion_store.telegram.client import TelegramClient
from fashion_store.telegram.polling import Poller

log = logging.getLogger(__name__)


def create_admin_bot(store: Optional[OrderStore] = None,
                     client: Optional[TelegramClient] = None) -> AdminBot:
    """Собираем бота из настроек окружения."""
    if not config.admin_bot_configured():
        raise RuntimeError("Установи TELEGRAM_BOT_TOKEN и TELEGRAM_ADMIN_ID в .env")
    client = client or TelegramClient(config.TELEGRAM_BOT_TOKEN)
    store = store if store is not None else get_order_store()
    if store is None:
        log.warning("⚠️ БД не настроена, бот будет работать с пустым списком заказов")
    return AdminBot(client, store, config.TELEGRAM_ADMIN_ID)


def start_admin_bot(bot: AdminBot) -> Poller:
    """Загрузить кеш и запустить polling в фоновом потоке."""
    bot.load()
    poller = Poller(bot.client, bot.handle_update, timeout=config.TELEGRAM_POLL_TIMEOUT)
    poller.start()
    log.info("🤖 Telegram админка запущена. Команды: /start, /orders, /new, /stats")
    return poller
