import logging
from typing import Any, Dict, List, Optional

from fashion_store import config
from fashion_store.errors import DependencyUnavailable
from fashion_store.telegram.client import TelegramClient
from fashion_store.utils.formatting import color_name, dt_str, h, money, now

log = logging.getLogger(__name__)


class OrderNotifier:
    """Уведомления о новых заказах в канал/чат магазина."""

    def __init__(self, client: Optional[TelegramClient], chat_id: Optional[str]):
        self.client = client
        self.chat_id = chat_id

    @property
    def configured(self) -> bool:
        return self.client is not None and bool(self.chat_id)

    def format_items(self, items: List[Dict[str, Any]]) -> str:
        """Форматирование списка товаров"""
        lines = []
        for i, item in enumerate(items, start=1):
            if not isinstance(item, dict):
                item = {"name": item}
            color = color_name(item)
            lines.append(
                f"{i}. {h(item.get('name'))}\n"
                f"   Размер: {h(item.get('selectedSize', '—'))} | Цвет: {h(color)}\n"
                f"   Цена: {money(item.get('price'))}"
            )
        return "\n\n".join(lines)

    def format_new_order(self, customer: Dict[str, Any], items: List[Dict[str, Any]], total,
                         order_id: Optional[int], saved_to_db: bool, created_at=None) -> str:
        title = f"🆕 <b>Новый заказ</b>{f' #{order_id}' if order_id else ''}!"
        msg = [
            title,
            "",
            f"👤 <b>Клиент:</b> {h(customer.get('name'))}",
            f"📱 <b>Телефон:</b> {h(customer.get('phone'))}",
            f"📍 <b>Адрес:</b> {h(customer.get('address'))}",
        ]
        if customer.get("comment"):
            msg.append(f"💬 <b>Комментарий:</b> {h(customer['comment'])}")
        msg += [
            "",
            "📦 <b>Товары:</b>",
            self.format_items(items),
            "",
            f"💰 <b>Итого:</b> {money(total)}",
            "",
            "✅ Сохранено в БД" if saved_to_db else "⚠️ БД не подключена",
            dt_str(created_at or now()),
        ]
        return "\n".join(msg)

    def notify_order_created(self, customer: Dict[str, Any], items: List[Dict[str, Any]], total,
                             order_id: Optional[int], saved_to_db: bool) -> None:
        """Отправить уведомление о заказе. Неудача -> DependencyUnavailable."""
        if not self.configured:
            raise DependencyUnavailable("Telegram не настроен (TELEGRAM_BOT_TOKEN или TELEGRAM_CHAT_ID)")
        text = self.format_new_order(customer, items, total, order_id, saved_to_db)
        self.client.send_message(self.chat_id, text)


def get_notifier() -> OrderNotifier:
    """Dependency для FastAPI"""
    client = TelegramClient(config.TELEGRAM_BOT_TOKEN) if config.TELEGRAM_BOT_TOKEN else None
    return OrderNotifier(client, config.TELEGRAM_CHAT_ID or None)
