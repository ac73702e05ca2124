"""
Админ-бот: команды и нажатия кнопок от одного администратора.

Каждый апдейт обрабатывается целиком: проверка доступа, разбор действия,
вызов БД (если нужен), обновление кеша, ответ в чат. Кеш меняется только
после успешного ответа БД.
"""
import logging
from typing import Any, Dict, Optional

from fashion_store.bot.actions import (
    Action, DeleteOrder, FilterOrders, OpenOrder, Refresh, SetStatus, ShowStats,
    FILTER_ALL, parse_action,
)
from fashion_store.bot.mirror import OrderMirror
from fashion_store.bot import views
from fashion_store.errors import (
    AuthorizationError, DependencyUnavailable, NotFoundError, UnknownAction,
)
from fashion_store.services.order_store import OrderStore
from fashion_store.telegram.client import TelegramClient
from fashion_store.utils.enums import OrderStatus, STATUS_LABELS_RU

log = logging.getLogger(__name__)

MSG_DENIED = "❌ У вас нет доступа"
MSG_DENIED_SHORT = "❌ Нет доступа"
MSG_LOADING = "⏳ Загрузка..."
MSG_NOT_FOUND = "❌ Заказ не найден"
MSG_UPDATE_FAILED = "❌ Ошибка обновления"
MSG_DELETE_FAILED = "❌ Ошибка удаления"
MSG_DELETED = "✅ Заказ удалён"
MSG_REFRESHED = "🔄 Обновлено"
MSG_REFRESH_FAILED = "❌ Ошибка загрузки заказов"
MSG_UNKNOWN = "❔ Неизвестная команда"

COMMANDS = ("/start", "/orders", "/new", "/stats")


def extract_command(text: str) -> str:
    """'/orders@my_bot extra' -> '/orders'"""
    raw = (text or "").strip().split(" ", 1)[0]
    return raw.split("@", 1)[0].lower()


class AdminBot:

    def __init__(self, client: TelegramClient, store: Optional[OrderStore],
                 admin_id: str, mirror: Optional[OrderMirror] = None):
        self.client = client
        self.store = store
        self.admin_id = str(admin_id)
        self.mirror = mirror if mirror is not None else OrderMirror(store)

    # ---------- доступ ----------
    def check_admin(self, chat_id: Any) -> None:
        if str(chat_id) != self.admin_id:
            raise AuthorizationError(f"chat {chat_id} не администратор")

    # ---------- точка входа ----------
    def handle_update(self, update: Dict[str, Any]) -> None:
        if "callback_query" in update:
            self.handle_callback(update["callback_query"])
        elif "message" in update:
            self.handle_message(update["message"])

    def load(self) -> None:
        """Загрузка кеша при старте. Без БД бот работает с пустым кешем."""
        try:
            self.mirror.reload()
        except DependencyUnavailable as e:
            log.error("❌ Ошибка загрузки: %s", e)

    # ---------- команды ----------
    def handle_message(self, message: Dict[str, Any]) -> None:
        chat_id = message.get("chat", {}).get("id")
        command = extract_command(message.get("text") or "")
        if command not in COMMANDS:
            return

        try:
            self.check_admin(chat_id)
        except AuthorizationError as e:
            log.warning("Отказ в доступе: %s", e)
            self.client.send_message(chat_id, MSG_DENIED if command == "/start" else MSG_DENIED_SHORT)
            return

        if command == "/start":
            self.reply(chat_id, views.render_welcome())
        elif command == "/orders":
            self.show_list(chat_id, FILTER_ALL)
        elif command == "/new":
            self.show_list(chat_id, OrderStatus.NEW.value)
        elif command == "/stats":
            self.show_stats(chat_id)

    # ---------- кнопки ----------
    def handle_callback(self, query: Dict[str, Any]) -> None:
        message = query.get("message") or {}
        chat_id = message.get("chat", {}).get("id")
        message_id = message.get("message_id")

        try:
            self.check_admin(chat_id)
        except AuthorizationError as e:
            log.warning("Отказ в доступе: %s", e)
            self.client.answer_callback_query(query["id"], MSG_DENIED_SHORT, show_alert=True)
            return

        try:
            action = parse_action(query.get("data") or "")
        except UnknownAction as e:
            log.warning("%s", e)
            self.client.answer_callback_query(query["id"], MSG_UNKNOWN, show_alert=True)
            return

        self.dispatch(action, query["id"], chat_id, message_id)

    def dispatch(self, action: Action, query_id: str, chat_id, message_id: Optional[int]) -> None:
        if isinstance(action, FilterOrders):
            self.on_filter(action, query_id, chat_id, message_id)
        elif isinstance(action, OpenOrder):
            self.on_open(action, query_id, chat_id, message_id)
        elif isinstance(action, SetStatus):
            self.on_set_status(action, query_id, chat_id)
        elif isinstance(action, DeleteOrder):
            self.on_delete(action, query_id, chat_id, message_id)
        elif isinstance(action, ShowStats):
            self.on_stats(query_id, chat_id, message_id)
        elif isinstance(action, Refresh):
            self.on_refresh(query_id, chat_id)

    def on_filter(self, action: FilterOrders, query_id, chat_id, message_id) -> None:
        if message_id is not None:
            self.client.edit_message_text(chat_id, message_id, MSG_LOADING)
        self.show_list(chat_id, action.status)
        self.client.answer_callback_query(query_id)

    def on_open(self, action: OpenOrder, query_id, chat_id, message_id) -> None:
        self.drop_message(chat_id, message_id)
        self.show_detail(chat_id, action.order_id)
        self.client.answer_callback_query(query_id)

    def on_set_status(self, action: SetStatus, query_id, chat_id) -> None:
        try:
            self.set_status(action.order_id, action.status)
        except (DependencyUnavailable, NotFoundError) as e:
            log.error("❌ Ошибка обновления: %s", e)
            self.client.answer_callback_query(query_id, MSG_UPDATE_FAILED, show_alert=True)
            return

        label = STATUS_LABELS_RU[action.status]
        self.client.answer_callback_query(query_id, f"✅ Статус изменён на {label}", show_alert=True)
        self.show_detail(chat_id, action.order_id, notice=f"✅ Статус изменён на <b>{label}</b>")

    def on_delete(self, action: DeleteOrder, query_id, chat_id, message_id) -> None:
        try:
            self.delete_order(action.order_id)
        except (DependencyUnavailable, NotFoundError) as e:
            log.error("❌ Ошибка удаления: %s", e)
            self.client.answer_callback_query(query_id, MSG_DELETE_FAILED, show_alert=True)
            return

        self.client.answer_callback_query(query_id, MSG_DELETED, show_alert=True)
        self.drop_message(chat_id, message_id)
        self.show_list(chat_id, FILTER_ALL)

    def on_stats(self, query_id, chat_id, message_id) -> None:
        self.drop_message(chat_id, message_id)
        self.reply(chat_id, views.render_stats(self.mirror.stats(), with_back=True))
        self.client.answer_callback_query(query_id)

    def on_refresh(self, query_id, chat_id) -> None:
        try:
            self.mirror.reload()
        except DependencyUnavailable as e:
            log.error("❌ Ошибка загрузки: %s", e)
            self.client.answer_callback_query(query_id, MSG_REFRESH_FAILED, show_alert=True)
            return
        self.client.answer_callback_query(query_id, MSG_REFRESHED, show_alert=True)
        self.show_list(chat_id, FILTER_ALL)

    # ---------- мутации (БД, затем кеш) ----------
    def set_status(self, order_id: int, status: str) -> Dict[str, Any]:
        if self.store is None:
            raise DependencyUnavailable("БД не настроена")
        updated = self.store.update_status(order_id, status)
        self.mirror.upsert(updated)
        log.info("✅ Заказ #%s → %s", order_id, status)
        return updated

    def delete_order(self, order_id: int) -> None:
        if self.store is None:
            raise DependencyUnavailable("БД не настроена")
        self.store.delete(order_id)
        self.mirror.remove(order_id)
        log.info("✅ Заказ #%s удалён", order_id)

    # ---------- вывод ----------
    def reply(self, chat_id, view: views.View) -> None:
        text, markup = view
        self.client.send_message(chat_id, text, reply_markup=markup)

    def drop_message(self, chat_id, message_id: Optional[int]) -> None:
        if message_id is None:
            return
        try:
            self.client.delete_message(chat_id, message_id)
        except DependencyUnavailable as e:
            # старые сообщения Telegram удалять не даёт
            log.warning("Не удалось удалить сообщение %s: %s", message_id, e)

    def show_list(self, chat_id, status_filter: str = FILTER_ALL) -> None:
        self.reply(chat_id, views.render_list(self.mirror.orders(status_filter), status_filter))

    def show_detail(self, chat_id, order_id: int, notice: Optional[str] = None) -> None:
        order = self.mirror.get(order_id)
        if order is None:
            self.client.send_message(chat_id, MSG_NOT_FOUND)
            return
        self.reply(chat_id, views.render_detail(order, notice=notice))

    def show_stats(self, chat_id) -> None:
        self.reply(chat_id, views.render_stats(self.mirror.stats()))

    # ---------- новый заказ (push) ----------
    def notify_new_order(self, order: Dict[str, Any]) -> None:
        """Заказ из API: кладём в кеш и шлём админу карточку с кнопками."""
        self.mirror.upsert(order)
        self.reply(self.admin_id, views.render_new_order(order))
