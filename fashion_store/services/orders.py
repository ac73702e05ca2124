"""
Оформление заказа с витрины.

Заявка проверяется, затем уходит в два независимых приёмника: БД и Telegram.
Падение одного приёмника не мешает другому; заказ принят, если сработал
хотя бы один.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from fashion_store.errors import DependencyUnavailable, ValidationError
from fashion_store.schemas import OrderIn
from fashion_store.services.order_store import OrderStore
from fashion_store.telegram.telegram_notify import OrderNotifier
from fashion_store.utils.enums import OrderStatus
from fashion_store.utils.formatting import now

log = logging.getLogger(__name__)

MSG_MISSING_FIELD = "Заполните все обязательные поля"
MSG_EMPTY_CART = "Корзина пуста"
MSG_INVALID_AMOUNT = "Некорректная сумма"
MSG_INVALID_ITEMS = "Некорректные товары в корзине"
MSG_ACCEPTED = "Заказ принят"
MSG_NOT_SENT = "Ошибка: заказ не отправлен ни в Telegram, ни в БД"

_CHECKS = [MSG_MISSING_FIELD, MSG_EMPTY_CART, MSG_INVALID_AMOUNT, MSG_INVALID_ITEMS]


@dataclass
class Submission:
    customer: Dict[str, Any]
    items: List[Dict[str, Any]]
    total: float


@dataclass
class SinkOutcome:
    configured: bool
    ok: bool = False
    error: Optional[str] = None


@dataclass
class SubmissionResult:
    persisted: SinkOutcome
    notified: SinkOutcome
    order_id: Optional[int] = None
    order: Optional[Dict[str, Any]] = field(default=None, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.persisted.ok or self.notified.ok

    def to_response(self):
        """(status_code, body) для HTTP-ответа"""
        if self.succeeded:
            return 200, {
                "success": True,
                "message": MSG_ACCEPTED,
                "orderId": self.order_id,
                "savedToDatabase": self.persisted.ok,
                "sentToTelegram": self.notified.ok,
            }
        return 500, {
            "error": MSG_NOT_SENT,
            "debug": {
                "telegramConfigured": self.notified.configured,
                "databaseConfigured": self.persisted.configured,
            },
        }


def _first_error(e: PydanticValidationError) -> str:
    """Ошибка pydantic -> сообщение первой по порядку проверки."""
    rank = len(_CHECKS)
    for err in e.errors():
        loc = err.get("loc") or ()
        if not loc or loc[0] == "customer":
            rank = min(rank, 0)
        elif loc[0] == "items":
            # сама корзина (нет/не список/пустая) раньше суммы, содержимое позиций после
            rank = min(rank, 1 if len(loc) == 1 else 3)
        elif loc[0] == "total":
            rank = min(rank, 2)
    return _CHECKS[min(rank, len(_CHECKS) - 1)]


def validate_submission(payload: Any) -> Submission:
    """Проверки по порядку, до первой ошибки: поля клиента, корзина, сумма, позиции."""
    try:
        order = OrderIn.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(_first_error(e)) from e

    # TODO: сверять total с суммой цен позиций и с каталогом; сейчас верим клиенту,
    #  проверка сделает отказом заявки, которые сейчас принимаются
    return Submission(
        customer={
            "name": order.customer.name,
            "phone": order.customer.phone,
            "address": order.customer.address,
            "comment": order.customer.comment or "",
        },
        items=order.items_dump(),
        total=order.total,
    )


def persist_order(store: Optional[OrderStore], sub: Submission):
    """Сохранить заказ в БД. Возвращает (SinkOutcome, сохранённый заказ или None)."""
    if store is None:
        log.warning("⚠️ БД не настроена, заказ не сохранён")
        return SinkOutcome(configured=False), None
    try:
        saved = store.insert({
            "customer_name": sub.customer["name"],
            "customer_phone": sub.customer["phone"],
            "customer_address": sub.customer["address"],
            "customer_comment": sub.customer["comment"],
            "items": sub.items,
            "total": sub.total,
            "status": OrderStatus.NEW.value,
            "created_at": now(),
        })
    except DependencyUnavailable as e:
        log.error("❌ Ошибка БД: %s", e)
        return SinkOutcome(configured=True, error=str(e)), None
    except Exception as e:
        log.exception("❌ Критическая ошибка БД")
        return SinkOutcome(configured=True, error=str(e)), None
    log.info("✅ Заказ сохранён в БД: #%s", saved["id"])
    return SinkOutcome(configured=True, ok=True), saved


def notify_order(notifier: Optional[OrderNotifier], sub: Submission,
                 order_id: Optional[int], saved_to_db: bool) -> SinkOutcome:
    """Отправить сводку заказа в Telegram."""
    if notifier is None or not notifier.configured:
        log.warning("⚠️ Telegram не настроен (TELEGRAM_BOT_TOKEN или TELEGRAM_CHAT_ID)")
        return SinkOutcome(configured=False)
    try:
        notifier.notify_order_created(
            customer=sub.customer,
            items=sub.items,
            total=sub.total,
            order_id=order_id,
            saved_to_db=saved_to_db,
        )
    except DependencyUnavailable as e:
        log.error("❌ Ошибка Telegram: %s", e)
        return SinkOutcome(configured=True, error=str(e))
    except Exception as e:
        log.exception("❌ Ошибка отправки в Telegram")
        return SinkOutcome(configured=True, error=str(e))
    log.info("✅ Отправлено в Telegram")
    return SinkOutcome(configured=True, ok=True)


def submit_order(payload: Any, store: Optional[OrderStore], notifier: Optional[OrderNotifier],
                 on_created: Optional[Callable[[Dict[str, Any]], None]] = None) -> SubmissionResult:
    """
    Полный цикл оформления. ValidationError пробрасывается наружу
    до любых побочных эффектов; каждый приёмник вызывается ровно один раз.
    """
    sub = validate_submission(payload)

    persisted, saved = persist_order(store, sub)
    order_id = saved["id"] if saved else None
    # сначала БД, чтобы в уведомлении был номер заказа
    notified = notify_order(notifier, sub, order_id, persisted.ok)

    if saved and on_created is not None:
        try:
            on_created(saved)
        except DependencyUnavailable as e:
            log.warning("Админ-бот не получил заказ #%s: %s", order_id, e)
        except Exception:
            log.exception("Админ-бот не получил заказ #%s", order_id)

    return SubmissionResult(persisted=persisted, notified=notified, order_id=order_id, order=saved)
