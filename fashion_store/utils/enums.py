from enum import Enum


class OrderStatus(str, Enum):
    NEW = "new"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


STATUS_EMOJI = {
    OrderStatus.NEW.value: "🆕",
    OrderStatus.CONFIRMED.value: "✅",
    OrderStatus.DELIVERED.value: "🚚",
    OrderStatus.CANCELLED.value: "❌",
}

STATUS_LABELS_RU = {
    OrderStatus.NEW.value: "Новый заказ",
    OrderStatus.CONFIRMED.value: "Подтвержден",
    OrderStatus.DELIVERED.value: "Доставлен",
    OrderStatus.CANCELLED.value: "Отменен",
}

ALL_STATUSES = [s.value for s in OrderStatus]
