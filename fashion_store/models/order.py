# fashion_store/models/order.py
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fashion_store.db import Base
from fashion_store.utils.enums import OrderStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)

    customer_name: Mapped[str] = mapped_column(String(120))
    customer_phone: Mapped[str] = mapped_column(String(64))
    customer_address: Mapped[str] = mapped_column(String(500))
    customer_comment: Mapped[Optional[str]] = mapped_column(Text, default="")

    # позиции корзины как есть: name, price, selectedSize, selectedColor{name, hex}, ...
    items: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)
    total: Mapped[float] = mapped_column(Float)

    # === СТАТУС ЗАКАЗА ===
    # допустимые значения: 'new' | 'confirmed' | 'delivered' | 'cancelled'
    status: Mapped[str] = mapped_column(String(24), default=OrderStatus.NEW.value, index=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "customer_address": self.customer_address,
            "customer_comment": self.customer_comment or "",
            "items": list(self.items or []),
            "total": self.total,
            "status": self.status,
            "created_at": self.created_at,
        }
