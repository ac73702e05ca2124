# fashion_store/services/order_store.py
import logging
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from fashion_store.errors import DependencyUnavailable, NotFoundError
from fashion_store.models.order import Order
from fashion_store.utils.enums import ALL_STATUSES, OrderStatus
from fashion_store.utils.formatting import now

log = logging.getLogger(__name__)


class OrderStore(Protocol):
    """Что нужно от хранилища заказов: вставка, выборка, смена статуса, удаление."""

    def insert(self, order: Dict[str, Any]) -> Dict[str, Any]: ...

    def select_all(self) -> List[Dict[str, Any]]: ...

    def update_status(self, order_id: int, status: str) -> Dict[str, Any]: ...

    def delete(self, order_id: int) -> None: ...


class SqlOrderStore:
    """Таблица orders через SQLAlchemy. На каждую операцию своя сессия."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def insert(self, order: Dict[str, Any]) -> Dict[str, Any]:
        db: Session = self.session_factory()
        try:
            row = Order(
                customer_name=order["customer_name"],
                customer_phone=order["customer_phone"],
                customer_address=order["customer_address"],
                customer_comment=order.get("customer_comment") or "",
                items=order["items"],
                total=order["total"],
                status=order.get("status") or OrderStatus.NEW.value,
                created_at=order.get("created_at") or now(),
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return row.to_dict()
        except SQLAlchemyError as e:
            db.rollback()
            raise DependencyUnavailable(f"Ошибка БД при сохранении заказа: {e}") from e
        finally:
            db.close()

    def select_all(self) -> List[Dict[str, Any]]:
        db: Session = self.session_factory()
        try:
            rows = db.execute(
                select(Order).order_by(Order.created_at.desc(), Order.id.desc())
            ).scalars().all()
            return [r.to_dict() for r in rows]
        except SQLAlchemyError as e:
            raise DependencyUnavailable(f"Ошибка БД при загрузке заказов: {e}") from e
        finally:
            db.close()

    def update_status(self, order_id: int, status: str) -> Dict[str, Any]:
        if status not in ALL_STATUSES:
            raise ValueError(f"unknown status: {status}")
        db: Session = self.session_factory()
        try:
            row: Optional[Order] = db.get(Order, order_id)
            if row is None:
                raise NotFoundError(f"Заказ #{order_id} не найден")
            # повторная установка того же статуса не ошибка
            row.status = status
            db.commit()
            db.refresh(row)
            return row.to_dict()
        except SQLAlchemyError as e:
            db.rollback()
            raise DependencyUnavailable(f"Ошибка БД при обновлении #{order_id}: {e}") from e
        finally:
            db.close()

    def delete(self, order_id: int) -> None:
        db: Session = self.session_factory()
        try:
            result = db.execute(delete(Order).where(Order.id == order_id))
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundError(f"Заказ #{order_id} не найден")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise DependencyUnavailable(f"Ошибка БД при удалении #{order_id}: {e}") from e
        finally:
            db.close()


def get_order_store() -> Optional[OrderStore]:
    """Dependency для FastAPI: None, если DATABASE_URL не задан."""
    from fashion_store.db import SessionLocal

    if SessionLocal is None:
        return None
    return SqlOrderStore(SessionLocal)
