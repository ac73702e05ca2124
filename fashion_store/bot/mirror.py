import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fashion_store.errors import DependencyUnavailable
from fashion_store.services.order_store import OrderStore
from fashion_store.utils.enums import ALL_STATUSES

log = logging.getLogger(__name__)


@dataclass
class OrderStats:
    total_count: int = 0
    by_status: Dict[str, int] = field(default_factory=lambda: {s: 0 for s in ALL_STATUSES})
    total_sum: float = 0
    average: int = 0


class OrderMirror:
    """
    Локальная копия таблицы заказов для админ-бота.

    Порядок как при загрузке (свежие сверху). Новые заказы встают в начало,
    обновлённые остаются на своём месте. Источник правды: БД, кеш
    обновляется только после успешной операции в БД.
    """

    def __init__(self, store: Optional[OrderStore] = None):
        self.store = store
        self._orders: Dict[int, Dict[str, Any]] = {}
        # бот и API-обработчик могут жить в разных потоках одного процесса
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._orders)

    def __contains__(self, order_id) -> bool:
        return order_id in self._orders

    def reload(self) -> int:
        """Полная перезагрузка из БД. При ошибке кеш остаётся прежним."""
        if self.store is None:
            raise DependencyUnavailable("БД не настроена")
        orders = self.store.select_all()
        with self._lock:
            self._orders = {o["id"]: o for o in orders}
        log.info("✅ Загружено заказов: %d", len(orders))
        return len(orders)

    def upsert(self, order: Dict[str, Any]) -> None:
        order_id = order["id"]
        with self._lock:
            if order_id in self._orders:
                self._orders[order_id] = order
            else:
                self._orders = {order_id: order, **self._orders}

    def remove(self, order_id: int) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._orders.pop(order_id, None)

    def get(self, order_id: int) -> Optional[Dict[str, Any]]:
        return self._orders.get(order_id)

    def orders(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """Заказы в порядке кеша; status=None или 'all': все."""
        with self._lock:
            orders = list(self._orders.values())
        if status and status != "all":
            orders = [o for o in orders if o.get("status") == status]
        return orders

    def stats(self) -> OrderStats:
        orders = self.orders()
        stats = OrderStats(total_count=len(orders))
        for o in orders:
            if o.get("status") in stats.by_status:
                stats.by_status[o["status"]] += 1
            stats.total_sum += o.get("total") or 0
        if orders:
            stats.average = round(stats.total_sum / len(orders))
        return stats
