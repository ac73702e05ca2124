"""
callback_data кнопок админ-бота.

Строка кнопки разбирается в одно из действий ниже; всё остальное —
UnknownAction. Обратное преобразование: свойство .token.
"""
from dataclasses import dataclass
from typing import Union

from fashion_store.errors import UnknownAction
from fashion_store.utils.enums import ALL_STATUSES

FILTER_ALL = "all"
FILTERS = [FILTER_ALL] + ALL_STATUSES


@dataclass(frozen=True)
class FilterOrders:
    status: str = FILTER_ALL

    @property
    def token(self) -> str:
        return f"filter_{self.status}"


@dataclass(frozen=True)
class OpenOrder:
    order_id: int

    @property
    def token(self) -> str:
        return f"order_{self.order_id}"


@dataclass(frozen=True)
class SetStatus:
    order_id: int
    status: str

    @property
    def token(self) -> str:
        return f"status_{self.order_id}_{self.status}"


@dataclass(frozen=True)
class DeleteOrder:
    order_id: int

    @property
    def token(self) -> str:
        return f"delete_{self.order_id}"


@dataclass(frozen=True)
class ShowStats:
    @property
    def token(self) -> str:
        return "stats"


@dataclass(frozen=True)
class Refresh:
    @property
    def token(self) -> str:
        return "refresh"


Action = Union[FilterOrders, OpenOrder, SetStatus, DeleteOrder, ShowStats, Refresh]


def _order_id(raw: str, token: str) -> int:
    if not raw.isdigit():
        raise UnknownAction(f"Неизвестное действие: {token}")
    return int(raw)


def parse_action(token: str) -> Action:
    if not isinstance(token, str) or not token:
        raise UnknownAction("Пустое действие")

    if token == "stats":
        return ShowStats()
    if token == "refresh":
        return Refresh()

    kind, _, rest = token.partition("_")
    if kind == "filter" and rest in FILTERS:
        return FilterOrders(rest)
    if kind == "order":
        return OpenOrder(_order_id(rest, token))
    if kind == "delete":
        return DeleteOrder(_order_id(rest, token))
    if kind == "status":
        raw_id, _, status = rest.partition("_")
        if status in ALL_STATUSES:
            return SetStatus(_order_id(raw_id, token), status)

    raise UnknownAction(f"Неизвестное действие: {token}")
