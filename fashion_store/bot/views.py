# fashion_store/bot/views.py
from typing import Any, Dict, List, Optional, Tuple

from fashion_store.bot.actions import (
    FilterOrders, OpenOrder, SetStatus, DeleteOrder, ShowStats, Refresh, FILTER_ALL,
)
from fashion_store.bot.mirror import OrderStats
from fashion_store.utils.enums import OrderStatus, STATUS_EMOJI, STATUS_LABELS_RU
from fashion_store.utils.formatting import color_name, dt_str, h, money

LIST_LIMIT = 10

View = Tuple[str, Optional[dict]]


def _button(text: str, action) -> dict:
    return {"text": text, "callback_data": action.token}


def _keyboard(*rows: List[dict]) -> dict:
    return {"inline_keyboard": [list(r) for r in rows]}


def status_line(status: str) -> str:
    return f"{STATUS_EMOJI.get(status, '❔')} {STATUS_LABELS_RU.get(status, status)}"


def back_keyboard() -> dict:
    return _keyboard([_button("◀️ Назад", FilterOrders(FILTER_ALL))])


# ---------- ПРИВЕТСТВИЕ ----------
def render_welcome() -> View:
    text = (
        "👋 <b>Добро пожаловать в админку Fashion Store!</b>\n\n"
        "📊 <b>Возможности:</b>\n"
        "• Просмотр всех заказов\n"
        "• Изменение статуса\n"
        "• Удаление заказов\n"
        "• Статистика\n\n"
        "/orders - Все заказы\n"
        "/new - Только новые\n"
        "/stats - Статистика"
    )
    keyboard = _keyboard(
        [_button("📋 Заказы", FilterOrders(FILTER_ALL))],
        [_button("🆕 Новые", FilterOrders(OrderStatus.NEW.value))],
        [_button("📊 Статистика", ShowStats())],
    )
    return text, keyboard


# ---------- СПИСОК ----------
def list_keyboard(orders: List[Dict[str, Any]]) -> dict:
    rows = [
        [_button(f"#{o['id']} {o.get('customer_name', '')}"[:60], OpenOrder(o["id"]))]
        for o in orders
    ]
    rows += [
        [
            _button("🆕 Новые", FilterOrders(OrderStatus.NEW.value)),
            _button("✅ Подтвержденные", FilterOrders(OrderStatus.CONFIRMED.value)),
        ],
        [
            _button("🚚 Доставленные", FilterOrders(OrderStatus.DELIVERED.value)),
            _button("❌ Отменённые", FilterOrders(OrderStatus.CANCELLED.value)),
        ],
        [
            _button("📋 Все", FilterOrders(FILTER_ALL)),
            _button("🔄 Обновить", Refresh()),
        ],
    ]
    return {"inline_keyboard": rows}


def render_list(orders: List[Dict[str, Any]], status_filter: str = FILTER_ALL) -> View:
    """Первые LIST_LIMIT заказов в порядке кеша (без пересортировки)."""
    if not orders:
        return f"📭 Заказов не найдено (фильтр: {h(status_filter)})", None

    shown = orders[:LIST_LIMIT]
    lines = [f"📋 <b>Заказы</b> ({len(orders)} всего)", ""]
    for idx, o in enumerate(shown, start=1):
        lines.append(f"{idx}. #{o['id']} - {h(o.get('customer_name'))}")
        lines.append(f"   📦 {len(o.get('items') or [])} товаров | 💰 {money(o.get('total'))}")
        lines.append(f"   {status_line(o.get('status'))}")
        lines.append(f"   📞 {h(o.get('customer_phone'))}")
        lines.append("")
    return "\n".join(lines).rstrip(), list_keyboard(shown)


# ---------- ДЕТАЛИ ----------
def detail_keyboard(order_id: int) -> dict:
    return _keyboard(
        [
            _button("🆕 Новый", SetStatus(order_id, OrderStatus.NEW.value)),
            _button("✅ Подтвердить", SetStatus(order_id, OrderStatus.CONFIRMED.value)),
        ],
        [
            _button("🚚 Доставлен", SetStatus(order_id, OrderStatus.DELIVERED.value)),
            _button("❌ Отменить", SetStatus(order_id, OrderStatus.CANCELLED.value)),
        ],
        [_button("🗑️ Удалить", DeleteOrder(order_id))],
        [_button("◀️ Назад", FilterOrders(FILTER_ALL))],
    )


def render_detail(order: Dict[str, Any], notice: Optional[str] = None) -> View:
    lines = []
    if notice:
        lines += [notice, ""]
    lines += [
        f"📦 <b>Заказ #{order['id']}</b>",
        "",
        f"👤 <b>Клиент:</b> {h(order.get('customer_name'))}",
        f"📱 <b>Телефон:</b> {h(order.get('customer_phone'))}",
        f"📍 <b>Адрес:</b> {h(order.get('customer_address'))}",
    ]
    if order.get("customer_comment"):
        lines.append(f"💬 <b>Комментарий:</b> {h(order['customer_comment'])}")

    lines += ["", "📦 <b>Товары:</b>"]
    for idx, item in enumerate(order.get("items") or [], start=1):
        if not isinstance(item, dict):
            item = {"name": item}
        color = color_name(item)
        lines.append(f"{idx}. {h(item.get('name'))}")
        lines.append(f"   Размер: {h(item.get('selectedSize', '—'))} | Цвет: {h(color)}")
        lines.append(f"   {money(item.get('price'))}")

    status = order.get("status")
    lines += [
        "",
        f"💰 <b>Итого:</b> {money(order.get('total'))}",
        f"{STATUS_EMOJI.get(status, '❔')} <b>Статус:</b> {STATUS_LABELS_RU.get(status, h(status))}",
        f"📅 {dt_str(order.get('created_at'))}",
    ]
    return "\n".join(lines), detail_keyboard(order["id"])


# ---------- СТАТИСТИКА ----------
def render_stats(stats: OrderStats, with_back: bool = False) -> View:
    by = stats.by_status
    text = "\n".join([
        "📊 <b>СТАТИСТИКА</b>",
        "",
        f"📋 Всего заказов: {stats.total_count}",
        f"🆕 Новых: {by[OrderStatus.NEW.value]}",
        f"✅ Подтвержденных: {by[OrderStatus.CONFIRMED.value]}",
        f"🚚 Доставленных: {by[OrderStatus.DELIVERED.value]}",
        f"❌ Отменённых: {by[OrderStatus.CANCELLED.value]}",
        "",
        f"💰 Общая сумма: {money(stats.total_sum)}",
        f"📈 Средний заказ: {money(stats.average)}",
    ])
    return text, (back_keyboard() if with_back else None)


# ---------- НОВЫЙ ЗАКАЗ (push админу) ----------
def render_new_order(order: Dict[str, Any]) -> View:
    lines = [
        f"🆕 <b>НОВЫЙ ЗАКАЗ #{order['id']}</b>",
        "",
        f"👤 {h(order.get('customer_name'))}",
        f"📱 {h(order.get('customer_phone'))}",
        f"📍 {h(order.get('customer_address'))}",
        "",
        f"📦 Товаров: {len(order.get('items') or [])}",
        f"💰 Сумма: {money(order.get('total'))}",
    ]
    if order.get("customer_comment"):
        lines += ["", f"💬 {h(order['customer_comment'])}"]
    keyboard = _keyboard(
        [_button("📋 Открыть", OpenOrder(order["id"]))],
        [_button("✅ Подтвердить", SetStatus(order["id"], OrderStatus.CONFIRMED.value))],
    )
    return "\n".join(lines), keyboard
