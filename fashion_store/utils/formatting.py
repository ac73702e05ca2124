import logging
from datetime import datetime, timezone, tzinfo
from html import escape
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fashion_store import config

log = logging.getLogger(__name__)

CURRENCY = "₸"


def money(value: Any) -> str:
    """15000 -> '15 000 ₸'"""
    try:
        amount = round(float(value or 0))
    except (TypeError, ValueError):
        amount = 0
    return f"{amount:,}".replace(",", " ") + f" {CURRENCY}"


def shop_tz() -> Optional[tzinfo]:
    """Часовой пояс магазина; None: системный."""
    if not config.TIMEZONE:
        return None
    try:
        return ZoneInfo(config.TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        log.warning("Неизвестный TIMEZONE=%r, берём системный", config.TIMEZONE)
        return None


def dt_str(value: Optional[Any]) -> str:
    if value is None:
        return "—"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    # в БД время хранится в UTC (SQLite отдаёт его без tzinfo)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(shop_tz()).strftime("%d.%m.%Y %H:%M")


def now() -> datetime:
    return datetime.now(timezone.utc)


def h(value: Any) -> str:
    """Экранируем текст для parse_mode=HTML"""
    return escape(str(value if value is not None else ""), quote=False)


def color_name(item: Any) -> str:
    """Цвет позиции: {'name': ..., 'hex': ...} или просто строка."""
    color = item.get("selectedColor") if isinstance(item, dict) else None
    if isinstance(color, dict):
        return str(color.get("name") or "—")
    return str(color) if color else "—"
