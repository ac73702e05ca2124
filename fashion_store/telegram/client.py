import logging
from typing import Any, Dict, List, Optional

import requests

from fashion_store.errors import DependencyUnavailable

log = logging.getLogger(__name__)

API_BASE = "https://api.telegram.org"


class TelegramClient:
    """Тонкая обёртка над Telegram Bot API (HTTP + requests)."""

    def __init__(self, token: str, session: Optional[requests.Session] = None):
        self.token = token
        self.api_url = f"{API_BASE}/bot{self.token}/"
        self.http = session or requests.Session()

    def call(self, method: str, params: Dict[str, Any], http_timeout: Optional[float] = None) -> Any:
        """Вызов метода API. Любая неудача -> DependencyUnavailable."""
        payload = {k: v for k, v in params.items() if v is not None}
        try:
            resp = self.http.post(self.api_url + method, json=payload, timeout=http_timeout)
        except requests.RequestException as e:
            raise DependencyUnavailable(f"Telegram {method}: {e}") from e

        if not resp.ok:
            raise DependencyUnavailable(f"Telegram {method}: HTTP {resp.status_code} {resp.text}")
        try:
            data = resp.json()
        except ValueError as e:
            raise DependencyUnavailable(f"Telegram {method}: некорректный ответ") from e
        if not data.get("ok"):
            raise DependencyUnavailable(f"Telegram {method}: {data.get('description')}")
        return data.get("result")

    # ---- сообщения ----
    def send_message(self, chat_id, text: str, reply_markup: Optional[dict] = None,
                     parse_mode: Optional[str] = "HTML") -> Dict[str, Any]:
        return self.call("sendMessage", {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": parse_mode,
            "reply_markup": reply_markup,
        })

    def edit_message_text(self, chat_id, message_id: int, text: str,
                          reply_markup: Optional[dict] = None,
                          parse_mode: Optional[str] = None) -> Any:
        return self.call("editMessageText", {
            "chat_id": chat_id,
            "message_id": message_id,
            "text": text,
            "parse_mode": parse_mode,
            "reply_markup": reply_markup,
        })

    def delete_message(self, chat_id, message_id: int) -> Any:
        return self.call("deleteMessage", {"chat_id": chat_id, "message_id": message_id})

    def answer_callback_query(self, callback_query_id: str, text: Optional[str] = None,
                              show_alert: bool = False) -> Any:
        return self.call("answerCallbackQuery", {
            "callback_query_id": callback_query_id,
            "text": text,
            "show_alert": show_alert or None,
        })

    # ---- апдейты ----
    def get_updates(self, offset: Optional[int] = None, timeout: int = 30) -> List[Dict[str, Any]]:
        """Long-poll. HTTP-таймаут чуть больше таймаута Telegram."""
        result = self.call(
            "getUpdates",
            {
                "offset": offset,
                "timeout": timeout,
                "allowed_updates": ["message", "callback_query"],
            },
            http_timeout=timeout + 10,
        )
        return result or []
