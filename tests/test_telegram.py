import pytest
import requests

from fashion_store.errors import DependencyUnavailable
from fashion_store.telegram.client import TelegramClient
from fashion_store.telegram.polling import Poller
from fashion_store.telegram.telegram_notify import OrderNotifier
from tests.fakes import CHANNEL_ID, FakeTelegramClient, valid_payload


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, json=None, timeout=None):
        self.requests.append((url, json, timeout))
        if self.error:
            raise self.error
        return self.response


# ---------- клиент ----------
def test_send_message_payload():
    http = FakeSession(FakeResponse(payload={"ok": True, "result": {"message_id": 5}}))
    client = TelegramClient("TOKEN", session=http)

    result = client.send_message(42, "hi", reply_markup={"inline_keyboard": []})

    assert result == {"message_id": 5}
    url, payload, _ = http.requests[0]
    assert url == "https://api.telegram.org/botTOKEN/sendMessage"
    assert payload == {"chat_id": 42, "text": "hi", "parse_mode": "HTML",
                       "reply_markup": {"inline_keyboard": []}}


def test_none_params_dropped():
    http = FakeSession(FakeResponse(payload={"ok": True, "result": True}))
    TelegramClient("T", session=http).answer_callback_query("cb")
    assert http.requests[0][1] == {"callback_query_id": "cb"}


@pytest.mark.parametrize("response, error", [
    (FakeResponse(400, {"ok": False}, "Bad Request"), None),
    (FakeResponse(200, {"ok": False, "description": "chat not found"}), None),
    (FakeResponse(200, None), None),
    (None, requests.ConnectionError("no route")),
])
def test_failures_become_dependency_unavailable(response, error):
    client = TelegramClient("T", session=FakeSession(response, error))
    with pytest.raises(DependencyUnavailable):
        client.send_message(1, "x")


def test_get_updates_uses_long_poll():
    http = FakeSession(FakeResponse(payload={"ok": True, "result": [{"update_id": 9}]}))
    updates = TelegramClient("T", session=http).get_updates(offset=9, timeout=30)
    assert updates == [{"update_id": 9}]
    _, payload, http_timeout = http.requests[0]
    assert payload["offset"] == 9 and payload["timeout"] == 30
    assert http_timeout > 30


# ---------- уведомление о заказе ----------
def test_format_new_order():
    payload = valid_payload()
    notifier = OrderNotifier(FakeTelegramClient(), CHANNEL_ID)
    text = notifier.format_new_order(payload["customer"], payload["items"], payload["total"],
                                     order_id=12, saved_to_db=True)
    assert "Новый заказ</b> #12" in text
    assert "Айгерим" in text
    assert "после 18:00" in text
    assert "1. Платье" in text
    assert "Размер: S | Цвет: Красный" in text
    assert "Итого:</b> 15 000 ₸" in text
    assert "✅ Сохранено в БД" in text


def test_format_without_id_or_comment():
    payload = valid_payload()
    payload["customer"]["comment"] = ""
    text = OrderNotifier(None, None).format_new_order(
        payload["customer"], payload["items"], payload["total"], order_id=None, saved_to_db=False)
    assert "#" not in text.splitlines()[0]
    assert "Комментарий" not in text
    assert "⚠️ БД не подключена" in text


def test_notifier_not_configured():
    with pytest.raises(DependencyUnavailable):
        OrderNotifier(None, CHANNEL_ID).notify_order_created({}, [], 1, None, False)
    assert OrderNotifier(FakeTelegramClient(), "").configured is False


# ---------- polling ----------
def test_poll_once_advances_offset_and_survives_handler_errors():
    tg = FakeTelegramClient()
    tg.updates = [{"update_id": 10}, {"update_id": 11}, {"update_id": 12}]
    seen = []

    def handler(upd):
        seen.append(upd["update_id"])
        if upd["update_id"] == 11:
            raise RuntimeError("broken update")

    poller = Poller(tg, handler)
    assert poller.poll_once() == 3
    assert seen == [10, 11, 12]
    assert poller.offset == 13

    poller.poll_once()
    assert tg.calls[-1] == ("getUpdates", {"offset": 13})


def test_run_stops():
    tg = FakeTelegramClient(fail=True)
    poller = Poller(tg, lambda upd: None)
    poller.stop()
    poller.run()
    assert tg.calls == []


def test_format_items_tolerates_odd_items():
    notifier = OrderNotifier(None, None)
    text = notifier.format_items([
        {"name": "Dress", "price": 15000, "selectedSize": "M", "selectedColor": "Red"},
        {"name": "Belt", "price": 5000},
        "Scarf",
    ])
    assert "Размер: M | Цвет: Red" in text
    assert "2. Belt" in text and "Цвет: —" in text
    assert "3. Scarf" in text
