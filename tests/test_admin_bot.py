import pytest

from fashion_store.bot.dispatcher import AdminBot, extract_command
from tests.fakes import ADMIN_ID, FakeStore, FakeTelegramClient, make_order

STRANGER_ID = 555


@pytest.fixture
def store():
    s = FakeStore()
    for o in [make_order(42, "new", minutes_ago=5), make_order(7, "confirmed", minutes_ago=10)]:
        s.rows[o["id"]] = o
    return s


@pytest.fixture
def bot(store, tg):
    b = AdminBot(tg, store, ADMIN_ID)
    b.load()
    store.calls.clear()
    return b


def message(text, chat_id=ADMIN_ID):
    return {"update_id": 1, "message": {"message_id": 10, "chat": {"id": int(chat_id)}, "text": text}}


def press(data, chat_id=ADMIN_ID, message_id=77):
    return {"update_id": 2, "callback_query": {
        "id": "cb1",
        "data": data,
        "message": {"message_id": message_id, "chat": {"id": int(chat_id)}},
    }}


def test_extract_command():
    assert extract_command("/orders@fashion_bot now") == "/orders"
    assert extract_command("  /NEW ") == "/new"
    assert extract_command("") == ""


# ---------- доступ ----------
def test_stranger_command_denied(bot, store, tg):
    before = bot.mirror.orders()
    bot.handle_update(message("/orders", chat_id=STRANGER_ID))

    (reply,) = tg.sent()
    assert reply["chat_id"] == STRANGER_ID
    assert "Нет доступа" in reply["text"]
    assert store.calls == []
    assert bot.mirror.orders() == before


def test_stranger_button_denied(bot, store, tg):
    bot.handle_update(press("delete_42", chat_id=STRANGER_ID))
    assert tg.methods() == ["answerCallbackQuery"]
    assert tg.answers()[0]["show_alert"] is True
    assert store.calls == []
    assert 42 in bot.mirror


# ---------- команды ----------
def test_start(bot, tg):
    bot.handle_update(message("/start"))
    assert "Добро пожаловать" in tg.sent()[0]["text"]


def test_orders_command_lists_mirror(bot, store, tg):
    bot.handle_update(message("/orders"))
    text = tg.sent()[0]["text"]
    assert text.index("#42") < text.index("#7")
    assert store.calls == []


def test_new_command_filters(bot, tg):
    bot.handle_update(message("/new"))
    text = tg.sent()[0]["text"]
    assert "#42" in text and "#7 -" not in text


def test_stats_command(bot, tg):
    bot.handle_update(message("/stats"))
    text = tg.sent()[0]["text"]
    assert "Всего заказов: 2" in text
    assert "Общая сумма: 30 000 ₸" in text


def test_other_text_ignored(bot, tg):
    bot.handle_update(message("привет"))
    assert tg.calls == []


# ---------- кнопки ----------
def test_filter_button(bot, tg):
    bot.handle_update(press("filter_confirmed"))
    assert tg.methods() == ["editMessageText", "sendMessage", "answerCallbackQuery"]
    text = tg.sent()[0]["text"]
    assert "#7" in text and "#42" not in text


def test_open_button(bot, tg):
    bot.handle_update(press("order_42"))
    assert tg.methods() == ["deleteMessage", "sendMessage", "answerCallbackQuery"]
    assert "Заказ #42" in tg.sent()[0]["text"]


def test_confirm_order_42(bot, store, tg):
    bot.handle_update(press("status_42_confirmed"))

    assert store.rows[42]["status"] == "confirmed"
    assert bot.mirror.get(42)["status"] == "confirmed"
    assert "Подтвержден" in tg.answers()[0]["text"]
    detail = tg.sent()[0]
    assert "Заказ #42" in detail["text"]
    tokens = [b["callback_data"] for row in detail["reply_markup"]["inline_keyboard"] for b in row]
    # переходы не ограничены: все кнопки статуса на месте
    assert {"status_42_confirmed", "status_42_delivered", "status_42_cancelled"} <= set(tokens)


def test_confirm_twice_is_idempotent(bot, store, tg):
    bot.handle_update(press("status_42_confirmed"))
    bot.handle_update(press("status_42_confirmed"))
    assert store.rows[42]["status"] == "confirmed"
    assert all("Ошибка" not in a["text"] for a in tg.answers())


def test_status_failure_keeps_mirror(bot, store, tg):
    store.fail = True
    bot.handle_update(press("status_42_delivered"))
    assert bot.mirror.get(42)["status"] == "new"
    assert tg.answers()[0]["text"] == "❌ Ошибка обновления"
    assert tg.sent() == []


def test_status_of_missing_order(bot, tg):
    bot.handle_update(press("status_999_confirmed"))
    assert tg.answers()[0]["text"] == "❌ Ошибка обновления"


def test_delete_then_open_is_not_found(bot, store, tg):
    bot.handle_update(press("delete_42"))
    assert 42 not in store.rows
    assert 42 not in bot.mirror
    assert tg.answers()[0]["text"] == "✅ Заказ удалён"
    assert "deleteMessage" in tg.methods()

    store.calls.clear()
    tg.calls.clear()
    bot.handle_update(press("order_42"))
    assert tg.sent()[0]["text"] == "❌ Заказ не найден"
    assert store.calls == []


def test_delete_failure(bot, store, tg):
    store.fail = True
    bot.handle_update(press("delete_42"))
    assert 42 in bot.mirror
    assert tg.answers()[0]["text"] == "❌ Ошибка удаления"


def test_stats_button(bot, tg):
    bot.handle_update(press("stats"))
    assert tg.methods() == ["deleteMessage", "sendMessage", "answerCallbackQuery"]
    markup = tg.sent()[0]["reply_markup"]
    assert markup["inline_keyboard"][0][0]["callback_data"] == "filter_all"


def test_refresh_pulls_store(bot, store, tg):
    store.rows[100] = make_order(100)
    bot.handle_update(press("refresh"))
    assert store.calls == ["select_all"]
    assert 100 in bot.mirror
    assert tg.answers()[0]["text"] == "🔄 Обновлено"


def test_refresh_failure(bot, store, tg):
    store.fail = True
    bot.handle_update(press("refresh"))
    assert len(bot.mirror) == 2
    assert tg.answers()[0]["text"] == "❌ Ошибка загрузки заказов"


def test_unknown_button(bot, store, tg):
    bot.handle_update(press("launch_rockets"))
    assert tg.methods() == ["answerCallbackQuery"]
    assert store.calls == []


def test_delete_message_failure_does_not_abort(bot, tg):
    def broken_delete(chat_id, message_id):
        from fashion_store.errors import DependencyUnavailable
        raise DependencyUnavailable("message too old")

    tg.delete_message = broken_delete
    bot.handle_update(press("order_7"))
    assert "Заказ #7" in tg.sent()[0]["text"]


# ---------- новый заказ ----------
def test_notify_new_order(bot, tg):
    bot.notify_new_order(make_order(300))
    assert bot.mirror.orders()[0]["id"] == 300
    push = tg.sent()[0]
    assert push["chat_id"] == ADMIN_ID
    assert "НОВЫЙ ЗАКАЗ #300" in push["text"]


def test_bot_without_store(tg):
    bot = AdminBot(tg, None, ADMIN_ID)
    bot.load()
    bot.notify_new_order(make_order(1))
    bot.handle_update(press("status_1_confirmed"))
    assert tg.answers()[0]["text"] == "❌ Ошибка обновления"
    assert bot.mirror.get(1)["status"] == "new"
