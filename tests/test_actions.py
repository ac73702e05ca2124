import pytest

from fashion_store.bot.actions import (
    DeleteOrder, FilterOrders, OpenOrder, Refresh, SetStatus, ShowStats, parse_action,
)
from fashion_store.errors import UnknownAction, ValidationError


@pytest.mark.parametrize("token, expected", [
    ("filter_all", FilterOrders("all")),
    ("filter_new", FilterOrders("new")),
    ("filter_cancelled", FilterOrders("cancelled")),
    ("order_42", OpenOrder(42)),
    ("status_42_confirmed", SetStatus(42, "confirmed")),
    ("status_7_delivered", SetStatus(7, "delivered")),
    ("delete_42", DeleteOrder(42)),
    ("stats", ShowStats()),
    ("refresh", Refresh()),
])
def test_parse(token, expected):
    action = parse_action(token)
    assert action == expected
    assert action.token == token


@pytest.mark.parametrize("token", [
    "", "filter_", "filter_shipped", "order_", "order_abc", "order_-1",
    "status_42", "status_42_shipped", "status_x_new", "delete_", "stats_now", "noop",
])
def test_unknown_tokens(token):
    with pytest.raises(UnknownAction):
        parse_action(token)


def test_unknown_action_is_validation_error():
    assert issubclass(UnknownAction, ValidationError)
