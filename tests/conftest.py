import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fashion_store.db import Base
from fashion_store.services.order_store import SqlOrderStore
from fashion_store.telegram.telegram_notify import OrderNotifier
from tests.fakes import CHANNEL_ID, FakeStore, FakeTelegramClient


@pytest.fixture
def tg():
    return FakeTelegramClient()


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def notifier(tg):
    return OrderNotifier(tg, CHANNEL_ID)


@pytest.fixture
def sql_store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    import fashion_store.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    yield SqlOrderStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    engine.dispose()


@pytest.fixture(autouse=True)
def utc_timezone(monkeypatch):
    # даты в сообщениях не должны зависеть от машины, где идут тесты
    from fashion_store import config

    monkeypatch.setattr(config, "TIMEZONE", "UTC")
