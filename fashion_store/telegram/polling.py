import logging
import threading
from typing import Callable, Dict, Any, Optional

from fashion_store.errors import DependencyUnavailable
from fashion_store.telegram.client import TelegramClient

log = logging.getLogger(__name__)

RETRY_DELAY = 2


class Poller:
    """Цикл getUpdates: по одному апдейту за раз, в порядке поступления."""

    def __init__(self, client: TelegramClient, handler: Callable[[Dict[str, Any]], None],
                 timeout: int = 30):
        self.client = client
        self.handler = handler
        self.timeout = timeout
        self.offset: Optional[int] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def poll_once(self) -> int:
        """Один запрос getUpdates. Возвращает число обработанных апдейтов."""
        updates = self.client.get_updates(self.offset, timeout=self.timeout)
        for upd in updates:
            self.offset = upd["update_id"] + 1
            try:
                self.handler(upd)
            except Exception:
                # один сломанный апдейт не должен останавливать бота
                log.exception("Ошибка обработки апдейта %s", upd.get("update_id"))
        return len(updates)

    def run(self) -> None:
        """Цикл получения апдейтов от Telegram"""
        log.info("Polling запущен")
        while not self._stop.is_set():
            try:
                self.poll_once()
            except DependencyUnavailable as e:
                log.error("Ошибка polling: %s", e)
                self._stop.wait(RETRY_DELAY)
        log.info("Polling остановлен")

    def start(self) -> threading.Thread:
        """Запускаем polling в фоне"""
        self._thread = threading.Thread(target=self.run, name="admin-bot-polling", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        self._stop.set()
