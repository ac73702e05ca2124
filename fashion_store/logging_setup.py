import logging

from fashion_store import config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Один раз настраиваем корневой логгер (повторный вызов ничего не ломает)."""
    logging.basicConfig(
        format=LOG_FORMAT,
        level=(level or config.LOG_LEVEL).upper(),
    )
    # requests/urllib3 шумят на каждом long-poll запросе
    logging.getLogger("urllib3").setLevel(logging.WARNING)
