import logging

from fastapi import FastAPI

from fashion_store import config
from fashion_store.db import init_db
from fashion_store.logging_setup import setup_logging

setup_logging()
log = logging.getLogger(__name__)


# ==== FastAPI app ====
app = FastAPI(title=config.APP_NAME)
app.state.admin_bot = None
app.state.poller = None


# ==== Routers ====
from fashion_store.routers import orders as orders_router  # noqa: E402
app.include_router(orders_router.router)


# ==== Debug route ====
@app.get("/__routes")
def __routes():
    return [getattr(r, "path", str(r)) for r in app.routes]


@app.on_event("startup")
async def startup_event():
    # Создаём таблицы (если БД настроена)
    init_db()

    if not config.ADMIN_BOT_ENABLED:
        return
    if not config.admin_bot_configured():
        log.warning("⚠️ Админ-бот не запущен: нет TELEGRAM_BOT_TOKEN или TELEGRAM_ADMIN_ID")
        return

    from fashion_store.bot import create_admin_bot, start_admin_bot

    log.info("🚀 Запуск приложения, стартуем polling")
    app.state.admin_bot = create_admin_bot()
    app.state.poller = start_admin_bot(app.state.admin_bot)


@app.on_event("shutdown")
async def shutdown_event():
    if app.state.poller is not None:
        app.state.poller.stop()
