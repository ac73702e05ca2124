import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from fashion_store import config
from fashion_store.errors import ValidationError
from fashion_store.services.order_store import OrderStore, get_order_store
from fashion_store.services.orders import submit_order
from fashion_store.telegram.telegram_notify import OrderNotifier, get_notifier

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["orders"])


def get_admin_bot(request: Request):
    """Админ-бот этого процесса (если запущен на startup)."""
    return getattr(request.app.state, "admin_bot", None)


# ---------- ОФОРМЛЕНИЕ ЗАКАЗА ----------
@router.post("/orders")
async def create_order(
    request: Request,
    store: Optional[OrderStore] = Depends(get_order_store),
    notifier: OrderNotifier = Depends(get_notifier),
    admin_bot=Depends(get_admin_bot),
):
    try:
        payload = await request.json()
    except ValueError:
        return JSONResponse({"error": "Некорректный JSON"}, status_code=400)

    try:
        # БД и Telegram: блокирующие вызовы
        result = await run_in_threadpool(
            submit_order,
            payload,
            store,
            notifier,
            admin_bot.notify_new_order if admin_bot is not None else None,
        )
    except ValidationError as e:
        return JSONResponse({"error": e.message}, status_code=400)
    except Exception as e:
        log.exception("❌ Критическая ошибка")
        body = {"error": "Ошибка сервера"}
        if config.ENV == "development":
            body["message"] = str(e)
        return JSONResponse(body, status_code=500)

    status_code, body = result.to_response()
    return JSONResponse(body, status_code=status_code)


@router.api_route("/orders", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def create_order_wrong_method():
    return JSONResponse({"error": "Метод не допускается"}, status_code=405)
