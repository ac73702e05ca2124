from pathlib import Path
from dotenv import load_dotenv
import os

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")  # .env можно не создавать — возьмутся дефолты

APP_NAME = "FashionStore"
ENV = os.getenv("ENV", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Строка подключения к БД заказов (пусто: БД не подключена)
DATABASE_URL = os.getenv("DATABASE_URL", "").strip()

# Telegram: один токен на уведомления и админ-бота
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "").strip()
TELEGRAM_CHAT_ID = os.getenv("TELEGRAM_CHAT_ID", "").strip()
TELEGRAM_ADMIN_ID = os.getenv("TELEGRAM_ADMIN_ID", "").strip()
TELEGRAM_POLL_TIMEOUT = int(os.getenv("TELEGRAM_POLL_TIMEOUT", "30"))

# Часовой пояс для дат в сообщениях (пусто: системный)
TIMEZONE = os.getenv("TIMEZONE", "Asia/Almaty").strip()

# Запускать админ-бота внутри веб-процесса
ADMIN_BOT_ENABLED = os.getenv("ADMIN_BOT_ENABLED", "1").strip().lower() in ("1", "true", "yes")


def telegram_configured() -> bool:
    return bool(TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID)


def database_configured() -> bool:
    return bool(DATABASE_URL)


def admin_bot_configured() -> bool:
    return bool(TELEGRAM_BOT_TOKEN and TELEGRAM_ADMIN_ID)
