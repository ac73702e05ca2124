from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from fashion_store import config  # импортируем настройки

Base = declarative_base()


def make_engine(url: str):
    if url.startswith("sqlite"):
        # SQLite: сессии открываются из потока бота и из потоков FastAPI
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20
    )


# Создаём engine (если БД не настроена: None, сохранение в БД пропускается)
engine = make_engine(config.DATABASE_URL) if config.DATABASE_URL else None

# Фабрика сессий
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine) if engine is not None else None


def init_db(bind=None) -> None:
    """Создаём таблицы (модели должны быть импортированы до create_all)."""
    import fashion_store.models  # noqa: F401

    bind = bind if bind is not None else engine
    if bind is not None:
        Base.metadata.create_all(bind=bind)
