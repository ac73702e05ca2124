# fashion_store/models/__init__.py
from .order import Order  # noqa: F401
