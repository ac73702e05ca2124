class ShopError(Exception):
    """Базовая ошибка магазина. Текст сообщения можно показывать пользователю."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(ShopError):
    """Некорректная или неполная заявка (исправляется клиентом)."""


class UnknownAction(ValidationError):
    """Кнопка прислала callback_data, которую мы не понимаем."""


class DependencyUnavailable(ShopError):
    """БД или Telegram недоступны либо не настроены."""


class NotFoundError(ShopError):
    """Заказ с таким id не найден (в кеше или в БД)."""


class AuthorizationError(ShopError):
    """Отправитель не является администратором."""
