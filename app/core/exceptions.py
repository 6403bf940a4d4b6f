# app/core/exceptions.py
"""
Ошибки бизнес-логики.

Сервисы (app/crud) бросают эти исключения, а обработчики в app/main.py
превращают их в JSON-ответ {"detail": ...} с нужным HTTP-статусом.
"""


class AppError(Exception):
    status_code = 500
    message = "Внутренняя ошибка сервера"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    message = "Некорректные данные"


class Unauthenticated(AppError):
    status_code = 401
    message = "Не авторизован"


class InvalidToken(Unauthenticated):
    message = "Токен недействителен или истёк"


class InvalidCredentials(AppError):
    status_code = 401
    message = "Неверный email или пароль"


class Forbidden(AppError):
    status_code = 403
    message = "Доступ запрещён"


class NotFound(AppError):
    status_code = 404
    message = "Не найдено"


class DuplicateEmail(AppError):
    status_code = 400
    message = "Email уже зарегистрирован"
