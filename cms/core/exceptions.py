from typing import Optional


class CMSError(Exception):
    """Базовая ошибка приложения с сообщением для пользователя"""

    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DocumentNotFoundError(CMSError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} does not exist.")


class DocumentExistsError(CMSError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} already exists")


class ValidationError(CMSError, ValueError):
    """Нарушено правило проверки входных данных"""


class InvalidNameError(ValidationError):
    default_message = "Invalid document name"


class EmptyNameError(InvalidNameError):
    default_message = "A name is required"


class BadExtensionError(InvalidNameError):
    default_message = "Please use the .txt or .md extension when naming your file"


class BadCharsError(ValidationError):
    pass


class TooShortError(ValidationError):
    def __init__(self, message: str, min_length: int):
        self.min_length = min_length
        super().__init__(message)


class UsernameTakenError(ValidationError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"{username} is already taken")


class UnsupportedKindError(CMSError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} cannot be displayed")


class PersistenceError(CMSError):
    default_message = "Could not save changes"


class UnauthorizedError(CMSError):
    default_message = "You must be signed in to do that."

    def __init__(self, message: Optional[str] = None, redirect_target: str = "/"):
        self.redirect_target = redirect_target
        super().__init__(message)


class InvalidCredentialsError(UnauthorizedError):
    default_message = "Invalid Credentials"
