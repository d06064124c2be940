import string
from typing import Iterable

from pydantic import ValidationError as SchemaValidationError

from cms.core.exceptions import (
    BadCharsError,
    BadExtensionError,
    EmptyNameError,
    TooShortError,
    UsernameTakenError,
    ValidationError,
)
from cms.domains.documents.entities import DocumentKind

MIN_CREDENTIAL_LENGTH = 5

_ALLOWED_CHARS = frozenset(string.ascii_lowercase + string.digits)


def has_bad_chars(value: str) -> bool:
    """Есть ли символы кроме латинских букв и цифр"""
    return any(char not in _ALLOWED_CHARS for char in value.lower())


def is_too_short(value: str, size: int = MIN_CREDENTIAL_LENGTH) -> bool:
    return len(value.strip()) < size


def is_username_taken(username: str, usernames: Iterable[str]) -> bool:
    """Регистронезависимая проверка занятости имени"""
    folded = username.casefold()
    return any(existing.casefold() == folded for existing in usernames)


def validate_document_name(name: str) -> DocumentKind:
    """Проверка имени документа, возвращает его тип"""
    if not name or not name.strip():
        raise EmptyNameError()

    kind = DocumentKind.from_name(name)
    if kind is None:
        raise BadExtensionError()
    return kind


def validate_username(username: str, usernames: Iterable[str]) -> None:
    """Правила проверяются по порядку, поднимается первое нарушенное"""
    if has_bad_chars(username):
        raise BadCharsError("Username must be only letters or numbers")
    if is_too_short(username):
        raise TooShortError(
            f"Username must be at least {MIN_CREDENTIAL_LENGTH} chars long (Letters and Numbers)",
            min_length=MIN_CREDENTIAL_LENGTH,
        )
    if is_username_taken(username, usernames):
        raise UsernameTakenError(username)


def validate_password(password: str) -> None:
    if has_bad_chars(password):
        raise BadCharsError("Password must be only letters or numbers")
    if is_too_short(password):
        raise TooShortError(
            f"Password must be at least {MIN_CREDENTIAL_LENGTH} chars long",
            min_length=MIN_CREDENTIAL_LENGTH,
        )


def first_violation(exc: SchemaValidationError) -> ValidationError:
    """Первое нарушенное правило из ошибки pydantic-схемы"""
    errors = exc.errors()
    for error in errors:
        original = (error.get("ctx") or {}).get("error")
        if isinstance(original, ValidationError):
            return original
    return ValidationError(errors[0]["msg"] if errors else None)
