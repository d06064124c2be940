from typing import Iterable

from pydantic import BaseModel, ValidationError, ValidationInfo, field_validator

from cms.domains.validation import first_violation, validate_password, validate_username


class SignUpForm(BaseModel):
    """Схема для регистрации пользователя"""
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v, info: ValidationInfo):
        usernames = (info.context or {}).get("usernames", ())
        validate_username(v, usernames)
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        validate_password(v)
        return v

    @classmethod
    def parse(cls, username: str, password: str, usernames: Iterable[str] = ()) -> "SignUpForm":
        """Правила имени проверяются раньше правил пароля"""
        try:
            return cls.model_validate(
                {"username": username, "password": password},
                context={"usernames": list(usernames)},
            )
        except ValidationError as e:
            raise first_violation(e) from None


class SignInForm(BaseModel):
    """Схема для входа пользователя"""
    username: str = ""
    password: str = ""
