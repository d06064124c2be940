from passlib.context import CryptContext

# bcrypt учитывает только первые 72 байта пароля
BCRYPT_MAX_BYTES = 72


def create_pwd_context(rounds: int = 12) -> CryptContext:
    """Контекст для хеширования паролей"""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def _truncate(password: str) -> str:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")


def get_password_hash(pwd_context: CryptContext, password: str) -> str:
    """Хеширование пароля"""
    return pwd_context.hash(_truncate(password))


def verify_password(pwd_context: CryptContext, plain_password: str, hashed_password: str) -> bool:
    """Проверка пароля"""
    try:
        return pwd_context.verify(_truncate(plain_password), hashed_password)
    except ValueError:
        # повреждённый или неизвестный формат хеша
        return False
