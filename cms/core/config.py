from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    env: str = Field("production", pattern="^(production|test)$")
    base_dir: Path = Path(".")
    session_secret: str = "change-me"
    password_hash_rounds: int = Field(12, ge=4, le=31)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="CMS_", env_file=".env", extra="ignore")

    @property
    def is_test(self) -> bool:
        return self.env == "test"

    @property
    def data_path(self) -> Path:
        """Каталог с документами"""
        if self.is_test:
            return self.base_dir / "tests" / "data"
        return self.base_dir / "data"

    @property
    def credentials_path(self) -> Path:
        """Файл реестра пользователей"""
        if self.is_test:
            return self.base_dir / "tests" / "users.yml"
        return self.base_dir / "users.yml"


settings = Settings()
