"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from cms.core.config import Settings
from cms.core.security import create_pwd_context, get_password_hash
from cms.db.repositories import DocumentRepository, UserRepository
from cms.main import create_app

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "secret"


@pytest.fixture()
def settings(tmp_path):
    """Настройки тестового окружения во временном каталоге"""
    return Settings(
        env="test",
        base_dir=tmp_path,
        session_secret="test-secret",
        password_hash_rounds=4,
    )


@pytest.fixture()
def pwd_context(settings):
    return create_pwd_context(settings.password_hash_rounds)


@pytest.fixture()
def document_repository(settings):
    settings.data_path.mkdir(parents=True, exist_ok=True)
    return DocumentRepository(settings.data_path)


@pytest.fixture()
def user_repository(settings, pwd_context):
    repository = UserRepository(settings.credentials_path)
    repository.add(ADMIN_USERNAME, get_password_hash(pwd_context, ADMIN_PASSWORD))
    return repository


@pytest.fixture()
def create_document(document_repository):
    def _create(name, content=b""):
        if isinstance(content, str):
            content = content.encode("utf-8")
        document_repository.write(name, content)

    return _create


@pytest.fixture()
def client(settings, document_repository, user_repository):
    app = create_app(settings=settings)
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture()
def admin_client(client):
    """Клиент с вошедшим пользователем admin"""
    resp = client.post("/users/signin", data={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 302
    # сбрасываем приветственное сообщение
    client.get("/")
    return client
