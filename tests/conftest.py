import pytest
from fastapi.testclient import TestClient

from todo_service.main import create_app
from todo_service.settings import Settings
from todo_service.store import InMemoryStore


def make_settings(**overrides) -> Settings:
    values = dict(
        port=3000,
        host="127.0.0.1",
        app_env="development",
        log_level="INFO",
        api_prefix="/api",
        cors_allow_origins=["*"],
        seed_data=False,
        static_dir=None,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    # Not used as a context manager, so startup seeding does not run
    return TestClient(app)
