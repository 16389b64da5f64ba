"""Pytest configuration and fixtures for Community backend tests."""

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from src.core.config import Settings
from src.main import create_app
from src.shared.errors import (
    BaseError,
    ExceptionMapper,
    InternalError,
    MessageCatalog,
    UnauthenticatedError,
    set_message_catalog,
)

# ==================== Catalog Fixtures ====================


CATALOG_BUNDLES = {
    "en": {
        "error.unauthenticated": "Please sign in to continue.",
        "error.service_unavailable": "The service is busy, try again later.",
    },
    "de": {
        "error.unauthenticated": "Bitte melden Sie sich an.",
    },
    "pt-BR": {
        "error.not_found": "Não encontrado.",
    },
}


@pytest.fixture(autouse=True)
def reset_error_state() -> Iterator[None]:
    """Isolate the process-wide catalog and mapper registrations."""
    handlers = dict(ExceptionMapper._handlers)
    set_message_catalog(None)
    yield
    set_message_catalog(None)
    ExceptionMapper._handlers.clear()
    ExceptionMapper._handlers.update(handlers)


@pytest.fixture
def catalog() -> Iterator[MessageCatalog]:
    """Install a message catalog with en/de/pt-BR bundles."""
    catalog = MessageCatalog(CATALOG_BUNDLES, default_locale="en")
    set_message_catalog(catalog)
    yield catalog
    set_message_catalog(None)


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """Write the test bundles as ``<locale>.json`` files."""
    for locale, messages in CATALOG_BUNDLES.items():
        (tmp_path / f"{locale}.json").write_text(
            json.dumps(messages, ensure_ascii=False), encoding="utf-8"
        )
    return tmp_path


# ==================== Application Fixtures ====================


class EchoPayload(BaseModel):
    text: str


def _build_error_router() -> APIRouter:
    """Routes that raise each kind of error."""
    router = APIRouter(prefix="/test")

    @router.get("/unauthenticated")
    async def raise_unauthenticated() -> None:
        raise UnauthenticatedError()

    @router.get("/system")
    async def raise_system() -> None:
        raise InternalError("error.db", "connection pool exhausted on db-1")

    @router.get("/uncategorized")
    async def raise_uncategorized() -> None:
        raise BaseError("error.base", "secret detail")

    @router.get("/crash")
    async def crash() -> None:
        raise RuntimeError("boom")

    @router.post("/echo")
    async def echo(payload: EchoPayload) -> dict[str, str]:
        return {"text": payload.text}

    return router


@pytest.fixture
def test_settings() -> Settings:
    """Settings with synchronous logging and no catalog."""
    settings = Settings()
    settings.app.debug = False
    settings.logging.enqueue = False
    settings.logging.format = "console"
    settings.i18n.catalog_dir = ""
    return settings


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Application with the error-raising test routes."""
    app = create_app(test_settings)
    app.include_router(_build_error_router())
    return app


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client running the application lifespan."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def localized_client(test_settings: Settings, catalog_dir: Path) -> Iterator[TestClient]:
    """Test client for an application loading the catalog from disk."""
    test_settings.i18n.catalog_dir = str(catalog_dir)
    app = create_app(test_settings)
    app.include_router(_build_error_router())
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
