"""
Shared fixtures for the storefront tests.

The data store is a real SQLite file per test; mail is recorded in
memory; contest uploads go to a temp directory.
"""

from dataclasses import dataclass
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ninjacoders.core.config import settings
from ninjacoders.domain.storefront.errors import MailDeliveryError
from ninjacoders.domain.storefront.ports import MailGateway
from ninjacoders.infrastructure.storefront.data_store_gateway import (
    SqlDataStoreGateway,
)
from ninjacoders.infrastructure.storefront.photo_storage import LocalPhotoStorage
from ninjacoders.infrastructure.storefront.schema import (
    create_store_engine,
    init_schema,
    seed_catalogue,
)
from ninjacoders.interfaces.storefront.dependencies import (
    get_data_store,
    get_mail_gateway,
    get_photo_storage,
)
from ninjacoders.main import app
from ninjacoders.shared.security.rate_limiting import limiter

PYTHON_ID = "p-python"
BOOTCAMP_ID = "p-bootcamp"
APIS_ID = "p-apis"

TEST_CATALOGUE = (
    {
        "id": PYTHON_ID,
        "sku": "NC-PY-101",
        "name": "Python Fundamentals",
        "description": "Types, functions, and modules.",
        "featured_image": "/static/img/python.jpg",
        "requires_deposit": False,
        "price_cents": 19_900,
    },
    {
        "id": BOOTCAMP_ID,
        "sku": "NC-BOOT-301",
        "name": "Ninja Bootcamp",
        "description": "Five days on site.",
        "featured_image": "/static/img/bootcamp.jpg",
        "requires_deposit": True,
        "price_cents": 149_900,
    },
    {
        "id": APIS_ID,
        "sku": "NC-WEB-201",
        "name": "Building Web APIs",
        "description": "Design, test, and ship an HTTP API.",
        "featured_image": "/static/img/apis.jpg",
        "requires_deposit": False,
        "price_cents": 34_950,
    },
)


@dataclass
class SentMail:
    to: str
    subject: str
    body: str
    html: bool


class RecordingMailGateway(MailGateway):
    """Keeps sent messages in memory; can be switched to fail."""

    def __init__(self) -> None:
        self.sent: list[SentMail] = []
        self.fail = False

    def send(self, to: str, subject: str, body: str, html: bool = False) -> None:
        if self.fail:
            raise MailDeliveryError("connection refused")
        self.sent.append(SentMail(to=to, subject=subject, body=body, html=html))


@pytest.fixture
def engine(tmp_path: Path):
    engine = create_store_engine(f"sqlite:///{tmp_path / 'store.db'}")
    init_schema(engine)
    seed_catalogue(engine, TEST_CATALOGUE)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine) -> SqlDataStoreGateway:
    return SqlDataStoreGateway(engine)


@pytest.fixture
def mailer() -> RecordingMailGateway:
    return RecordingMailGateway()


@pytest.fixture
def upload_root(tmp_path: Path) -> Path:
    return tmp_path / "contest-uploads"


@pytest.fixture
def upload_tmp_dir(tmp_path: Path, monkeypatch) -> Path:
    tmp_dir = tmp_path / "spool"
    monkeypatch.setattr(settings, "upload_tmp_dir", tmp_dir)
    return tmp_dir


@pytest.fixture
def client(store, mailer, upload_root, upload_tmp_dir):
    """TestClient wired to the temp store, recording mailer, and temp uploads."""
    app.dependency_overrides[get_data_store] = lambda: store
    app.dependency_overrides[get_mail_gateway] = lambda: mailer
    app.dependency_overrides[get_photo_storage] = lambda: LocalPhotoStorage(upload_root)
    limiter.enabled = False
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = True
