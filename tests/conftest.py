import dataclasses

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blog.core.config import get_settings, settings
from blog.db.base import Base
from blog.db.models.post import Post  # noqa: F401
from blog.db.session import get_db
from blog.routers.post import get_http_client
from blog.services.png import PNG_SIGNATURE
from main import app


@pytest.fixture
def png_bytes():
    return PNG_SIGNATURE + b"\x00\x00\x00\rIHDR" + b"\x00" * 17


@pytest.fixture
def images_dir(tmp_path):
    path = tmp_path / "images"
    (path / "thumbnails").mkdir(parents=True)
    (path / "avatars").mkdir(parents=True)
    return path


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


class FakeAvatarSource:
    """Remote host stand-in mapping a URL to an ``httpx.Response`` or an exception."""

    def __init__(self):
        self.routes = {}
        self.requested = []
        self.client = httpx.Client(transport=httpx.MockTransport(self.handle))

    def handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        answer = self.routes.get(url)
        if answer is None:
            return httpx.Response(404, content=b"not found")
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def avatar_source():
    source = FakeAvatarSource()
    yield source
    source.client.close()


@pytest.fixture
def client(session_factory, images_dir, avatar_source):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    test_settings = dataclasses.replace(settings, images_dir=str(images_dir))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_http_client] = lambda: avatar_source.client
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
