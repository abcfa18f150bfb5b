# tests/conftest.py
import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

import server
from proxy_api.jsonplaceholder import get_posts_backend
from proxy_api.models import Post, PostWithoutId


class JsonPlaceholderFixture:
    """
    Stands in for JSONPlaceholder: lists a single post and echoes creates
    back with id 101, like the real API does.
    """

    def __init__(self):
        self.created: list[PostWithoutId] = []

    async def get_posts(self) -> httpx.Response:
        posts = [Post(id=1, userId=2, title="Hello World", body="Foo Bar")]
        return httpx.Response(200, json=[p.to_wire() for p in posts])

    async def create_post(self, payload: PostWithoutId) -> httpx.Response:
        self.created.append(payload)
        created = Post(id=101, **payload.to_wire())
        return httpx.Response(200, json=created.to_wire())


@pytest.fixture
def upstream():
    return JsonPlaceholderFixture()


@pytest.fixture
def app(upstream):
    """
    A fresh app whose posts backend is the fixture above.
    Tests can swap in another backend through app.dependency_overrides.
    """
    app = server.create_app()
    app.dependency_overrides[get_posts_backend] = lambda: upstream
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
