"""
Upstream posts backend: talks to JSONPlaceholder (or any API with the same
/posts contract) and hands back the raw httpx response with an unread body.
"""
import logging
from typing import Protocol

import httpx
from fastapi import Request

from proxy_api.models import PostWithoutId

logger = logging.getLogger(__name__)


class PostsBackend(Protocol):
    async def get_posts(self) -> httpx.Response: ...

    async def create_post(self, payload: PostWithoutId) -> httpx.Response: ...


class JsonPlaceholderBackend:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        logger.info("Posts backend initialized (base_url: %s, timeout: %ss)", base_url, timeout)

    async def _send(self, request: httpx.Request) -> httpx.Response:
        # caller reads and closes the body
        return await self._client.send(request, stream=True)

    async def get_posts(self) -> httpx.Response:
        """GET /posts upstream."""
        return await self._send(self._client.build_request("GET", "/posts"))

    async def create_post(self, payload: PostWithoutId) -> httpx.Response:
        """POST /posts upstream with the payload as JSON."""
        return await self._send(
            self._client.build_request("POST", "/posts", json=payload.to_wire())
        )

    async def aclose(self) -> None:
        await self._client.aclose()


def get_posts_backend(request: Request) -> PostsBackend:
    """FastAPI dependency returning the backend created in the app lifespan."""
    return request.app.state.posts_backend
