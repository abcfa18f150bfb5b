import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError

from proxy_api.jsonplaceholder import PostsBackend, get_posts_backend
from proxy_api.models import Post, PostWithoutId

router = APIRouter(tags=["posts"])
logger = logging.getLogger(__name__)

_post_list = TypeAdapter(list[Post])


async def _read_body(response: httpx.Response, action: str) -> bytes:
    """Drain and close the upstream body; non-2xx becomes a 502."""
    try:
        body = await response.aread()
    finally:
        await response.aclose()
    if not response.is_success:
        logger.warning("Upstream returned %s while %s", response.status_code, action)
        raise HTTPException(
            status_code=502,
            detail=f"Upstream returned {response.status_code} while {action}",
        )
    return body


@router.get("")
@router.get("/", include_in_schema=False)
async def list_posts(backend: PostsBackend = Depends(get_posts_backend)):
    """Fetch all posts from the upstream API and relay them to the client."""
    try:
        response = await backend.get_posts()
        posts = _post_list.validate_json(await _read_body(response, "fetching posts"))
    except httpx.RequestError as e:
        logger.error("Error fetching posts: %s", e)
        raise HTTPException(status_code=500, detail=f"Error fetching posts: {str(e)}")
    except ValidationError as e:
        logger.error("Malformed posts from upstream: %s", e)
        raise HTTPException(status_code=502, detail="Malformed response from upstream")

    return JSONResponse(
        content=[post.to_wire() for post in posts],
        status_code=response.status_code,
    )


@router.post("")
@router.post("/", include_in_schema=False)
async def create_post(
    payload: PostWithoutId,
    backend: PostsBackend = Depends(get_posts_backend),
):
    """Create a post upstream and return the record with its assigned id."""
    try:
        response = await backend.create_post(payload)
        post = Post.model_validate_json(await _read_body(response, "creating post"))
    except httpx.RequestError as e:
        logger.error("Error creating post: %s", e)
        raise HTTPException(status_code=500, detail=f"Error creating post: {str(e)}")
    except ValidationError as e:
        logger.error("Malformed created post from upstream: %s", e)
        raise HTTPException(status_code=502, detail="Malformed response from upstream")

    return JSONResponse(content=post.to_wire(), status_code=200)
