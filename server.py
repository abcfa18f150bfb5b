import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from proxy_api import posts
from proxy_api.jsonplaceholder import JsonPlaceholderBackend
from proxy_api.settings import Settings, load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("server")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    for name in ("server", "proxy_api"):
        logging.getLogger(name).setLevel(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.posts_backend = JsonPlaceholderBackend(
            settings.upstream_base_url,
            timeout=settings.upstream_timeout,
        )
        yield
        await app.state.posts_backend.aclose()

    app = FastAPI(title="Posts Proxy Server", lifespan=lifespan)

    # Enable CORS so a browser frontend can call this server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            '"%s %s" %s in %.1fms',
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.get("/", response_class=PlainTextResponse)
    def hello():
        return "Hello World!"

    app.include_router(posts.router, prefix="/posts")
    return app


app = create_app()


def main() -> None:
    settings = load_settings()
    logger.info("Starting up on http://localhost:%s", settings.port)
    try:
        uvicorn.run(app, host=settings.host, port=settings.port)
    except (OSError, OverflowError) as e:
        logger.critical("Listener failed: %s", e)
        raise SystemExit(1) from e
    except SystemExit as e:
        # uvicorn exits this way when it cannot bind
        if e.code:
            logger.critical("Server exited with status %s", e.code)
        raise


if __name__ == "__main__":
    main()
