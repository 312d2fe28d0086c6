import logging
from contextlib import asynccontextmanager
from typing import Optional

# Import third-party libraries
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from postbox.api import healthcheck_api, posts_api
from postbox.config import Settings, get_settings
from postbox.db.post_db import PostStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(settings.log_level)
    logging.getLogger("uvicorn.error").setLevel(settings.log_level)

    app_logger = logging.getLogger("postbox")
    app_logger.setLevel(settings.log_level)
    app_logger.propagate = True


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Any client-caused malformed request is a 400, whichever part of it failed.
    in_path = any(error.get("loc", ("",))[0] == "path" for error in exc.errors())
    detail = "Invalid post ID" if in_path else "Error reading request body"
    logger.warning("%s %s rejected: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=400, content={"detail": detail})


def create_app(store: Optional[PostStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server is running at http://%s:%d", settings.host, settings.port)
        yield
        logger.info("Application shutdown complete. %d posts discarded.", app.state.post_store.count())

    app = FastAPI(lifespan=lifespan)
    app.state.post_store = store if store is not None else PostStore()

    app.include_router(healthcheck_api.router)
    app.include_router(posts_api.router)

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)

    return app


app = create_app()


def run():
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
