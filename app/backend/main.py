from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app_service import log_startup
from container import build_container
from errors import register_error_handling
from routers.api_router import router


logger = logging.getLogger("uvicorn.error")


def create_app(container=None):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "container", None) is None:
            app.state.container = build_container()
        log_startup(app.state.container)
        yield

    app = FastAPI(title="Spot Price API", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handling(app, logger)
    app.include_router(router)
    return app


app = create_app()
