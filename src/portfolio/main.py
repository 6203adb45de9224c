from contextlib import asynccontextmanager

from fastapi import FastAPI

from portfolio.api.v1.error_handlers import register_exception_handlers
from portfolio.api.v1.router import api_router
from portfolio.config import Settings, get_settings
from portfolio.core.logging import RequestIDMiddleware, setup_logging


def create_app(settings: Settings | None = None, *, create_tables: bool = True) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if create_tables:
            from portfolio.database.session import init_models

            await init_models()
        yield

    app = FastAPI(title="Portfolio API", lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
