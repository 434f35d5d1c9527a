from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contract_analyzer.api.container import AppContainer, build_container
from contract_analyzer.api.errors import register_error_handlers
from contract_analyzer.api.routes import router
from contract_analyzer.config.settings import Settings
from contract_analyzer.logging.logger import Log


def create_app(settings: Settings, container: AppContainer | None = None) -> FastAPI:
    """Build the HTTP application.

    The container is built from settings unless one is supplied. Startup opens
    the database, applies the schema and starts the worker; shutdown reverses it.
    """
    container = container or build_container(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        container.database.open()
        container.contract_repo.ensure_schema()
        container.worker.start()
        Log.info(
            f"Contract analyzer ready ({settings.provider_label}, model "
            f"{settings.model_name}, {settings.processing_mode} mode)"
        )
        try:
            yield
        finally:
            container.worker.stop()
            container.database.close()

    app = FastAPI(title="Contract Analyzer", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app, settings)
    app.include_router(router)
    return app
