"""Application entry point for the SmartDiet API.

Defines the FastAPI app factory, middleware, exception handlers and the API
routers from the `api` package. The `lifespan` handler opens the store and
applies pending schema migrations before the first request is served; a
failed migration aborts startup.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.config import router as config_router
from api.history import router as history_router
from api.profiles import router as profiles_router
from api.recipes import router as recipes_router
from api.recommendations import router as recommendations_router
from core.config import APP_NAME, APP_VERSION, AppConfig
from core.error_handlers import register_exception_handlers
from core.exceptions import StorageError
from core.logger import get_logger, set_log_level
from data.ingest_recipes import seed_recipes
from data.recipe_catalog import RecipeCatalogLoader
from database.store import init_store
from services.recommendation_service import RecommendationService

logger = get_logger("main")


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Explicit configuration; read from the environment when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the store and wire the services before serving requests."""
        app_config = config or AppConfig.from_env()
        set_log_level(app_config.log_level)
        store = init_store(app_config)
        catalog_loader = RecipeCatalogLoader(app_config)
        try:
            seed_recipes(store, catalog_loader())
        except StorageError as exc:
            # recommendations report the broken catalog per request
            logger.warning("Recipe catalog not seeded: %s", exc.message)
        app.state.config = app_config
        app.state.store = store
        app.state.recommendation_service = RecommendationService(store, catalog_loader, app_config)
        logger.info("%s %s ready (storage: %s)", APP_NAME, app_config.version, app_config.storage_path)
        try:
            yield
        finally:
            store.dispose()

    app = FastAPI(title="SmartDiet API", version=APP_VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log incoming requests and their responses."""
        logger.info("%s %s", request.method, request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request error: %s %s", request.method, request.url.path)
            raise
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    @app.get("/health")
    def health(request: Request):
        """Return basic health status and whether the store answers."""
        store = request.app.state.store
        store.get_diet_history_count("__health__")
        return {"status": "healthy", "database": "connected"}

    app.include_router(profiles_router)
    app.include_router(history_router)
    app.include_router(recipes_router)
    app.include_router(recommendations_router)
    app.include_router(config_router)
    return app


app = create_app()


if __name__ == "__main__":
    # Allow starting the app via `python ./main.py`
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
