"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from writespace.config import Settings, get_settings
from writespace.api import api_router
from writespace.repository import Repository
from writespace.services.llm_service import SuggestionService
from writespace.utils.logging import configure_logging, get_logger, set_correlation_id

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around a fresh repository."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        repository = Repository.from_url(settings.database_url, echo=settings.debug)
        await repository.init()
        app.state.repository = repository
        app.state.suggestion_service = SuggestionService(settings)
        if not app.state.suggestion_service.configured:
            logger.warning("OPENAI_API_KEY is not set; AI suggestions are disabled")
        logger.info("%s started with database %s", settings.app_name, settings.database_url)
        yield
        # Shutdown
        await repository.dispose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        description="WriteSpace - blogging platform with AI writing feedback",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        request_id = set_correlation_id(request.headers.get("X-Request-ID"))
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("writespace.main:app", host="0.0.0.0", port=8000, reload=True)
