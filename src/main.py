"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api import auth, external, family_recipes, likes, recipes, steps, users
from src.config import get_settings
from src.exceptions import RecipeAppError

settings = get_settings()

logging.basicConfig(level=settings.log_level, format=settings.log_format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting Recipe Book API ({settings.environment})")
    yield
    logger.info("Recipe Book API stopped")


app = FastAPI(
    title="Recipe Book API",
    description="Personal and family recipes with step-by-step cooking progress",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RecipeAppError)
async def recipe_app_error_handler(request: Request, exc: RecipeAppError) -> JSONResponse:
    """Translate domain errors into HTTP responses."""
    if exc.http_status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


# Register routers
app.include_router(auth.router)
app.include_router(recipes.router)
app.include_router(family_recipes.router)
app.include_router(steps.router)
app.include_router(users.router)
app.include_router(likes.router)
app.include_router(external.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
