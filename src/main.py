"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import (
    ai,
    auth,
    dashboard,
    feedback,
    household,
    meal_plans,
    pantry,
    recipe_history,
    recipes,
    shopping_list,
    user,
)
from src.config import get_settings
from src.errors import register_exception_handlers

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.is_development else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting Smart Stock API ({settings.environment})")
    yield


app = FastAPI(
    title="Smart Stock API",
    description="Household pantry tracking, shopping lists, meal planning and AI recipes",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Register routers
app.include_router(auth.router)
app.include_router(ai.router)
app.include_router(pantry.router)
app.include_router(shopping_list.router)
app.include_router(meal_plans.router)
app.include_router(recipes.router)
app.include_router(recipe_history.router)
app.include_router(household.router)
app.include_router(user.router)
app.include_router(dashboard.router)
app.include_router(feedback.router)


@app.get("/health")
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"success": True, "status": "healthy", "environment": settings.environment}
