# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the DevNet API.
# It configures the FastAPI application with routers and error handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    DevNetException,
    devnet_exception_handler,
    validation_exception_handler,
)
from app.routers import health, users, profile, posts
from app.auth import routes as auth_routes
from lib.github_client import GithubClient
from lib.mongo_client import MongoStore
from lib.security import TokenService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Build the store, token service and GitHub client from the
      settings and ensure the unique indexes exist
    - Shutdown: Close the MongoDB connection
    """
    logger.info(f"Starting DevNet API in {settings.ENVIRONMENT} mode")

    app.state.store = MongoStore.from_settings(settings)
    app.state.tokens = TokenService.from_settings(settings)
    app.state.github = GithubClient.from_settings(settings)

    app.state.store.ensure_indexes()

    yield

    logger.info("Shutting down DevNet API")
    app.state.store.close()


# Create FastAPI application
app = FastAPI(
    title="DevNet API",
    description="""
## Developer Social Network API

Register, build a developer profile, and share posts with other developers.

### Quick Start

```bash
# 1. Register (returns a token)
curl -X POST http://localhost:5000/api/users \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Jane", "email": "jane@example.com", "password": "secret1"}'

# 2. Create your profile
curl -X POST http://localhost:5000/api/profile \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"status": "Developer", "skills": "Python, FastAPI"}'

# 3. Post something
curl -X POST http://localhost:5000/api/posts \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"text": "Hello, world"}'
```

Errors always look like `{"errors": [{"msg": "..."}], "code": "..."}`.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Users",
            "description": "Registration",
        },
        {
            "name": "Auth",
            "description": "Log in and fetch the current user",
        },
        {
            "name": "Profile",
            "description": "Developer profiles, experience, education and GitHub repositories",
        },
        {
            "name": "Posts",
            "description": "Posts, likes and comments",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(DevNetException)
async def handle_devnet_exception(request: Request, exc: DevNetException):
    """Handle custom DevNet exceptions."""
    return await devnet_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Report every failing field with status 400."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "errors": [{"msg": "Server error"}],
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Registration
app.include_router(
    users.router,
    prefix="/api/users",
    tags=["Users"]
)

# Login and current user
app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

# Profiles
app.include_router(
    profile.router,
    prefix="/api/profile",
    tags=["Profile"]
)

# Posts
app.include_router(
    posts.router,
    prefix="/api/posts",
    tags=["Posts"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "DevNet API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
