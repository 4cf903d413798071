"""
CityFood back-office API.
Entry point for the FastAPI REST server.
"""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from cityfood_api.core.cors import configure_cors
from cityfood_api.core.errors import register_exception_handlers
from cityfood_api.core.lifespan import lifespan
from cityfood_api.core.middlewares import register_middlewares
from cityfood_api.routers.admin import router as admin_router
from cityfood_api.routers.auth import router as auth_router
from shared.config.settings import settings
from shared.security.rate_limit import limiter


app = FastAPI(
    title="CityFood API",
    description="Back-office API for the CityFood marketplace",
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter

register_exception_handlers(app)
configure_cors(app)
register_middlewares(app)

# StaticFiles refuses to mount a missing directory
Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
app.mount(settings.upload_url_prefix, StaticFiles(directory=settings.upload_dir), name="uploads")


# =============================================================================
# Health Check
# =============================================================================


@app.get("/api/health")
def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": "cityfood-api",
        "environment": settings.environment,
    }


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(auth_router)
app.include_router(admin_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cityfood_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
