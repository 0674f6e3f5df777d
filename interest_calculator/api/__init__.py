"""
Interest Calculator API Application Factory
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from .interest import router as interest_router
from .. import __version__
from ..config import get_config
from ..logging_config import setup_logging


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    settings = get_config()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Interest Calculator API",
        description="Day-count interest and anticipative back-calculation",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(interest_router, prefix="/interest", tags=["Interest"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "interest_calculator_api",
            "version": __version__
        }

    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Interest Calculator API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "methods": "/interest/methods",
                "calculate": "/interest/calculate",
                "table": "/interest/table",
            }
        }

    return app


def run_server(host: str = "0.0.0.0", port: int = 8090, debug: bool = False):
    """Run the FastAPI server"""
    uvicorn.run(
        "interest_calculator.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=debug,
        log_level="info"
    )
