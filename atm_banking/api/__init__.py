"""
ATM Backend API Application Factory
"""

from typing import Optional

from fastapi import FastAPI

from .. import __version__
from ..atm import ATMSystem
from .customers import router as customers_router
from .sessions import router as sessions_router
from .accounts import router as accounts_router


def create_app(system: Optional[ATMSystem] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="ATM Banking API",
        description="Customer ledger, access gate and transaction engine for an ATM backend",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.atm_system = system or ATMSystem()

    # Include routers
    app.include_router(customers_router, prefix="/customers", tags=["Customers"])
    app.include_router(sessions_router, prefix="/sessions", tags=["Sessions"])
    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "atm_banking_api",
            "version": __version__
        }

    # Root endpoint
    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "ATM Banking API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "customers": "/customers",
                "sessions": "/sessions",
                "accounts": "/accounts"
            }
        }

    return app
