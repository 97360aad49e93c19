"""
API Endpoints Package
All REST API route handlers
"""

from riskengine.api.endpoints.risk import router as risk_router

__all__ = [
    "risk_router"
]
