"""
Risk Engine - API Module
REST endpoints wrapping the risk assessor
"""

from riskengine.api.endpoints.risk import router as risk_router
from riskengine.api.dependencies import get_assessor, get_refresher

__all__ = [
    "risk_router",
    "get_assessor",
    "get_refresher"
]
