"""
Behavioral Risk Engine
Risk scoring for monitored user and service accounts
"""

__version__ = "1.0.0"
__author__ = "Risk Engine Team"
__description__ = "Ensemble behavioral risk scoring with adaptive model state"

from riskengine.core.config import settings

__all__ = [
    "settings",
    "__version__"
]
