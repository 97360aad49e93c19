"""
Risk Engine - Core Module
Central configuration and error taxonomy
"""

from riskengine.core.config import Settings, settings
from riskengine.core.exceptions import (
    RiskEngineError,
    EntityNotFoundError,
    ComputationError,
    InvalidWeightUpdate
)

__all__ = [
    "Settings",
    "settings",
    "RiskEngineError",
    "EntityNotFoundError",
    "ComputationError",
    "InvalidWeightUpdate"
]
