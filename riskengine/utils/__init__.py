"""
Risk Engine - Utilities Module
Logging setup and shared helpers
"""

from riskengine.utils.logger import setup_logging, log_system_event
from riskengine.utils.helpers import generate_id, clamp, round_score, to_float

__all__ = [
    "setup_logging",
    "log_system_event",
    "generate_id",
    "clamp",
    "round_score",
    "to_float"
]
