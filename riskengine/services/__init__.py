"""
Risk Engine - Services Module
Activity store, risk assessment orchestration and recommendations
"""

from riskengine.services.activity_store import InMemoryActivityStore, generate_activity_profile
from riskengine.services.risk_assessor import RiskAssessor
from riskengine.services.recommendations import generate_recommendations

__all__ = [
    "InMemoryActivityStore",
    "RiskAssessor",
    "generate_activity_profile",
    "generate_recommendations"
]
