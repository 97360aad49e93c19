"""
Risk Engine - Models Module
Pydantic schemas for assessments and API payloads
"""

from riskengine.models.schemas import (
    ActivityRecord,
    RiskTier,
    Assessment,
    ModelPerformance,
    RiskSummary,
    AssessmentResponse,
    WeightUpdateRequest,
    WeightUpdateResponse,
    ErrorResponse,
    EntityActivity,
    EntityListResponse,
    DashboardStats
)

__all__ = [
    "ActivityRecord",
    "RiskTier",
    "Assessment",
    "ModelPerformance",
    "RiskSummary",
    "AssessmentResponse",
    "WeightUpdateRequest",
    "WeightUpdateResponse",
    "ErrorResponse",
    "EntityActivity",
    "EntityListResponse",
    "DashboardStats"
]
