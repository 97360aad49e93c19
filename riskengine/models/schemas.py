"""
Pydantic Schemas for the Risk Engine
Assessment records, diagnostics snapshots and API request/response models
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum

ActivityRecord = Dict[str, Any]

class RiskTier(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank >= other.rank

_TIER_RANK = {
    RiskTier.LOW: 0,
    RiskTier.MEDIUM: 1,
    RiskTier.HIGH: 2,
    RiskTier.CRITICAL: 3,
}

class Assessment(BaseModel):
    """
    Result of one risk assessment. Frozen once produced.

    The tier can outrank the combined score: an anomaly override marks an
    entity CRITICAL even when ``combined_score`` sits in the LOW band.
    """
    model_config = ConfigDict(frozen=True)

    assessment_id: str
    entity_id: str
    anomaly_score: float
    pattern_score: float
    combined_score: float
    confidence: float
    risk_tier: RiskTier
    timestamp: datetime
    features_used: int
    model_version: str

class ModelPerformance(BaseModel):
    anomaly_scorer_accuracy: float
    pattern_classifier_accuracy: float
    combined_accuracy: float
    false_positive_rate: float
    true_positive_rate: float
    confidence: float
    historical_average: float
    last_updated: datetime

class RiskSummary(BaseModel):
    assessments: List[Assessment]
    average_score: float
    tier_counts: Dict[RiskTier, int]
    high_risk_count: int
    failed_entities: List[str] = Field(default_factory=list)

class AssessmentResponse(BaseModel):
    assessment: Assessment
    recommendations: List[str]

class WeightUpdateRequest(BaseModel):
    feature_name: str
    value: float

class WeightUpdateResponse(BaseModel):
    model_name: str
    feature_name: str
    value: float
    weights: Dict[str, float]

class ErrorResponse(BaseModel):
    error: str
    entity_id: Optional[str] = None
    cause: Optional[str] = None

class EntityActivity(BaseModel):
    entity_id: str
    activity: Dict[str, Any]

class EntityListResponse(BaseModel):
    entities: List[EntityActivity]
    total: int

class DashboardStats(BaseModel):
    total_entities: int
    assessed_entities: int
    average_risk_score: float
    high_risk_count: int
    tier_counts: Dict[RiskTier, int]
    failed_entities: int
    last_refreshed: Optional[datetime] = None
