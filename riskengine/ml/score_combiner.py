"""
Score Combination and Risk Tier Classification
"""

import logging
from typing import Tuple

from riskengine.models.schemas import RiskTier
from riskengine.utils.helpers import clamp

logger = logging.getLogger(__name__)

class ScoreCombiner:
    """
    Blends anomaly and pattern outputs into one score in [5, 50] and assigns a tier.

    Anomaly overrides escalate the tier on their own, so a CRITICAL tier may
    come with a combined score in the LOW band.
    """

    def __init__(
        self,
        anomaly_scale: float = 30.0,
        pattern_scale: float = 0.8,
        min_score: float = 5.0,
        max_score: float = 50.0,
        critical_score: float = 45.0,
        high_score: float = 35.0,
        medium_score: float = 25.0,
        critical_anomaly: float = 0.7,
        high_anomaly: float = 0.5,
        high_pattern: float = 35.0,
        medium_anomaly: float = 0.3
    ):
        self.anomaly_scale = anomaly_scale
        self.pattern_scale = pattern_scale
        self.min_score = min_score
        self.max_score = max_score
        self.critical_score = critical_score
        self.high_score = high_score
        self.medium_score = medium_score
        self.critical_anomaly = critical_anomaly
        self.high_anomaly = high_anomaly
        self.high_pattern = high_pattern
        self.medium_anomaly = medium_anomaly

    def combined_score(self, anomaly: float, pattern: float, confidence: float) -> float:
        raw = anomaly * self.anomaly_scale * confidence + pattern * self.pattern_scale
        return clamp(raw, self.min_score, self.max_score)

    def classify(self, combined: float, anomaly: float, pattern: float) -> RiskTier:
        if combined >= self.critical_score or anomaly >= self.critical_anomaly:
            return RiskTier.CRITICAL
        if combined >= self.high_score or (anomaly >= self.high_anomaly and pattern >= self.high_pattern):
            return RiskTier.HIGH
        if combined >= self.medium_score or anomaly >= self.medium_anomaly:
            return RiskTier.MEDIUM
        return RiskTier.LOW

    def combine(self, anomaly: float, pattern: float, confidence: float) -> Tuple[float, RiskTier]:
        combined = self.combined_score(anomaly, pattern, confidence)
        tier = self.classify(combined, anomaly, pattern)
        return combined, tier

def classify_risk_tier(anomaly: float, pattern: float, confidence: float) -> Tuple[float, RiskTier]:
    return ScoreCombiner().combine(anomaly, pattern, confidence)
