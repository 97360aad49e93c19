"""
Pattern Classification Model
Simulated random-forest style ensemble with median aggregation
"""

import logging
import numpy as np
from typing import Dict, Optional

from riskengine.ml.base_model import BaseScoringModel, ModelState, ModelType
from riskengine.ml.feature_engineer import FEATURE_NAMES
from riskengine.ml.history import DEFAULT_CAPACITY
from riskengine.ml.jitter import RandomJitter

logger = logging.getLogger(__name__)

MIN_PATTERN_SCORE = 5.0
MAX_PATTERN_SCORE = 50.0
MIN_CONFIDENCE = 0.7

DEFAULT_FEATURE_IMPORTANCE: Dict[str, float] = {
    "login_attempts": 0.05,
    "failed_attempts": 0.15,
    "data_access_count": 0.08,
    "privileged_operations": 0.05,
    "after_hours_access": 0.10,
    "suspicious_ips": 0.12,
    "data_download_size": 0.08,
    "data_upload_size": 0.04,
    "session_duration": 0.03,
    "concurrent_sessions": 0.03,
    "geographic_anomalies": 0.10,
    "time_anomalies": 0.07,
    "privilege_escalation_attempts": 0.07,
    "data_access_velocity": 0.03,
}

def create_pattern_state(history_capacity: int = DEFAULT_CAPACITY) -> ModelState:
    return ModelState(
        ModelType.PATTERN_CLASSIFIER,
        FEATURE_NAMES,
        DEFAULT_FEATURE_IMPORTANCE,
        history_capacity=history_capacity
    )

class PatternClassifier(BaseScoringModel):
    def __init__(
        self,
        state: Optional[ModelState] = None,
        jitter=None,
        num_trees: int = 150,
        max_depth: int = 12,
        importance_jitter: float = 0.1
    ):
        super().__init__(
            ModelType.PATTERN_CLASSIFIER,
            state if state is not None else create_pattern_state(),
            jitter if jitter is not None else RandomJitter()
        )
        if num_trees <= 0:
            raise ValueError("num_trees must be positive")
        self.num_trees = num_trees
        self.max_depth = max_depth
        self.importance_jitter = importance_jitter
        self.update_metadata({"num_trees": num_trees, "max_depth": max_depth})
        logger.info(f"Pattern classifier initialized with {num_trees} trees")

    def score(self, features: np.ndarray, entity_id: Optional[str] = None) -> float:
        importance = self.state.weights_vector()
        factors = self.jitter.uniform(
            1.0 - self.importance_jitter,
            1.0 + self.importance_jitter,
            (self.num_trees, importance.shape[0])
        )
        tree_scores = np.sort(self._tree_scores(features, importance * factors))

        # upper median for an even tree count
        median_prediction = float(tree_scores[len(tree_scores) // 2])
        risk_score = min(MAX_PATTERN_SCORE, max(MIN_PATTERN_SCORE, median_prediction * 50))

        self.state.record(risk_score)
        logger.debug(f"Pattern score for {entity_id}: {risk_score:.2f}")
        return risk_score

    def confidence(self) -> float:
        """
        Stability of recent predictions: ``max(0.7, 1 - variance / 100)``.

        Returns 0.0 before the first prediction; callers treat that as a model
        that has not warmed up yet.
        """
        history = self.state.history.snapshot()
        if history.size == 0:
            return 0.0
        variance = float(history.var())
        return max(MIN_CONFIDENCE, 1.0 - variance / 100.0)

    def update_feature_importance(self, feature_name: str, value: float):
        self.state.set_weight(feature_name, value)
        self.update_metadata({"last_weight_update": feature_name})
