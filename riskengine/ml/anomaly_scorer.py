"""
Anomaly Scoring Model
Simulated isolation-forest style ensemble with adaptive feature weights
"""

import logging
import numpy as np
from typing import Dict, Optional

from riskengine.ml.base_model import BaseScoringModel, ModelState, ModelType
from riskengine.ml.feature_engineer import FEATURE_NAMES
from riskengine.ml.history import DEFAULT_CAPACITY
from riskengine.ml.jitter import RandomJitter

logger = logging.getLogger(__name__)

DEFAULT_ANOMALY_WEIGHTS: Dict[str, float] = {
    "login_attempts": 0.03,
    "failed_attempts": 0.22,
    "data_access_count": 0.05,
    "privileged_operations": 0.03,
    "after_hours_access": 0.10,
    "suspicious_ips": 0.15,
    "data_download_size": 0.08,
    "data_upload_size": 0.03,
    "session_duration": 0.02,
    "concurrent_sessions": 0.02,
    "geographic_anomalies": 0.10,
    "time_anomalies": 0.10,
    "privilege_escalation_attempts": 0.05,
    "data_access_velocity": 0.02,
}

def create_anomaly_state(history_capacity: int = DEFAULT_CAPACITY) -> ModelState:
    return ModelState(
        ModelType.ANOMALY_SCORER,
        FEATURE_NAMES,
        DEFAULT_ANOMALY_WEIGHTS,
        history_capacity=history_capacity
    )

class AnomalyScorer(BaseScoringModel):
    def __init__(
        self,
        state: Optional[ModelState] = None,
        jitter=None,
        num_trees: int = 150,
        contamination: float = 0.1,
        weight_jitter: float = 0.1,
        tree_jitter: float = 0.2
    ):
        super().__init__(
            ModelType.ANOMALY_SCORER,
            state if state is not None else create_anomaly_state(),
            jitter if jitter is not None else RandomJitter()
        )
        if num_trees <= 0:
            raise ValueError("num_trees must be positive")
        self.num_trees = num_trees
        self.contamination = contamination
        self.weight_jitter = weight_jitter
        self.tree_jitter = tree_jitter
        self.update_metadata({"num_trees": num_trees, "contamination": contamination})
        logger.info(f"Anomaly scorer initialized with {num_trees} trees")

    def adaptive_weights(self) -> np.ndarray:
        """Base weights scaled by a fresh ±weight_jitter factor per tree and feature; never persisted."""
        base = self.state.weights_vector()
        factors = self.jitter.uniform(
            1.0 - self.weight_jitter,
            1.0 + self.weight_jitter,
            (self.num_trees, base.shape[0])
        )
        return base * factors

    def score(self, features: np.ndarray, entity_id: Optional[str] = None) -> float:
        weights = self.adaptive_weights()
        tree_factors = self.jitter.uniform(
            1.0 - self.tree_jitter,
            1.0 + self.tree_jitter,
            weights.shape
        )
        tree_scores = self._tree_scores(features, weights * tree_factors)

        anomaly_score = float(tree_scores.sum() / self.num_trees)
        anomaly_score = min(1.0, max(0.0, anomaly_score))

        self.state.record(anomaly_score)
        logger.debug(f"Anomaly score for {entity_id}: {anomaly_score:.4f}")
        return anomaly_score

    def update_feature_weight(self, feature_name: str, value: float):
        self.state.set_weight(feature_name, value)
        self.update_metadata({"last_weight_update": feature_name})

    def historical_average(self) -> float:
        return self.state.history.mean()
