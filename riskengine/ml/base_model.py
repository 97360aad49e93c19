"""
Base Scoring Model and Shared Model State
"""

import logging
import math
import threading
import numpy as np
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional, Sequence
from enum import Enum
from datetime import datetime

from riskengine.core.exceptions import InvalidWeightUpdate
from riskengine.ml.history import RingBuffer, DEFAULT_CAPACITY

logger = logging.getLogger(__name__)

MIN_WEIGHT = 0.0
MAX_WEIGHT = 1.0

class ModelType(Enum):
    ANOMALY_SCORER = "anomaly_scorer"
    PATTERN_CLASSIFIER = "pattern_classifier"

class ModelState:
    """
    Adaptive state of one ensemble, shared by every entity and every caller.

    Holds a weight per feature (guarded by a lock, read as a whole-vector
    snapshot) and a bounded history of past outputs.
    """

    def __init__(
        self,
        model_type: ModelType,
        feature_names: Sequence[str],
        weights: Dict[str, float],
        history_capacity: int = DEFAULT_CAPACITY
    ):
        missing = [name for name in feature_names if name not in weights]
        if missing:
            raise ValueError(f"No weight defined for features: {missing}")

        self.model_type = model_type
        self.feature_names = tuple(feature_names)
        self._weights = {name: float(weights[name]) for name in self.feature_names}
        self._lock = threading.Lock()
        self.history = RingBuffer(history_capacity)

    def weights_vector(self) -> np.ndarray:
        with self._lock:
            return np.array([self._weights[name] for name in self.feature_names], dtype=np.float64)

    def get_weights(self) -> Dict[str, float]:
        with self._lock:
            return dict(self._weights)

    def set_weight(self, feature_name: str, value: float):
        if feature_name not in self._weights:
            raise InvalidWeightUpdate(self.model_type.value, feature_name, value, "unknown feature")
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidWeightUpdate(self.model_type.value, feature_name, value, "value must be a finite number")
        if not MIN_WEIGHT <= value <= MAX_WEIGHT:
            raise InvalidWeightUpdate(
                self.model_type.value,
                feature_name,
                value,
                f"value must be within [{MIN_WEIGHT}, {MAX_WEIGHT}]"
            )

        with self._lock:
            self._weights[feature_name] = float(value)

    def record(self, value: float):
        self.history.append(value)

class BaseScoringModel(ABC):
    def __init__(self, model_type: ModelType, state: ModelState, jitter, version: str = "2.1"):
        if state.model_type is not model_type:
            raise ValueError(f"{model_type.value} cannot use state built for {state.model_type.value}")

        self.model_type = model_type
        self.version = version
        self.state = state
        self.jitter = jitter
        self.metadata = {
            "model_type": model_type.value,
            "version": version,
            "created_at": datetime.utcnow().isoformat(),
            "feature_count": len(state.feature_names),
            "last_updated": None
        }

    @property
    def feature_names(self) -> List[str]:
        return list(self.state.feature_names)

    @abstractmethod
    def score(self, features: np.ndarray, entity_id: Optional[str] = None) -> float:
        pass

    def _tree_scores(self, features: np.ndarray, tree_weights: np.ndarray) -> np.ndarray:
        """Per-tree weighted sums; ``tree_weights`` has one row of feature weights per tree."""
        vector = np.asarray(features, dtype=np.float64)
        if vector.ndim != 1 or vector.shape[0] != tree_weights.shape[1]:
            raise ValueError(
                f"{self.model_type.value} expects {tree_weights.shape[1]} features, got {vector.shape}"
            )
        return tree_weights @ vector

    def get_feature_importance(self) -> Dict[str, float]:
        weights = self.state.get_weights()
        return {k: v for k, v in sorted(weights.items(), key=lambda x: x[1], reverse=True)}

    def history_size(self) -> int:
        return len(self.state.history)

    def get_model_info(self) -> Dict[str, Any]:
        return {
            'model_type': self.model_type.value,
            'version': self.version,
            'feature_count': len(self.state.feature_names),
            'history_size': self.history_size(),
            'history_capacity': self.state.history.capacity,
            'metadata': dict(self.metadata)
        }

    def update_metadata(self, updates: Dict[str, Any]):
        self.metadata.update(updates)
        self.metadata['last_updated'] = datetime.utcnow().isoformat()
