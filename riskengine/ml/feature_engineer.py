"""
Feature Engineering for Risk Models
Maps raw activity signals to a fixed-length normalized feature vector
"""

import logging
import numpy as np
from typing import Dict, Any, List, NamedTuple
from collections.abc import Mapping

from riskengine.utils.helpers import to_float

logger = logging.getLogger(__name__)

FEATURE_SET_VERSION = "v2"

class FeatureSpec(NamedTuple):
    name: str
    signal: str
    minimum: float
    divisor: float

FEATURE_SPECS: List[FeatureSpec] = [
    FeatureSpec("login_attempts", "loginAttempts", 0.0, 100.0),
    FeatureSpec("failed_attempts", "failedAttempts", 0.0, 10.0),
    FeatureSpec("data_access_count", "dataAccessCount", 0.0, 500.0),
    FeatureSpec("privileged_operations", "privilegedOperations", 0.0, 25.0),
    FeatureSpec("after_hours_access", "afterHoursAccess", 0.0, 15.0),
    FeatureSpec("suspicious_ips", "suspiciousIPs", 0.0, 5.0),
    FeatureSpec("data_download_size", "dataDownloadSize", 0.0, 1000000.0),
    FeatureSpec("data_upload_size", "dataUploadSize", 0.0, 500000.0),
    FeatureSpec("session_duration", "sessionDuration", 0.0, 480.0),
    FeatureSpec("concurrent_sessions", "concurrentSessions", 0.0, 5.0),
    FeatureSpec("geographic_anomalies", "geographicAnomalies", 0.0, 3.0),
    FeatureSpec("time_anomalies", "timeAnomalies", 0.0, 10.0),
    FeatureSpec("privilege_escalation_attempts", "privilegeEscalationAttempts", 0.0, 3.0),
    FeatureSpec("data_access_velocity", "dataAccessVelocity", 0.0, 100.0),
]

FEATURE_NAMES = tuple(spec.name for spec in FEATURE_SPECS)

class FeatureVectorBuilder:
    """
    Stateless builder: one feature per declared spec, ``(raw - minimum) / divisor``.

    Missing, boolean, non-numeric or non-finite signals read as 0. Values are
    not clamped; the models bound their own outputs.
    """

    def __init__(self, specs: List[FeatureSpec] = None):
        self.specs = list(specs) if specs is not None else list(FEATURE_SPECS)
        self.version = FEATURE_SET_VERSION

    @property
    def feature_names(self) -> List[str]:
        return [spec.name for spec in self.specs]

    def __len__(self) -> int:
        return len(self.specs)

    def build(self, record: Any) -> np.ndarray:
        if not isinstance(record, Mapping):
            logger.debug(f"Activity record is not a mapping ({type(record).__name__}), using default features")
            return self.default_vector()

        vector = np.empty(len(self.specs), dtype=np.float64)
        for index, spec in enumerate(self.specs):
            raw = to_float(record.get(spec.signal), 0.0)
            vector[index] = (raw - spec.minimum) / spec.divisor

        return vector

    def default_vector(self) -> np.ndarray:
        return np.zeros(len(self.specs), dtype=np.float64)

    def describe(self, vector: np.ndarray) -> Dict[str, float]:
        return {name: float(value) for name, value in zip(self.feature_names, vector)}

def extract_features(record: Dict[str, Any]) -> Dict[str, float]:
    builder = FeatureVectorBuilder()
    return builder.describe(builder.build(record))
