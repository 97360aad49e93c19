"""
Pytest fixtures for risk engine tests. Models run with deterministic jitter
and small ensembles unless a test asks otherwise.
"""

import pytest

from riskengine.ml.anomaly_scorer import AnomalyScorer, create_anomaly_state
from riskengine.ml.feature_engineer import FeatureVectorBuilder
from riskengine.ml.jitter import NoJitter
from riskengine.ml.pattern_classifier import PatternClassifier, create_pattern_state
from riskengine.services.activity_store import InMemoryActivityStore
from riskengine.services.risk_assessor import RiskAssessor

QUIET_RECORD = {
    "loginAttempts": 0,
    "failedAttempts": 0,
    "dataAccessCount": 0,
    "privilegedOperations": 0,
    "afterHoursAccess": 0,
    "suspiciousIPs": 0,
    "dataDownloadSize": 0,
    "dataUploadSize": 0,
    "sessionDuration": 0,
    "concurrentSessions": 0,
    "geographicAnomalies": 0,
    "timeAnomalies": 0,
    "privilegeEscalationAttempts": 0,
    "dataAccessVelocity": 0.0,
}

SATURATED_RECORD = {
    "loginAttempts": 500,
    "failedAttempts": 50,
    "dataAccessCount": 2500,
    "privilegedOperations": 125,
    "afterHoursAccess": 75,
    "suspiciousIPs": 25,
    "dataDownloadSize": 5000000,
    "dataUploadSize": 2500000,
    "sessionDuration": 2400,
    "concurrentSessions": 25,
    "geographicAnomalies": 15,
    "timeAnomalies": 50,
    "privilegeEscalationAttempts": 15,
    "dataAccessVelocity": 500.0,
}

@pytest.fixture
def no_jitter():
    return NoJitter()

@pytest.fixture
def builder():
    return FeatureVectorBuilder()

@pytest.fixture
def anomaly_scorer(no_jitter):
    return AnomalyScorer(state=create_anomaly_state(), jitter=no_jitter, num_trees=10)

@pytest.fixture
def pattern_classifier(no_jitter):
    return PatternClassifier(state=create_pattern_state(), jitter=no_jitter, num_trees=11)

@pytest.fixture
def activity_store():
    return InMemoryActivityStore({
        "USER001": QUIET_RECORD,
        "USER002": SATURATED_RECORD,
        "USER003": {"failedAttempts": 4, "afterHoursAccess": 6, "suspiciousIPs": 1},
    })

@pytest.fixture
def assessor(activity_store, anomaly_scorer, pattern_classifier, no_jitter):
    return RiskAssessor(
        activity_store,
        anomaly_scorer=anomaly_scorer,
        pattern_classifier=pattern_classifier,
        jitter=no_jitter
    )
