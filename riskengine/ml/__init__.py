"""
Risk Engine - Machine Learning Module
Feature extraction and the simulated scoring ensemble
"""

from riskengine.ml.base_model import BaseScoringModel, ModelState, ModelType
from riskengine.ml.history import RingBuffer
from riskengine.ml.jitter import RandomJitter, NoJitter
from riskengine.ml.feature_engineer import FeatureVectorBuilder, FeatureSpec, FEATURE_SPECS, FEATURE_NAMES
from riskengine.ml.anomaly_scorer import AnomalyScorer, create_anomaly_state
from riskengine.ml.pattern_classifier import PatternClassifier, create_pattern_state
from riskengine.ml.score_combiner import ScoreCombiner

from riskengine.ml.feature_engineer import extract_features
from riskengine.ml.score_combiner import classify_risk_tier

__all__ = [
    "BaseScoringModel",
    "ModelState",
    "ModelType",
    "RingBuffer",
    "RandomJitter",
    "NoJitter",
    "FeatureVectorBuilder",
    "FeatureSpec",
    "FEATURE_SPECS",
    "FEATURE_NAMES",
    "AnomalyScorer",
    "create_anomaly_state",
    "PatternClassifier",
    "create_pattern_state",
    "ScoreCombiner",
    "extract_features",
    "classify_risk_tier"
]
