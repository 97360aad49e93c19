import math

import numpy as np
import pytest

from riskengine.core.exceptions import InvalidWeightUpdate
from riskengine.ml.anomaly_scorer import AnomalyScorer, create_anomaly_state, DEFAULT_ANOMALY_WEIGHTS
from riskengine.ml.base_model import ModelState, ModelType
from riskengine.ml.feature_engineer import FEATURE_NAMES
from riskengine.ml.history import RingBuffer
from riskengine.ml.jitter import NoJitter, RandomJitter
from riskengine.ml.pattern_classifier import PatternClassifier, create_pattern_state, DEFAULT_FEATURE_IMPORTANCE

def one_hot(feature_name: str, value: float = 1.0) -> np.ndarray:
    vector = np.zeros(len(FEATURE_NAMES))
    vector[FEATURE_NAMES.index(feature_name)] = value
    return vector

class OutlierTreeJitter:
    """Factor 1.0 everywhere except the first tree, which is blown up 100x."""

    def uniform(self, low, high, size=None):
        if size is None:
            return (low + high) / 2.0
        factors = np.ones(size)
        factors[0, :] = 100.0
        return factors

class TestRingBuffer:
    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            RingBuffer(0)

    def test_keeps_insertion_order_before_wrap(self):
        buffer = RingBuffer(5)
        for value in [1.0, 2.0, 3.0]:
            buffer.append(value)

        assert len(buffer) == 3
        assert buffer.snapshot().tolist() == [1.0, 2.0, 3.0]

    def test_evicts_oldest_after_wrap(self):
        buffer = RingBuffer(3)
        for value in range(7):
            buffer.append(float(value))

        assert len(buffer) == 3
        assert buffer.snapshot().tolist() == [4.0, 5.0, 6.0]

    def test_mean_and_variance(self):
        buffer = RingBuffer(10)
        assert buffer.mean() == 0.0
        assert buffer.variance() == 0.0

        for value in [2.0, 4.0, 6.0]:
            buffer.append(value)

        assert buffer.mean() == pytest.approx(4.0)
        assert buffer.variance() == pytest.approx(8.0 / 3.0)

    def test_clear(self):
        buffer = RingBuffer(3)
        buffer.append(1.0)
        buffer.clear()
        assert len(buffer) == 0
        assert buffer.snapshot().size == 0

class TestJitter:
    def test_no_jitter_returns_range_centre(self):
        jitter = NoJitter()
        assert jitter.uniform(0.9, 1.1) == pytest.approx(1.0)
        assert np.allclose(jitter.uniform(0.8, 1.2, (3, 4)), 1.0)
        assert jitter.uniform(-1.0, 1.0) == 0.0

    def test_random_jitter_stays_in_range(self):
        factors = RandomJitter(seed=7).uniform(0.9, 1.1, (50, 14))
        assert factors.shape == (50, 14)
        assert factors.min() >= 0.9
        assert factors.max() < 1.1

    def test_random_jitter_is_reproducible_with_seed(self):
        first = RandomJitter(seed=42).uniform(0.0, 1.0, 8)
        second = RandomJitter(seed=42).uniform(0.0, 1.0, 8)
        assert np.array_equal(first, second)

class TestModelState:
    def test_requires_weight_for_every_feature(self):
        with pytest.raises(ValueError):
            ModelState(ModelType.ANOMALY_SCORER, FEATURE_NAMES, {"failed_attempts": 0.5})

    def test_weights_vector_follows_feature_order(self):
        state = create_anomaly_state()
        vector = state.weights_vector()
        assert vector.tolist() == [DEFAULT_ANOMALY_WEIGHTS[name] for name in FEATURE_NAMES]

    def test_default_weights_sum_to_one(self):
        assert sum(DEFAULT_ANOMALY_WEIGHTS.values()) == pytest.approx(1.0)
        assert sum(DEFAULT_FEATURE_IMPORTANCE.values()) == pytest.approx(1.0)

    @pytest.mark.parametrize("feature_name,value", [
        ("not_a_feature", 0.5),
        ("failed_attempts", -0.1),
        ("failed_attempts", 1.5),
        ("failed_attempts", math.nan),
        ("failed_attempts", math.inf),
        ("failed_attempts", "0.5"),
    ])
    def test_rejects_invalid_weight(self, feature_name, value):
        state = create_pattern_state()
        with pytest.raises(InvalidWeightUpdate) as exc_info:
            state.set_weight(feature_name, value)

        assert exc_info.value.model_name == "pattern_classifier"
        assert state.get_weights() == DEFAULT_FEATURE_IMPORTANCE

    def test_state_must_match_model_type(self, no_jitter):
        with pytest.raises(ValueError):
            AnomalyScorer(state=create_pattern_state(), jitter=no_jitter)

class TestAnomalyScorer:
    def test_initialization(self, anomaly_scorer):
        assert anomaly_scorer.num_trees == 10
        assert anomaly_scorer.contamination == 0.1
        assert anomaly_scorer.history_size() == 0
        assert anomaly_scorer.historical_average() == 0.0

    def test_zero_vector_scores_zero(self, anomaly_scorer):
        assert anomaly_scorer.score(np.zeros(len(FEATURE_NAMES)), "USER001") == 0.0

    def test_weighted_sum_without_jitter(self, anomaly_scorer):
        score = anomaly_scorer.score(one_hot("failed_attempts"), "USER001")
        assert score == pytest.approx(0.22)

        vector = one_hot("suspicious_ips", 0.5) + one_hot("time_anomalies", 0.4)
        assert anomaly_scorer.score(vector, "USER001") == pytest.approx(0.15 * 0.5 + 0.10 * 0.4)

    def test_deterministic_without_jitter(self, anomaly_scorer):
        vector = np.linspace(0.0, 0.5, len(FEATURE_NAMES))
        assert anomaly_scorer.score(vector, "USER001") == anomaly_scorer.score(vector, "USER001")

    def test_score_clamped_to_one(self, anomaly_scorer):
        assert anomaly_scorer.score(np.full(len(FEATURE_NAMES), 10.0), "USER002") == 1.0

    def test_negative_inputs_never_score_below_zero(self, anomaly_scorer):
        assert anomaly_scorer.score(np.full(len(FEATURE_NAMES), -1.0), "USER002") == 0.0

    def test_bounds_with_random_jitter(self):
        scorer = AnomalyScorer(jitter=RandomJitter(seed=3), num_trees=20)
        rng = np.random.default_rng(11)
        for _ in range(200):
            score = scorer.score(rng.uniform(0.0, 3.0, len(FEATURE_NAMES)), "USER001")
            assert 0.0 <= score <= 1.0

    def test_history_is_bounded(self, anomaly_scorer):
        rng = np.random.default_rng(5)
        for _ in range(1500):
            anomaly_scorer.score(rng.uniform(0.0, 1.0, len(FEATURE_NAMES)), "USER001")

        assert anomaly_scorer.history_size() == 1000

    def test_historical_average_covers_last_thousand_scores(self, anomaly_scorer):
        anomaly_scorer.score(one_hot("failed_attempts"), "USER001")
        for _ in range(1000):
            anomaly_scorer.score(np.zeros(len(FEATURE_NAMES)), "USER001")

        assert anomaly_scorer.historical_average() == 0.0

    def test_weight_update_applies_to_later_calls(self, anomaly_scorer):
        vector = one_hot("failed_attempts")
        before = anomaly_scorer.score(vector, "USER001")

        anomaly_scorer.update_feature_weight("failed_attempts", 0.5)

        assert before == pytest.approx(0.22)
        assert anomaly_scorer.score(vector, "USER001") == pytest.approx(0.5)
        assert anomaly_scorer.metadata["last_weight_update"] == "failed_attempts"

    def test_rejects_wrong_vector_length(self, anomaly_scorer):
        with pytest.raises(ValueError):
            anomaly_scorer.score(np.zeros(3), "USER001")

    def test_model_info(self, anomaly_scorer):
        info = anomaly_scorer.get_model_info()
        assert info["model_type"] == "anomaly_scorer"
        assert info["feature_count"] == len(FEATURE_NAMES)
        assert info["history_capacity"] == 1000

    def test_feature_importance_sorted_descending(self, anomaly_scorer):
        importance = list(anomaly_scorer.get_feature_importance().items())
        assert importance[0] == ("failed_attempts", 0.22)
        assert [v for _, v in importance] == sorted((v for _, v in importance), reverse=True)

class TestPatternClassifier:
    def test_initialization(self, pattern_classifier):
        assert pattern_classifier.num_trees == 11
        assert pattern_classifier.max_depth == 12

    def test_zero_vector_floors_at_five(self, pattern_classifier):
        assert pattern_classifier.score(np.zeros(len(FEATURE_NAMES)), "USER001") == 5.0

    def test_scaled_median_without_jitter(self, pattern_classifier):
        assert pattern_classifier.score(one_hot("failed_attempts"), "USER001") == pytest.approx(7.5)

    def test_saturated_vector_caps_at_fifty(self, pattern_classifier):
        assert pattern_classifier.score(np.full(len(FEATURE_NAMES), 5.0), "USER002") == 50.0

    def test_deterministic_without_jitter(self, pattern_classifier):
        vector = np.linspace(0.0, 1.0, len(FEATURE_NAMES))
        assert pattern_classifier.score(vector, "USER001") == pattern_classifier.score(vector, "USER001")

    def test_median_ignores_outlier_tree(self):
        classifier = PatternClassifier(jitter=OutlierTreeJitter(), num_trees=150)
        assert classifier.score(one_hot("failed_attempts"), "USER001") == pytest.approx(7.5)

    def test_bounds_with_random_jitter(self):
        classifier = PatternClassifier(jitter=RandomJitter(seed=9), num_trees=25)
        rng = np.random.default_rng(13)
        for _ in range(200):
            score = classifier.score(rng.uniform(0.0, 3.0, len(FEATURE_NAMES)), "USER001")
            assert 5.0 <= score <= 50.0

    def test_confidence_before_warm_up(self, pattern_classifier):
        assert pattern_classifier.confidence() == 0.0

    def test_confidence_of_stable_predictions(self, pattern_classifier):
        for _ in range(5):
            pattern_classifier.score(np.zeros(len(FEATURE_NAMES)), "USER001")

        assert pattern_classifier.confidence() == 1.0

    def test_confidence_from_prediction_variance(self, pattern_classifier):
        pattern_classifier.score(np.zeros(len(FEATURE_NAMES)), "USER001")
        pattern_classifier.score(one_hot("failed_attempts"), "USER001")

        # history [5.0, 7.5] has variance 1.5625
        assert pattern_classifier.confidence() == pytest.approx(1.0 - 1.5625 / 100.0)

    def test_confidence_floor(self, pattern_classifier):
        for _ in range(10):
            pattern_classifier.score(np.zeros(len(FEATURE_NAMES)), "USER001")
            pattern_classifier.score(np.full(len(FEATURE_NAMES), 5.0), "USER002")

        assert pattern_classifier.confidence() == 0.7

    def test_history_is_bounded(self, pattern_classifier):
        for _ in range(1001):
            pattern_classifier.score(np.zeros(len(FEATURE_NAMES)), "USER001")

        assert pattern_classifier.history_size() == 1000

    def test_importance_update(self, pattern_classifier):
        pattern_classifier.update_feature_importance("failed_attempts", 0.6)
        assert pattern_classifier.score(one_hot("failed_attempts"), "USER001") == pytest.approx(30.0)
