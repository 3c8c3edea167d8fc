"""Tests for the TOPSIS scoring engine.

The two-candidate scenario below is the sample data shipped in the
candidate template (John Doe / Jane Smith) scored with the default
weights; the expected coefficients are locked in as a regression fixture.
"""

import logging
import math

import numpy as np
import pytest

from hr_ranker.scoring import (
    DEFAULT_WEIGHTS,
    CandidateRecord,
    DegenerateColumnError,
    DegenerateDistanceError,
    InvalidWeightError,
    WeightVector,
    score,
)
from hr_ranker.scoring.closeness import closeness_coefficients, rank_results
from hr_ranker.scoring.criteria import CRITERIA, CRITERION_KEYS
from hr_ranker.scoring.ideal import distances, ideal_profiles
from hr_ranker.scoring.normalize import build_decision_matrix, normalize_matrix
from hr_ranker.scoring.weighting import apply_weights


def _candidate(name, experience, education, interview, age, candidate_id=None):
    return CandidateRecord(
        candidate_id=candidate_id,
        name=name,
        experience=experience,
        education=education,
        interview=interview,
        age=age,
    )


@pytest.fixture()
def default_weights() -> WeightVector:
    return WeightVector.from_mapping(DEFAULT_WEIGHTS)


@pytest.fixture()
def pair() -> list[CandidateRecord]:
    return [
        _candidate("A", 5, 4, 85, 30, candidate_id=1),
        _candidate("B", 3, 5, 92, 28, candidate_id=2),
    ]


# ---------------------------------------------------------------------------
# Criterion model
# ---------------------------------------------------------------------------

class TestCriteria:

    def test_fixed_order(self):
        assert CRITERION_KEYS == ("experience", "education", "interview", "age")

    def test_age_is_the_only_cost_criterion(self):
        kinds = {c.key: c.kind for c in CRITERIA}
        assert kinds == {
            "experience": "benefit",
            "education": "benefit",
            "interview": "benefit",
            "age": "cost",
        }

    def test_default_weights(self):
        assert DEFAULT_WEIGHTS == {
            "experience": 25, "education": 20, "interview": 40, "age": 15,
        }


# ---------------------------------------------------------------------------
# Weight vector
# ---------------------------------------------------------------------------

class TestWeightVector:

    def test_from_mapping_keeps_criterion_order(self):
        weights = WeightVector.from_mapping(
            {"age": 4, "interview": 3, "education": 2, "experience": 1}
        )
        assert weights.as_tuple() == (1.0, 2.0, 3.0, 4.0)

    def test_negative_weight_rejected(self):
        with pytest.raises(InvalidWeightError, match="age"):
            WeightVector(25, 20, 40, -15)

    @pytest.mark.parametrize("bad", [math.nan, math.inf])
    def test_non_finite_weight_rejected(self, bad):
        with pytest.raises(InvalidWeightError):
            WeightVector(bad, 20, 40, 15)

    def test_missing_key_rejected(self):
        with pytest.raises(InvalidWeightError, match="age"):
            WeightVector.from_mapping({"experience": 1, "education": 1, "interview": 1})

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidWeightError):
            WeightVector.from_mapping(
                {"experience": "lots", "education": 1, "interview": 1, "age": 1}
            )

    def test_engine_does_not_require_sum_of_100(self, pair):
        results = score(pair, {"experience": 1, "education": 1, "interview": 1, "age": 1})
        assert len(results) == 2

    def test_total_and_scaled(self, default_weights):
        assert default_weights.total == 100
        assert default_weights.scaled(0.01).total == pytest.approx(1.0)


# ---------------------------------------------------------------------------
# Individual stages
# ---------------------------------------------------------------------------

class TestNormalization:

    def test_columns_have_unit_norm(self, sample_candidates):
        normalized = normalize_matrix(build_decision_matrix(sample_candidates))
        norms = np.sqrt((normalized ** 2).sum(axis=0))
        assert norms == pytest.approx(np.ones(4))

    def test_formula(self, pair):
        normalized = normalize_matrix(build_decision_matrix(pair))
        assert normalized[0, 0] == pytest.approx(5 / math.sqrt(34))
        assert normalized[1, 3] == pytest.approx(28 / math.sqrt(30 ** 2 + 28 ** 2))

    def test_returns_new_array(self, pair):
        matrix = build_decision_matrix(pair)
        original = matrix.copy()
        normalized = normalize_matrix(matrix)
        assert normalized is not matrix
        assert np.array_equal(matrix, original)

    def test_all_zero_column_raises(self):
        candidates = [
            _candidate("Fresh 1", 0, 3, 70, 22),
            _candidate("Fresh 2", 0, 4, 80, 24),
        ]
        with pytest.raises(DegenerateColumnError) as excinfo:
            normalize_matrix(build_decision_matrix(candidates))
        assert excinfo.value.criteria == ["experience"]

    def test_identical_candidates_raise(self):
        twins = [_candidate("Twin 1", 4, 3, 80, 30), _candidate("Twin 2", 4, 3, 80, 30)]
        with pytest.raises(DegenerateColumnError) as excinfo:
            normalize_matrix(build_decision_matrix(twins))
        assert excinfo.value.criteria == list(CRITERION_KEYS)

    def test_single_constant_column_is_allowed(self):
        candidates = [
            _candidate("P", 2, 4, 70, 30),
            _candidate("Q", 6, 4, 90, 26),
        ]
        normalized = normalize_matrix(build_decision_matrix(candidates))
        assert not np.isnan(normalized).any()

    def test_constant_column_is_logged(self, caplog):
        candidates = [
            _candidate("P", 2, 4, 70, 30),
            _candidate("Q", 6, 4, 90, 26),
        ]
        with caplog.at_level(logging.DEBUG, logger="hr_ranker.scoring.normalize"):
            normalize_matrix(build_decision_matrix(candidates))
        messages = [r.getMessage() for r in caplog.records]
        assert any("no ranking signal: education" in m for m in messages)

    def test_varying_columns_log_nothing_constant(self, pair, caplog):
        with caplog.at_level(logging.DEBUG, logger="hr_ranker.scoring.normalize"):
            normalize_matrix(build_decision_matrix(pair))
        assert not any("no ranking signal" in r.getMessage() for r in caplog.records)

    def test_negative_values_are_propagated(self):
        candidates = [_candidate("Neg", -2, 3, 70, 30), _candidate("Pos", 2, 4, 80, 25)]
        normalized = normalize_matrix(build_decision_matrix(candidates))
        assert normalized[0, 0] < 0


class TestWeighting:

    def test_columns_scaled_by_weight(self):
        normalized = np.array([[0.6, 0.8, 1.0, 0.5], [0.8, 0.6, 0.0, 0.5]])
        weighted = apply_weights(normalized, WeightVector(10, 20, 30, 40))
        expected = np.array([[6.0, 16.0, 30.0, 20.0], [8.0, 12.0, 0.0, 20.0]])
        assert weighted == pytest.approx(expected)


class TestIdealPoint:

    def test_benefit_and_cost_profiles(self):
        weighted = np.array([
            [1.0, 2.0, 3.0, 4.0],
            [2.0, 1.0, 5.0, 3.0],
        ])
        positive, negative = ideal_profiles(weighted)
        # age (last column) is a cost criterion: the minimum is ideal.
        assert positive.tolist() == [2.0, 2.0, 5.0, 3.0]
        assert negative.tolist() == [1.0, 1.0, 3.0, 4.0]

    def test_distances(self):
        weighted = np.array([[0.0, 0.0, 0.0, 0.0], [3.0, 4.0, 0.0, 0.0]])
        positive = np.array([3.0, 4.0, 0.0, 0.0])
        negative = np.zeros(4)
        d_pos, d_neg = distances(weighted, positive, negative)
        assert d_pos.tolist() == pytest.approx([5.0, 0.0])
        assert d_neg.tolist() == pytest.approx([0.0, 5.0])


class TestCloseness:

    def test_coefficient_rounded_to_three_decimals(self, pair):
        scores = closeness_coefficients(
            np.array([1.0, 2.0]), np.array([2.0, 1.0]), pair
        )
        assert scores == [0.667, 0.333]

    def test_zero_total_distance_falls_back(self, pair):
        scores = closeness_coefficients(np.zeros(2), np.zeros(2), pair)
        assert scores == [0.5, 0.5]

    def test_zero_total_distance_strict_raises(self, pair):
        with pytest.raises(DegenerateDistanceError, match="A"):
            closeness_coefficients(np.zeros(2), np.zeros(2), pair, strict=True)

    def test_rank_results_is_stable_for_ties(self):
        candidates = [_candidate(n, 1, 1, 1, 20) for n in ("first", "second", "third")]
        results = rank_results(candidates, [0.4, 0.9, 0.4], [0, 0, 0], [0, 0, 0])
        assert [r.name for r in results] == ["second", "first", "third"]
        assert [r.rank for r in results] == [1, 2, 3]


# ---------------------------------------------------------------------------
# End-to-end engine
# ---------------------------------------------------------------------------

class TestScoreRegression:

    def test_template_pair_with_default_weights(self, pair, default_weights):
        results = score(pair, default_weights)

        assert [(r.name, r.score, r.rank) for r in results] == [
            ("A", 0.687, 1),
            ("B", 0.313, 2),
        ]
        assert results[0].candidate_id == 1
        assert results[0].distance_positive == pytest.approx(3.9098, abs=1e-3)
        assert results[0].distance_negative == pytest.approx(8.5749, abs=1e-3)

    def test_accepts_plain_mapping(self, pair):
        assert score(pair, DEFAULT_WEIGHTS) == score(
            pair, WeightVector.from_mapping(DEFAULT_WEIGHTS)
        )


class TestScoreProperties:

    def test_scores_within_unit_interval(self, sample_candidates, default_weights):
        for result in score(sample_candidates, default_weights):
            assert 0.0 <= result.score <= 1.0

    def test_output_is_sorted_descending(self, sample_candidates, default_weights):
        results = score(sample_candidates, default_weights)
        resorted = sorted(results, key=lambda r: r.score, reverse=True)
        assert [r.name for r in resorted] == [r.name for r in results]
        assert [r.rank for r in results] == list(range(1, len(results) + 1))

    @pytest.mark.parametrize("factor", [0.01, 0.5, 3, 1000])
    def test_weight_scale_invariance(self, sample_candidates, default_weights, factor):
        base = score(sample_candidates, default_weights)
        scaled = score(sample_candidates, default_weights.scaled(factor))
        assert [r.name for r in scaled] == [r.name for r in base]
        assert [r.score for r in scaled] == pytest.approx([r.score for r in base], abs=1e-3)

    def test_input_permutation_invariance(self, sample_candidates, default_weights):
        base = score(sample_candidates, default_weights)
        shuffled = score(list(reversed(sample_candidates)), default_weights)
        assert {(r.name, r.score) for r in shuffled} == {(r.name, r.score) for r in base}

    def test_dominant_candidate_scores_one(self, sample_candidates, default_weights):
        star = _candidate("Star", 12, 5, 99, 20)
        results = score(sample_candidates + [star], default_weights)
        assert results[0].name == "Star"
        assert results[0].score == pytest.approx(1.0)

    def test_dominated_candidate_scores_zero(self, sample_candidates, default_weights):
        weakest = _candidate("Weakest", 0, 1, 10, 60)
        results = score(sample_candidates + [weakest], default_weights)
        assert results[-1].name == "Weakest"
        assert results[-1].score == pytest.approx(0.0)

    def test_recompute_reflects_population(self, pair, default_weights):
        before = {r.name: r.score for r in score(pair, default_weights)}
        after = {
            r.name: r.score
            for r in score(pair + [_candidate("C", 9, 5, 99, 22)], default_weights)
        }
        assert before["A"] != after["A"]

    def test_ties_keep_input_order(self, default_weights):
        twins = [
            _candidate("Twin 1", 4, 3, 80, 30),
            _candidate("Other", 6, 4, 70, 40),
            _candidate("Twin 2", 4, 3, 80, 30),
        ]
        results = score(twins, default_weights)
        names = [r.name for r in results]
        assert names.index("Twin 1") < names.index("Twin 2")

    def test_zero_weights_fall_back_to_midpoint(self, sample_candidates):
        results = score(sample_candidates, WeightVector(0, 0, 0, 0))
        assert {r.score for r in results} == {0.5}
        assert [r.name for r in results] == [c.name for c in sample_candidates]


class TestScoreEdgeCases:

    def test_empty_input_gives_empty_ranking(self, default_weights):
        assert score([], default_weights) == []

    def test_single_candidate_uses_fallback(self, default_weights):
        results = score([_candidate("Solo", 0, 3, 80, 25)], default_weights)
        assert len(results) == 1
        assert results[0].score == 0.5
        assert results[0].rank == 1

    def test_single_candidate_strict_raises(self, default_weights):
        with pytest.raises(DegenerateDistanceError):
            score([_candidate("Solo", 2, 3, 80, 25)], default_weights, strict=True)

    def test_identical_candidates_raise(self, default_weights):
        twins = [_candidate("Twin 1", 4, 3, 80, 30), _candidate("Twin 2", 4, 3, 80, 30)]
        with pytest.raises(DegenerateColumnError):
            score(twins, default_weights)

    def test_negative_weight_raises_before_scoring(self, pair):
        with pytest.raises(InvalidWeightError):
            score(pair, {"experience": -1, "education": 20, "interview": 40, "age": 15})
