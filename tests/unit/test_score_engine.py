"""Tests for the final score calculation (``domain/scoring.py``).

Covers:
- Reference values: single score, all-max, spread scores.
- Half-up rounding at the averaging step and after weighting.
- Two-input weighting and the single-input fallback.
- Input validation and the out-of-bounds guard.
- Determinism.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from hr_performance.core.config import ScoringConfig
from hr_performance.core.errors import ConfigError, InvalidAssessmentError
from hr_performance.domain.scores import AssessmentScore, FinalScore
from hr_performance.domain.scoring import ScoreEngine


def _scores(*ratings) -> list[AssessmentScore]:
    return [AssessmentScore.of(r) for r in ratings]


class TestReferenceValues:
    def test_single_score(self, engine: ScoreEngine):
        result = engine.calculate_final_score(_scores("3.0"))
        assert result.value == Decimal("3.00")
        assert str(result) == "3.00"

    def test_all_max(self, engine: ScoreEngine):
        result = engine.calculate_final_score(_scores(5.0, 5.0, 5.0))
        assert result.value == Decimal("5.00")

    def test_min_and_max_average_to_three(self, engine: ScoreEngine):
        result = engine.calculate_final_score(_scores(1.0, 5.0))
        assert result.kpi_average == Decimal("3.00")
        assert result.value == Decimal("3.00")

    def test_all_min(self, engine: ScoreEngine):
        result = engine.calculate_final_score(_scores(1, 1, 1, 1))
        assert result.value == Decimal("1.00")

    def test_result_has_two_places(self, engine: ScoreEngine):
        result = engine.calculate_final_score(_scores(4))
        assert result.value.as_tuple().exponent == -2


class TestRounding:
    def test_average_rounds_down_below_half(self, engine: ScoreEngine):
        # 4 / 3 = 1.333...
        result = engine.calculate_final_score(_scores(1.0, 1.0, 2.0))
        assert result.kpi_average == Decimal("1.33")
        assert result.value == Decimal("1.33")

    def test_average_rounds_half_up(self, engine: ScoreEngine):
        # 5 / 3 = 1.666... -> 1.67
        result = engine.calculate_final_score(_scores(1.0, 2.0, 2.0))
        assert result.kpi_average == Decimal("1.67")

    def test_exact_half_rounds_up(self, engine: ScoreEngine):
        # (1.01 + 1.00) / 2 = 1.005 -> 1.01 under half-up
        result = engine.calculate_final_score(_scores("1.01", "1.00"))
        assert result.kpi_average == Decimal("1.01")

    def test_weighted_sum_rounded_half_up(self, engine: ScoreEngine):
        # kpi 4.25 * 0.7 + competency 3.00 * 0.3 = 2.975 + 0.9 = 3.875 -> 3.88
        result = engine.calculate_final_score(
            _scores("4.5", "4.0"), _scores("3.0"),
        )
        assert result.kpi_average == Decimal("4.25")
        assert result.value == Decimal("3.88")

    def test_no_binary_float_artifacts(self, engine: ScoreEngine):
        result = engine.calculate_final_score(_scores(0.1 + 3.2))
        assert result.value == Decimal("3.30")


class TestCompetencyWeighting:
    def test_fallback_uses_kpi_average(self, engine: ScoreEngine):
        result = engine.calculate_final_score(_scores(4.0, 3.0))
        assert result.competency_fallback is True
        assert result.competency_average == result.kpi_average

    def test_empty_competency_scores_fall_back(self, engine: ScoreEngine):
        result = engine.calculate_final_score(_scores(4.0), [])
        assert result.competency_fallback is True
        assert result.value == Decimal("4.00")

    def test_two_inputs_weighted(self, engine: ScoreEngine):
        # 4.0 * 0.7 + 2.0 * 0.3 = 3.4
        result = engine.calculate_final_score(_scores(4.0), _scores(2.0))
        assert result.competency_fallback is False
        assert result.competency_average == Decimal("2.00")
        assert result.value == Decimal("3.40")

    def test_custom_weights(self):
        engine = ScoreEngine(
            ScoringConfig(kpi_weight=Decimal("0.5"), competency_weight=Decimal("0.5"))
        )
        result = engine.calculate_final_score(_scores(5.0), _scores(1.0))
        assert result.value == Decimal("3.00")
        assert engine.weights == (Decimal("0.5"), Decimal("0.5"))

    def test_default_weights(self, engine: ScoreEngine):
        assert engine.weights == (Decimal("0.7"), Decimal("0.3"))


class TestValidation:
    def test_empty_scores_rejected(self, engine: ScoreEngine):
        with pytest.raises(InvalidAssessmentError, match="scores required"):
            engine.calculate_final_score([])

    def test_none_scores_rejected(self, engine: ScoreEngine):
        with pytest.raises(InvalidAssessmentError, match="scores required"):
            engine.calculate_final_score(None)

    def test_non_score_element_rejected(self, engine: ScoreEngine):
        with pytest.raises(InvalidAssessmentError, match="AssessmentScore"):
            engine.calculate_final_score([AssessmentScore.of(3), 4.0])

    def test_out_of_bounds_result_rejected(self):
        # Narrowed bounds make a valid 5.0 rating produce an out-of-range score.
        engine = ScoreEngine(ScoringConfig(max_score=Decimal("4.0")))
        with pytest.raises(InvalidAssessmentError, match="final score out of bounds"):
            engine.calculate_final_score(_scores(5.0))

    def test_incoherent_weights_rejected(self):
        with pytest.raises(ConfigError, match="sum to 1"):
            ScoreEngine(ScoringConfig(kpi_weight=Decimal("0.8")))


class TestDeterminism:
    def test_same_input_same_output(self, engine: ScoreEngine):
        inputs = _scores("3.7", "4.2", "2.9", "5.0")
        first = engine.calculate_final_score(inputs)
        second = engine.calculate_final_score(inputs)
        assert first == second
        assert isinstance(first, FinalScore)

    def test_order_does_not_change_result(self, engine: ScoreEngine):
        a = engine.calculate_final_score(_scores("3.7", "4.2", "2.9"))
        b = engine.calculate_final_score(_scores("2.9", "3.7", "4.2"))
        assert a.value == b.value

    def test_separate_engines_agree(self):
        inputs = _scores("1.5", "2.5", "4.5")
        assert (
            ScoreEngine().calculate_final_score(inputs)
            == ScoreEngine().calculate_final_score(inputs)
        )
