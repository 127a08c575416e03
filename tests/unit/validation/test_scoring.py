"""
Unit tests for score aggregation.
"""

import pytest

from credential_validator.models.results import CheckOutcome, StageResult
from credential_validator.validation.scoring import aggregate_score, round_half_up, stage_score_pct
from credential_validator.validation.stages import StageSpec


def _result(stage_id: str, *verdicts: bool, passed: bool | None = None) -> StageResult:
    outcomes = tuple(
        CheckOutcome(name=f"{stage_id}_{i}", passed=v) for i, v in enumerate(verdicts)
    )
    return StageResult(
        stage_id=stage_id,
        passed=all(verdicts) if passed is None else passed,
        outcomes=outcomes,
    )


def _specs(**weights: int) -> dict[str, StageSpec]:
    return {
        stage_id: StageSpec(id=stage_id, weight=weight, min_passing_checks=0)
        for stage_id, weight in weights.items()
    }


WEIGHT_SETS = [
    {"format": 20, "structure": 25, "design": 20, "security": 25, "validity": 10},
    {"only": 100},
    {"only": 1},
    {"a": 1, "b": 99},
    {"a": 3, "b": 7, "c": 11},
    {"a": 20, "b": 25, "c": 55},
    {"a": 33, "b": 33, "c": 33, "d": 1},
]


class TestStageScorePct:
    def test_share_of_passed_checks(self):
        assert stage_score_pct(_result("s", True, False, False)) == pytest.approx(100 / 3)

    def test_no_outcomes_scores_zero(self):
        assert stage_score_pct(StageResult(stage_id="s", passed=True)) == 0.0


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected",
        [(82.5, 83), (83.33, 83), (49.5, 50), (0.49, 0), (99.999, 100)],
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestAggregateScore:
    """Test weighted, re-normalized score."""

    @pytest.mark.parametrize("weights", WEIGHT_SETS)
    def test_all_pass_is_100(self, weights):
        specs = _specs(**weights)
        results = {sid: _result(sid, True, True) for sid in specs}

        assert aggregate_score(results, specs) == 100

    @pytest.mark.parametrize("weights", WEIGHT_SETS)
    def test_all_fail_is_0(self, weights):
        specs = _specs(**weights)
        results = {sid: _result(sid, False, False) for sid in specs}

        assert aggregate_score(results, specs) == 0

    def test_five_stage_scenario(self):
        specs = _specs(format=20, structure=25, design=20, security=25, validity=10)
        results = {
            "format": _result("format", True, True, True),
            "structure": _result("structure", True, False, False),
            "design": _result("design", True, True),
            "security": _result("security", True, True),
            "validity": _result("validity", True, True, True),
        }

        # (20 + 25/3 + 20 + 25 + 10) = 83.33
        assert aggregate_score(results, specs) == 83

    def test_renormalized_over_executed_stages(self):
        specs = _specs(a=20, b=80)
        results = {"a": _result("a", True, False)}

        # Only stage a executed: its 50% is the whole score
        assert aggregate_score(results, specs) == 50

    def test_zero_outcome_stage_counts_as_zero(self):
        specs = _specs(a=50, b=50)
        results = {
            "a": _result("a", True),
            "b": StageResult(stage_id="b", passed=True),
        }

        assert aggregate_score(results, specs) == 50

    def test_nothing_executed_is_0(self):
        assert aggregate_score({}, _specs(a=10)) == 0

    def test_unknown_stage_raises(self):
        with pytest.raises(ValueError, match="ghost"):
            aggregate_score({"ghost": _result("ghost", True)}, _specs(a=10))

    def test_score_within_bounds(self):
        specs = _specs(a=1, b=99)
        results = {"a": _result("a", True), "b": _result("b", True, True, False)}

        score = aggregate_score(results, specs)

        assert 0 <= score <= 100
        assert score == 67
