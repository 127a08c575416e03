"""
Score Aggregator: executed StageResults -> one 0-100 integer score.

Each executed stage contributes the share of its checks that passed, weighted
by the stage weight. The weights are re-normalized over the stages that
actually executed, so stages skipped by a gating stop never dilute the score.
"""

import math
from typing import Mapping

from credential_validator.models.results import StageResult
from credential_validator.validation.stages import StageSpec


def stage_score_pct(result: StageResult) -> float:
    """
    Percentage of passed checks in a stage.

    A stage with no outcomes scores 0: "no checks run" never counts as passing.
    """
    if result.total_count == 0:
        return 0.0
    return result.passed_count / result.total_count * 100


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def aggregate_score(
    stage_results: Mapping[str, StageResult],
    specs: Mapping[str, StageSpec],
) -> int:
    """
    Weighted score over executed stages.

    Args:
        stage_results: Executed stages keyed by stage id
        specs: Stage specs keyed by stage id (may include stages that did not run)

    Returns:
        Integer score in [0, 100]; 0 when no stage executed

    Raises:
        ValueError: If a result has no matching spec
    """
    weighted_sum = 0.0
    executed_weight = 0

    for stage_id, result in stage_results.items():
        spec = specs.get(stage_id)
        if spec is None:
            raise ValueError(f"No stage spec for executed stage '{stage_id}'")
        weighted_sum += stage_score_pct(result) * spec.weight
        executed_weight += spec.weight

    if executed_weight <= 0:
        return 0

    return max(0, min(100, round_half_up(weighted_sum / executed_weight)))
