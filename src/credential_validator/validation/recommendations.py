"""
Recommendation Synthesizer: stage failures -> ordered remediation messages.

One message per failing stage (not per failing check), in pipeline order,
without duplicates. A failed gating stage yields only its own message, and a
run where every executed stage passed yields a single affirmative message.
"""

from typing import Mapping

from credential_validator.models.results import StageResult
from credential_validator.validation.stages import StageSpec

ALL_CHECKS_PASSED = "The credential passed all primary validation checks"
RESUBMIT_DOCUMENT = "Validation could not be completed; submit the document again"


def synthesize_recommendations(
    stage_results: Mapping[str, StageResult],
    specs: Mapping[str, StageSpec],
) -> list[str]:
    """
    Build the recommendation list for executed stages.

    Args:
        stage_results: Executed stages keyed by stage id
        specs: Stage specs keyed by stage id, in pipeline order

    Returns:
        Deterministic, deduplicated list of messages
    """
    recommendations: list[str] = []

    for stage_id, spec in specs.items():
        result = stage_results.get(stage_id)
        if result is None or result.passed:
            continue

        message = spec.failure_message
        if spec.is_gating:
            return [message]
        if message not in recommendations:
            recommendations.append(message)

    if not recommendations:
        return [ALL_CHECKS_PASSED]

    return recommendations
