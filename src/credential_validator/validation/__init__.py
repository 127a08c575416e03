"""
Multi-stage validation pipeline.

- pipeline.py: Orchestrator running stages in order (gating stop, error reports)
- stages.py: StageSpec / StageConfig and the ordered StageRegistry
- stage_runner.py: Detector fan-out, timeouts and the quorum rule
- scoring.py: Weighted score over executed stages
- recommendations.py: Per-stage remediation messages
"""

from .pipeline import ValidationContext, ValidationPipeline, build_validation_pipeline
from .recommendations import ALL_CHECKS_PASSED, synthesize_recommendations
from .scoring import aggregate_score, stage_score_pct
from .stage_runner import StageRunner, quorum_reached
from .stages import (
    DEFAULT_STAGE_CONFIGS,
    StageConfig,
    StageRegistry,
    StageSpec,
    build_stage_registry,
    load_stage_configs,
)

__all__ = [
    # Main pipeline
    "ValidationPipeline",
    "ValidationContext",
    "build_validation_pipeline",
    # Stage configuration
    "StageSpec",
    "StageConfig",
    "StageRegistry",
    "DEFAULT_STAGE_CONFIGS",
    "build_stage_registry",
    "load_stage_configs",
    # Building blocks
    "StageRunner",
    "quorum_reached",
    "aggregate_score",
    "stage_score_pct",
    "synthesize_recommendations",
    "ALL_CHECKS_PASSED",
]
