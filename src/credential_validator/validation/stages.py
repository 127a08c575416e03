"""
Stage definitions and the ordered stage registry.

Stage sets are configuration data: a JSON array of StageConfig records (or the
built-in DEFAULT_STAGE_CONFIGS) is validated and resolved against a
DetectorRegistry once at startup. The resulting StageRegistry is read-only and
shared by every validation run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from credential_validator.config import Settings
from credential_validator.detectors.base import BaseDetector
from credential_validator.detectors.registry import DetectorRegistry
from credential_validator.exceptions import ConfigurationFault

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StageSpec:
    """
    One validation stage, resolved and ready to run.

    Attributes:
        id: Stage identifier (key in ValidationReport.stages)
        weight: Relative weight in the score (> 0)
        min_passing_checks: Quorum, the stage passes iff at least this many
            detectors pass
        is_gating: A failure stops the pipeline
        detectors: Detectors in configured order
        name: Display name
        description: What the stage checks
        recommendation: Remediation message used when the stage fails
        timeout_seconds: Per-detector timeout override (None = global default)
    """

    id: str
    weight: int
    min_passing_checks: int
    is_gating: bool = False
    detectors: tuple[BaseDetector, ...] = ()
    name: str = ""
    description: str = ""
    recommendation: str = ""
    timeout_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate structural invariants."""
        if not self.id:
            raise ConfigurationFault("Stage id must not be empty", field="id")

        if self.weight <= 0:
            raise ConfigurationFault(
                f"Stage weight must be > 0, got {self.weight}",
                stage_id=self.id,
                field="weight",
            )

        if self.min_passing_checks < 0:
            raise ConfigurationFault(
                f"min_passing_checks must be >= 0, got {self.min_passing_checks}",
                stage_id=self.id,
                field="min_passing_checks",
            )

        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ConfigurationFault(
                f"timeout_seconds must be > 0, got {self.timeout_seconds}",
                stage_id=self.id,
                field="timeout_seconds",
            )

        object.__setattr__(self, "detectors", tuple(self.detectors))

    @property
    def detector_names(self) -> list[str]:
        return [detector.name for detector in self.detectors]

    @property
    def failure_message(self) -> str:
        return self.recommendation or f"Stage '{self.name or self.id}' did not pass"


class StageConfig(BaseModel):
    """Serialized form of a stage, as found in STAGES_CONFIG_PATH."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    description: str = ""
    weight: int
    min_passing_checks: int
    gating: bool = False
    detectors: list[str] = Field(default_factory=list)
    recommendation: str = ""
    timeout_seconds: Optional[float] = None


DEFAULT_STAGE_CONFIGS: tuple[StageConfig, ...] = (
    StageConfig(
        id="format",
        name="Document format",
        description="Dimensions and image format",
        weight=20,
        min_passing_checks=3,
        gating=True,
        detectors=["aspect_ratio", "minimum_resolution", "image_format"],
        recommendation="The document does not have the format of a valid voter credential",
    ),
    StageConfig(
        id="structure",
        name="Data structure",
        description="CURP and elector key validation",
        weight=25,
        min_passing_checks=2,
        detectors=["curp_format", "elector_key_format", "official_text"],
        recommendation="Verify the data structure (CURP and elector key)",
    ),
    StageConfig(
        id="design",
        name="Official design",
        description="Visual elements of the official credential",
        weight=20,
        min_passing_checks=1,
        detectors=["official_colors", "layout_proportions"],
        recommendation="The design does not match the official credential standards",
    ),
    StageConfig(
        id="security",
        name="Security features",
        description="Print quality and fine security printing",
        weight=25,
        min_passing_checks=1,
        detectors=["print_quality", "fine_detail"],
        recommendation="Characteristic security features of the credential are missing",
    ),
    StageConfig(
        id="validity",
        name="Validity",
        description="Expiry and validity period of the credential",
        weight=10,
        min_passing_checks=2,
        detectors=["not_expired", "validity_period", "card_model"],
        recommendation="Verify that the credential is still valid",
    ),
)


class StageRegistry:
    """
    Ordered, validated, read-only collection of StageSpecs.

    Invariants (checked on construction, ConfigurationFault otherwise):
    - at least one stage
    - unique stage ids
    - min_passing_checks <= number of detectors
    - no detector repeated within a stage
    """

    def __init__(self, specs: Iterable[StageSpec]):
        self._specs: tuple[StageSpec, ...] = tuple(specs)
        self._validate()
        self._by_id = {spec.id: spec for spec in self._specs}

    def _validate(self) -> None:
        if not self._specs:
            raise ConfigurationFault("Stage registry must contain at least one stage")

        seen: set[str] = set()
        for spec in self._specs:
            if spec.id in seen:
                raise ConfigurationFault(
                    f"Duplicate stage id '{spec.id}'", stage_id=spec.id, field="id"
                )
            seen.add(spec.id)

            if spec.min_passing_checks > len(spec.detectors):
                raise ConfigurationFault(
                    f"min_passing_checks ({spec.min_passing_checks}) exceeds detector "
                    f"count ({len(spec.detectors)}); stage could never pass",
                    stage_id=spec.id,
                    field="min_passing_checks",
                )

            names = spec.detector_names
            duplicates = sorted({name for name in names if names.count(name) > 1})
            if duplicates:
                raise ConfigurationFault(
                    f"Detector(s) {duplicates} repeated within stage",
                    stage_id=spec.id,
                    field="detectors",
                )

    @property
    def specs(self) -> tuple[StageSpec, ...]:
        return self._specs

    @property
    def total_weight(self) -> int:
        return sum(spec.weight for spec in self._specs)

    def get(self, stage_id: str) -> Optional[StageSpec]:
        return self._by_id.get(stage_id)

    def as_mapping(self) -> dict[str, StageSpec]:
        return dict(self._by_id)

    def __iter__(self) -> Iterator[StageSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    @classmethod
    def from_configs(
        cls,
        configs: Iterable[StageConfig],
        detectors: DetectorRegistry,
    ) -> "StageRegistry":
        """
        Resolve stage configurations against a detector registry.

        Raises:
            ConfigurationFault: On any malformed stage or unknown detector
        """
        specs = []
        for config in configs:
            try:
                resolved = tuple(detectors.resolve(name) for name in config.detectors)
            except ConfigurationFault as e:
                raise ConfigurationFault(e.message, stage_id=config.id, field="detectors") from e

            specs.append(
                StageSpec(
                    id=config.id,
                    weight=config.weight,
                    min_passing_checks=config.min_passing_checks,
                    is_gating=config.gating,
                    detectors=resolved,
                    name=config.name,
                    description=config.description,
                    recommendation=config.recommendation,
                    timeout_seconds=config.timeout_seconds,
                )
            )
        return cls(specs)


def load_stage_configs(path: str | Path) -> list[StageConfig]:
    """
    Load a JSON array of stage configurations.

    Raises:
        ConfigurationFault: If the file is missing or does not match StageConfig
    """
    config_path = Path(path)
    try:
        raw = config_path.read_bytes()
    except OSError as e:
        raise ConfigurationFault(f"Cannot read stage configuration {config_path}: {e}") from e

    try:
        return TypeAdapter(list[StageConfig]).validate_json(raw)
    except PydanticValidationError as e:
        error_messages = [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationFault(
            f"Invalid stage configuration {config_path}: {'; '.join(error_messages)}"
        ) from e


def build_stage_registry(settings: Settings, detectors: DetectorRegistry) -> StageRegistry:
    """
    Build the stage registry from STAGES_CONFIG_PATH, or the built-in stages.
    """
    if settings.STAGES_CONFIG_PATH:
        configs = load_stage_configs(settings.STAGES_CONFIG_PATH)
        source = settings.STAGES_CONFIG_PATH
    else:
        configs = list(DEFAULT_STAGE_CONFIGS)
        source = "builtin"

    registry = StageRegistry.from_configs(configs, detectors)

    logger.info(
        "Stage registry built",
        source=source,
        stages=[spec.id for spec in registry],
        gating=[spec.id for spec in registry if spec.is_gating],
        total_weight=registry.total_weight,
    )
    return registry
