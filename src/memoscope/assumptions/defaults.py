"""Static per-stage default values for the primary metric.

Used as the last fallback tier when neither extraction nor estimation
produced a value. Later stages without their own row reuse the SERIES_A
row; an unknown stage uses SEED.
"""

from __future__ import annotations

from memoscope.assumptions.models import Stage
from memoscope.financial.models import BusinessModelType

DEFAULT_STAGE = Stage.SEED

STAGE_ROW_ALIASES: dict[Stage, Stage] = {
    Stage.SERIES_B: Stage.SERIES_A,
    Stage.GROWTH: Stage.SERIES_A,
}

STAGE_DEFAULTS: dict[BusinessModelType, dict[Stage, float]] = {
    BusinessModelType.SAAS: {Stage.PRE_SEED: 250, Stage.SEED: 667, Stage.SERIES_A: 833},
    BusinessModelType.B2C: {Stage.PRE_SEED: 8, Stage.SEED: 12, Stage.SERIES_A: 15},
    BusinessModelType.ENTERPRISE: {
        Stage.PRE_SEED: 100_000,
        Stage.SEED: 200_000,
        Stage.SERIES_A: 300_000,
    },
    BusinessModelType.MARKETPLACE: {Stage.PRE_SEED: 15, Stage.SEED: 18, Stage.SERIES_A: 20},
    BusinessModelType.AUM: {
        Stage.PRE_SEED: 25_000,
        Stage.SEED: 50_000,
        Stage.SERIES_A: 100_000,
    },
    BusinessModelType.PROJECT: {
        Stage.PRE_SEED: 30_000,
        Stage.SEED: 75_000,
        Stage.SERIES_A: 100_000,
    },
}


def _validate() -> None:
    required = {Stage.PRE_SEED, Stage.SEED, Stage.SERIES_A}
    for model_type in BusinessModelType:
        row = STAGE_DEFAULTS.get(model_type)
        if row is None:
            raise ValueError(f"STAGE_DEFAULTS missing business model: {model_type.value}")
        missing = sorted(s.value for s in required - row.keys())
        if missing:
            raise ValueError(f"STAGE_DEFAULTS[{model_type.value}] missing stages: {missing}")


_validate()


def get_default_value(model_type: BusinessModelType | str, stage: object) -> float:
    """Static default for a business model at a stage.

    Args:
        model_type: Business model label.
        stage: Free-form stage; unknown or missing stages use SEED.

    Returns:
        The default primary metric value. Always positive.
    """
    parsed = Stage.parse(stage) or DEFAULT_STAGE
    row_stage = STAGE_ROW_ALIASES.get(parsed, parsed)
    return float(STAGE_DEFAULTS[BusinessModelType(model_type)][row_stage])
