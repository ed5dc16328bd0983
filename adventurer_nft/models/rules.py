"""Progression rule parameters."""

from pydantic import BaseModel, ConfigDict, Field

from adventurer_nft.config import (
    DEFAULT_CLASS_CHANGE_LEVEL,
    DEFAULT_EXP_PER_BLOCK,
    DEFAULT_INITIAL_STAT_CAP,
    DEFAULT_LEVEL_EXP_BASE,
    DEFAULT_STATUS_POINTS_PER_LEVEL,
)


class ProgressionRules(BaseModel):
    """Tunable constants of the progression engine."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    initial_stat_cap: int = Field(
        default=DEFAULT_INITIAL_STAT_CAP, ge=0, description="Maximum sum of stats at mint"
    )
    exp_per_block: int = Field(
        default=DEFAULT_EXP_PER_BLOCK, ge=1, description="Experience accrued per elapsed block"
    )
    level_exp_base: int = Field(
        default=DEFAULT_LEVEL_EXP_BASE, ge=1, description="Next level costs level * level_exp_base"
    )
    status_points_per_level: int = Field(
        default=DEFAULT_STATUS_POINTS_PER_LEVEL,
        ge=0,
        description="Reaching level N grants N * status_points_per_level",
    )
    class_change_level: int = Field(
        default=DEFAULT_CLASS_CHANGE_LEVEL, ge=1, description="Level unlocking tier-one classes"
    )
