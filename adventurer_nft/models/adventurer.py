"""Adventurer record model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from adventurer_nft.models.stats import ClassMultipliers, Stats


class AdventurerClass(int, Enum):
    """Character classes. Values are the on-chain enum ordinals."""

    ADVENTURER = 0
    SQUIRE = 1
    MAGICIAN = 2
    THIEF = 3
    CLERIC = 4


class Adventurer(BaseModel):
    """Complete per-token game state."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    token_id: int = Field(ge=1, description="Token identifier, assigned sequentially from 1")
    name: str = Field(description="Adventurer name, fixed at mint")
    stats: Stats = Field(description="STR, AGI, VIT, DEX, INT, LUK")
    current_class: AdventurerClass = Field(default=AdventurerClass.ADVENTURER, description="Current class")
    level: int = Field(ge=1, default=1, description="Adventurer level")
    accrued_exp: int = Field(ge=0, default=0, description="Banked experience not yet spent on levels")
    status_points: int = Field(ge=0, default=0, description="Unspent status points")

    # Adventure status
    on_adventure: bool = Field(default=False, description="Whether an adventure is in progress")
    adventure_start_block: Optional[int] = Field(
        default=None, ge=0, description="Block the current adventure started in, None while idle"
    )

    class_multipliers: ClassMultipliers = Field(
        default_factory=ClassMultipliers, description="Per-adventurer attribute weights"
    )
