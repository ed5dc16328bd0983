"""Contract event models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, Enum):
    """Events emitted by committed transactions."""

    TRANSFER = "Transfer"
    APPROVAL = "Approval"
    APPROVAL_FOR_ALL = "ApprovalForAll"
    ADVENTURER_MINTED = "AdventurerMinted"
    ADVENTURE_STARTED = "AdventureStarted"
    EXP_CLAIMED = "ExpClaimed"
    LEVEL_UP = "LevelUp"
    STATUSES_UPGRADED = "StatusesUpgraded"
    CLASS_MULTIPLIER_SET = "ClassMultiplierSet"
    CLASS_CHANGED = "ClassChanged"
    WITHDRAWAL = "Withdrawal"


class Event(BaseModel):
    """A single emitted event."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    event_type: EventType = Field(description="Event name")
    block_number: int = Field(ge=0, description="Block the emitting transaction was mined in")
    args: dict[str, Any] = Field(default_factory=dict, description="Event arguments by name")
