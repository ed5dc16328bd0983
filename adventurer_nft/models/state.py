"""Contract state and snapshot models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from adventurer_nft.models.adventurer import Adventurer
from adventurer_nft.models.events import Event
from adventurer_nft.models.ownership import TokenOwnership
from adventurer_nft.models.rules import ProgressionRules


class ContractState(BaseModel):
    """Complete contract storage - immutable and self-contained."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    # Contract identification
    contract_id: str = Field(description="Unique contract identifier")
    state_version: int = Field(ge=0, default=0, description="Increments with each committed transaction")
    created_at: datetime = Field(default_factory=datetime.now, description="Deployment timestamp")

    # Deployment configuration
    owner: str = Field(description="Deployer address, allowed to withdraw and reconfigure")
    base_uri: str = Field(description="Prefix of every token URI")
    mint_price: int = Field(ge=0, description="Mint price in wei")
    rules: ProgressionRules = Field(default_factory=ProgressionRules, description="Progression constants")

    # Balances and chain head
    treasury_balance: int = Field(ge=0, default=0, description="Wei collected from mints, not yet withdrawn")
    block_number: int = Field(ge=0, default=0, description="Latest mined block")

    ownership: TokenOwnership = Field(default_factory=TokenOwnership, description="Holder records")
    adventurers: dict[int, Adventurer] = Field(default_factory=dict, description="Game state per token id")

    # Append-only event log
    events: list[Event] = Field(default_factory=list, description="Every event emitted so far")


class StateSnapshot(BaseModel):
    """Historical state snapshot for reversion."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    index: int = Field(ge=0, description="Sequential snapshot number")
    timestamp: datetime = Field(default_factory=datetime.now, description="When snapshot was created")
    state: ContractState = Field(description="Complete, self-contained contract state")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Additional snapshot metadata (reason, block, etc.)"
    )
