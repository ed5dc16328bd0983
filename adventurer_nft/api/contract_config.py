"""Contract deployment configuration."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from adventurer_nft.config import (
    DEFAULT_BASE_URI,
    DEFAULT_CONTRACT_ID,
    DEFAULT_DEPLOYER_ADDRESS,
    DEFAULT_DUMP_DIR,
    DEFAULT_DUMP_ENABLED,
    DEFAULT_MINT_PRICE_ETHER,
)
from adventurer_nft.helpers.units import parse_ether
from adventurer_nft.models.rules import ProgressionRules


class ContractConfig(BaseModel):
    """Parameters a contract is deployed with."""

    contract_id: str = Field(default=DEFAULT_CONTRACT_ID, min_length=1, description="Contract identifier")
    base_uri: str = Field(default=DEFAULT_BASE_URI, description="Prefix of every token URI")
    mint_price_ether: str = Field(default=DEFAULT_MINT_PRICE_ETHER, description="Mint price in ether")
    deployer: str = Field(default=DEFAULT_DEPLOYER_ADDRESS, min_length=1, description="Contract owner address")
    rules: ProgressionRules = Field(default_factory=ProgressionRules, description="Progression constants")
    dump_enabled: bool = Field(default=DEFAULT_DUMP_ENABLED, description="Whether to dump state after each transaction")
    dump_directory: str = Field(default=DEFAULT_DUMP_DIR, description="Where state dumps are written")

    @field_validator("mint_price_ether")
    @classmethod
    def _check_price(cls, value: str) -> str:
        parse_ether(value)
        return value

    @property
    def mint_price_wei(self) -> int:
        return parse_ether(self.mint_price_ether)


class ContractConfigManager:
    """Manages contract configuration."""

    def __init__(self, initial_config: Optional[ContractConfig] = None) -> None:
        """Initialize with optional config."""
        self._config = initial_config or ContractConfig()

    @property
    def config(self) -> ContractConfig:
        """Get current config."""
        return self._config

    def update_config(self, new_config: ContractConfig) -> None:
        """Update configuration."""
        self._config = new_config
