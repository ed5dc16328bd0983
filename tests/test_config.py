"""Smoke tests for configuration in adventurer_nft/config.py and ContractConfig."""

import pytest
from pydantic import ValidationError

from adventurer_nft.api.contract_config import ContractConfig, ContractConfigManager
from adventurer_nft.config import (
    DEFAULT_BASE_URI,
    DEFAULT_CLASS_CHANGE_LEVEL,
    DEFAULT_EXP_PER_BLOCK,
    DEFAULT_INITIAL_STAT_CAP,
    DEFAULT_LEVEL_EXP_BASE,
    DEFAULT_MINT_PRICE_ETHER,
    DEFAULT_STATUS_POINTS_PER_LEVEL,
)
from adventurer_nft.models.rules import ProgressionRules


class TestConfigSmoke:
    """Smoke tests to validate configuration is valid and can be used."""

    def test_config_imports_successfully(self):
        """Test that all config constants can be imported without errors."""
        assert DEFAULT_BASE_URI is not None
        assert DEFAULT_MINT_PRICE_ETHER is not None
        assert DEFAULT_INITIAL_STAT_CAP >= 0
        assert DEFAULT_EXP_PER_BLOCK >= 1
        assert DEFAULT_LEVEL_EXP_BASE >= 1
        assert DEFAULT_STATUS_POINTS_PER_LEVEL >= 0
        assert DEFAULT_CLASS_CHANGE_LEVEL >= 1

    def test_rules_defaults_come_from_config(self):
        rules = ProgressionRules()
        assert rules.initial_stat_cap == DEFAULT_INITIAL_STAT_CAP
        assert rules.exp_per_block == DEFAULT_EXP_PER_BLOCK
        assert rules.class_change_level == DEFAULT_CLASS_CHANGE_LEVEL

    def test_rules_reject_zero_rate(self):
        with pytest.raises(ValidationError):
            ProgressionRules(exp_per_block=0)


class TestContractConfig:
    """Test suite for ContractConfig."""

    def test_contract_config_defaults(self):
        config = ContractConfig()
        assert config.base_uri == DEFAULT_BASE_URI
        assert config.mint_price_ether == DEFAULT_MINT_PRICE_ETHER

    def test_mint_price_wei(self):
        config = ContractConfig(mint_price_ether="0.05")
        assert config.mint_price_wei == 5 * 10**16

    def test_invalid_price(self):
        with pytest.raises(ValidationError):
            ContractConfig(mint_price_ether="a lot")

    def test_contract_config_manager_update(self):
        """Test updating ContractConfigManager."""
        manager = ContractConfigManager()
        assert isinstance(manager.config, ContractConfig)
        manager.update_config(ContractConfig(base_uri="ipfs://x/"))
        assert manager.config.base_uri == "ipfs://x/"
