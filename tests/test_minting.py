"""Tests for minting and the ownership surface of AdventurerNFT."""

import pytest

from adventurer_nft.config import ZERO_ADDRESS
from adventurer_nft.engine.errors import (
    InsufficientFunds,
    InvalidArgument,
    StatCapExceeded,
    TokenNotFound,
    Unauthorized,
)
from adventurer_nft.helpers.units import parse_ether
from adventurer_nft.models.adventurer import AdventurerClass
from adventurer_nft.models.events import EventType


class TestMinting:
    """Test suite for mint."""

    def test_sets_the_right_owner(self, contract, owner):
        """Test that the deployer owns the contract."""
        assert contract.owner == owner

    def test_mint_new_token(self, contract, owner):
        """Test that the minter holds the first token."""
        token_id = contract.mint(owner, "Hero", [1, 2, 3, 4, 5, 5], value=parse_ether("1"))
        assert token_id == 1
        assert contract.owner_of(1) == owner
        assert contract.balance_of(owner) == 1

    def test_ids_are_sequential(self, contract, owner, addr1):
        """Test that identifiers are assigned from 1 upwards."""
        first = contract.mint(owner, "Hero", [1, 2, 3, 4, 5, 5], value=parse_ether("1"))
        second = contract.mint(addr1, "Rogue", [0, 5, 0, 5, 0, 5], value=parse_ether("1"))
        assert (first, second) == (1, 2)
        assert contract.total_supply() == 2

    def test_initial_record(self, contract, hero):
        """Test the record a fresh mint starts with."""
        adventurer = contract.get_adventurer_info(hero)
        assert adventurer.name == "Hero"
        assert adventurer.stats.as_list() == [20, 0, 0, 0, 0, 0]
        assert adventurer.current_class == AdventurerClass.ADVENTURER
        assert adventurer.level == 1
        assert adventurer.accrued_exp == 0
        assert adventurer.status_points == 0
        assert adventurer.on_adventure is False
        assert adventurer.adventure_start_block is None

    def test_insufficient_funds(self, contract, owner):
        """Test that a payment below the price reverts and mints nothing."""
        with pytest.raises(InsufficientFunds, match="Insufficient funds"):
            contract.mint(owner, "Hero", [1, 2, 3, 4, 5, 5], value=parse_ether("0.5"))
        assert contract.total_supply() == 0
        assert contract.block_number == 0
        with pytest.raises(TokenNotFound):
            contract.owner_of(1)

    def test_stat_cap_exceeded(self, contract, owner):
        """Test that stats summing above the cap revert."""
        with pytest.raises(StatCapExceeded, match="Total status points exceed the limit"):
            contract.mint(owner, "Hero", [10, 10, 10, 10, 10, 10], value=parse_ether("1"))
        assert contract.total_supply() == 0
        assert contract.treasury_balance == 0

    def test_stat_cap_is_inclusive(self, contract, owner):
        """Test that stats summing exactly to the cap are accepted."""
        cap = contract.rules.initial_stat_cap
        token_id = contract.mint(owner, "Hero", [cap, 0, 0, 0, 0, 0], value=parse_ether("1"))
        assert contract.get_adventurer_info(token_id).stats.total() == cap

    @pytest.mark.parametrize("stats", [[1, 2, 3], [1, 2, 3, 4, 5, 5, 0], [-1, 2, 3, 4, 5, 5]])
    def test_malformed_stats(self, contract, owner, stats):
        """Test that wrong-length or negative stats are rejected."""
        with pytest.raises(InvalidArgument):
            contract.mint(owner, "Hero", stats, value=parse_ether("1"))
        assert contract.total_supply() == 0

    def test_payment_goes_to_treasury(self, contract, owner):
        """Test that overpayment is kept in full."""
        contract.mint(owner, "Hero", [1, 2, 3, 4, 5, 5], value=parse_ether("1.5"))
        assert contract.treasury_balance == parse_ether("1.5")

    def test_token_uri(self, contract, hero):
        """Test that the token URI is the base URI followed by the id."""
        assert contract.token_uri(hero) == "baseURI/1"

    def test_token_uri_unknown_token(self, contract):
        """Test that unminted ids have no URI."""
        with pytest.raises(TokenNotFound):
            contract.token_uri(7)

    def test_mint_events(self, contract, owner, hero):
        """Test that mint emits Transfer from the zero address and AdventurerMinted."""
        transfers = contract.query_events(EventType.TRANSFER, token_id=hero)
        assert len(transfers) == 1
        assert transfers[0].args == {"from": ZERO_ADDRESS, "to": owner, "tokenId": hero}
        minted = contract.query_events(EventType.ADVENTURER_MINTED)
        assert minted[0].args["name"] == "Hero"
        assert minted[0].block_number == 1


class TestTransfers:
    """Test suite for transfers and approvals."""

    def test_transfer_ownership(self, contract, owner, addr1, hero):
        """Test that transfer_from moves the token."""
        contract.transfer_from(owner, owner, addr1, hero)
        assert contract.owner_of(hero) == addr1
        assert contract.balance_of(owner) == 0
        assert contract.balance_of(addr1) == 1

    def test_transfer_by_stranger_reverts(self, contract, owner, addr1, hero):
        """Test that a non-holder cannot transfer."""
        with pytest.raises(Unauthorized):
            contract.transfer_from(addr1, owner, addr1, hero)
        assert contract.owner_of(hero) == owner

    def test_transfer_keeps_game_state(self, contract, owner, addr1, hero):
        """Test that progression travels with the token."""
        contract.adventure(owner, hero)
        contract.transfer_from(owner, owner, addr1, hero)
        assert contract.get_adventurer_info(hero).on_adventure is True
        contract.mine(5)
        assert contract.claim_exp(addr1, hero) > 0
        with pytest.raises(Unauthorized):
            contract.adventure(owner, hero)

    def test_approved_address_may_play(self, contract, owner, addr1, hero):
        """Test that an approved address can act on the token."""
        contract.approve(owner, addr1, hero)
        assert contract.get_approved(hero) == addr1
        contract.adventure(addr1, hero)
        assert contract.get_adventurer_info(hero).on_adventure is True

    def test_transfer_clears_approval(self, contract, owner, addr1, addr2, hero):
        """Test that a transfer drops the single-token approval."""
        contract.approve(owner, addr1, hero)
        contract.transfer_from(addr1, owner, addr2, hero)
        assert contract.owner_of(hero) == addr2
        assert contract.get_approved(hero) == ZERO_ADDRESS

    def test_operator_may_play(self, contract, owner, addr1, hero):
        """Test that an operator approved for all can act, until revoked."""
        contract.set_approval_for_all(owner, addr1, True)
        assert contract.is_approved_for_all(owner, addr1) is True
        contract.adventure(addr1, hero)
        contract.set_approval_for_all(owner, addr1, False)
        with pytest.raises(Unauthorized):
            contract.claim_exp(addr1, hero)


class TestTreasury:
    """Test suite for contract administration."""

    def test_withdraw(self, contract, owner, hero):
        """Test that the owner withdraws the whole treasury."""
        assert contract.withdraw(owner) == parse_ether("1")
        assert contract.treasury_balance == 0

    def test_withdraw_only_owner(self, contract, addr1, hero):
        """Test that others cannot withdraw."""
        with pytest.raises(Unauthorized):
            contract.withdraw(addr1)
        assert contract.treasury_balance == parse_ether("1")

    def test_set_base_uri(self, contract, owner, addr1, hero):
        """Test that the owner can change the base URI."""
        with pytest.raises(Unauthorized):
            contract.set_base_uri(addr1, "ipfs://other/")
        contract.set_base_uri(owner, "ipfs://new/")
        assert contract.token_uri(hero) == "ipfs://new/1"
