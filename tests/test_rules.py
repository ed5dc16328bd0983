"""Tests for ProgressionCalculator, BlockClock and OwnershipLedger."""

import pytest

from adventurer_nft.engine.block_clock import BlockClock
from adventurer_nft.engine.errors import (
    ClassRequirementNotMet,
    InvalidArgument,
    TokenNotFound,
    Unauthorized,
)
from adventurer_nft.engine.ownership import OwnershipLedger
from adventurer_nft.engine.progression import CLASS_BASELINES, ProgressionCalculator
from adventurer_nft.models.adventurer import AdventurerClass
from adventurer_nft.models.ownership import TokenOwnership
from adventurer_nft.models.rules import ProgressionRules


@pytest.fixture
def rules():
    return ProgressionRules(
        initial_stat_cap=20,
        exp_per_block=10,
        level_exp_base=100,
        status_points_per_level=3,
        class_change_level=10,
    )


class TestProgressionCalculator:
    """Test suite for the pure progression rules."""

    def test_experience_at(self, rules):
        """Test accrual per elapsed block."""
        assert ProgressionCalculator.experience_at(5, 5, rules) == 0
        assert ProgressionCalculator.experience_at(5, 6, rules) == 10
        assert ProgressionCalculator.experience_at(2, 103, rules) == 1010

    def test_experience_at_rejects_past_blocks(self, rules):
        """Test that a block before the start is an error."""
        with pytest.raises(InvalidArgument):
            ProgressionCalculator.experience_at(10, 9, rules)

    def test_level_costs_increase(self, rules):
        """Test that the cost curve is strictly increasing."""
        costs = [ProgressionCalculator.exp_to_next_level(level, rules) for level in range(1, 10)]
        assert costs[0] == 100
        assert all(a < b for a, b in zip(costs, costs[1:]))

    def test_status_points_to_level_ten(self, rules):
        """Test that levels 2 through 10 grant 162 points in total."""
        assert ProgressionCalculator.status_points_for_level(2, rules) == 6
        assert sum(ProgressionCalculator.status_points_for_level(level, rules) for level in range(2, 11)) == 162

    def test_class_requirement(self, rules):
        """Test the class gate table."""
        assert ProgressionCalculator.class_requirement(AdventurerClass.ADVENTURER, rules) is None
        for adventurer_class in (
            AdventurerClass.SQUIRE,
            AdventurerClass.MAGICIAN,
            AdventurerClass.THIEF,
            AdventurerClass.CLERIC,
        ):
            assert ProgressionCalculator.class_requirement(adventurer_class, rules) == 10

    def test_resolve_class_change(self, rules):
        """Test the transition function at and below the threshold."""
        adopted = ProgressionCalculator.resolve_class_change(
            10, AdventurerClass.ADVENTURER, AdventurerClass.THIEF, rules
        )
        assert adopted == AdventurerClass.THIEF
        with pytest.raises(ClassRequirementNotMet, match="Level 10 required"):
            ProgressionCalculator.resolve_class_change(9, AdventurerClass.ADVENTURER, AdventurerClass.THIEF, rules)

    def test_resolve_class_change_rejects_base_and_same_class(self, rules):
        """Test that the base class and the current class cannot be requested."""
        with pytest.raises(ClassRequirementNotMet):
            ProgressionCalculator.resolve_class_change(
                12, AdventurerClass.SQUIRE, AdventurerClass.ADVENTURER, rules
            )
        with pytest.raises(ClassRequirementNotMet):
            ProgressionCalculator.resolve_class_change(12, AdventurerClass.SQUIRE, AdventurerClass.SQUIRE, rules)

    def test_every_class_has_a_baseline(self):
        """Test the baseline multiplier table."""
        assert set(CLASS_BASELINES) == set(AdventurerClass)
        assert ProgressionCalculator.baseline_multipliers(AdventurerClass.SQUIRE).as_aliased_dict() == {
            "str": 15,
            "agi": 12,
            "vit": 12,
            "dex": 11,
            "intel": 10,
            "luk": 10,
        }


class TestBlockClock:
    """Test suite for BlockClock."""

    def test_advance(self):
        assert BlockClock.advance(10) == 11
        assert BlockClock.advance(10, 100) == 110

    def test_advance_requires_blocks(self):
        with pytest.raises(InvalidArgument):
            BlockClock.advance(10, -1)

    def test_pending_block(self):
        assert BlockClock.pending_block(0) == 1


class TestOwnershipLedger:
    """Test suite for OwnershipLedger."""

    def test_create_assigns_sequential_ids(self):
        """Test that ids start at 1 and balances follow."""
        ledger, first = OwnershipLedger.create(TokenOwnership(), "0xA")
        ledger, second = OwnershipLedger.create(ledger, "0xA")
        assert (first, second) == (1, 2)
        assert OwnershipLedger.balance_of(ledger, "0xA") == 2

    def test_create_does_not_mutate_input(self):
        """Test that the input ledger is left untouched."""
        original = TokenOwnership()
        OwnershipLedger.create(original, "0xA")
        assert original.owners == {}
        assert original.next_token_id == 1

    def test_owner_of_unknown(self):
        with pytest.raises(TokenNotFound):
            OwnershipLedger.owner_of(TokenOwnership(), 1)

    def test_is_authorized(self):
        """Test holder, approved and operator authorization."""
        ledger, token_id = OwnershipLedger.create(TokenOwnership(), "0xA")
        assert OwnershipLedger.is_authorized(ledger, "0xA", token_id)
        assert not OwnershipLedger.is_authorized(ledger, "0xB", token_id)

        approved = OwnershipLedger.approve(ledger, "0xA", "0xB", token_id)
        assert OwnershipLedger.is_authorized(approved, "0xB", token_id)

        operated = OwnershipLedger.set_approval_for_all(ledger, "0xA", "0xC", True)
        assert OwnershipLedger.is_authorized(operated, "0xC", token_id)

    def test_approve_requires_holder(self):
        ledger, token_id = OwnershipLedger.create(TokenOwnership(), "0xA")
        with pytest.raises(Unauthorized):
            OwnershipLedger.approve(ledger, "0xB", "0xC", token_id)

    def test_transfer_from_wrong_holder(self):
        """Test that the from address must be the holder."""
        ledger, token_id = OwnershipLedger.create(TokenOwnership(), "0xA")
        with pytest.raises(InvalidArgument):
            OwnershipLedger.transfer(ledger, "0xA", "0xB", "0xC", token_id)

    def test_resolve_uri(self):
        ledger, token_id = OwnershipLedger.create(TokenOwnership(), "0xA")
        assert OwnershipLedger.resolve_uri(ledger, "baseURI/", token_id) == "baseURI/1"
