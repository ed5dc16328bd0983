"""Progression rules: experience accrual, level costs and class gates."""

from typing import Optional

from adventurer_nft.engine.block_clock import BlockClock
from adventurer_nft.engine.errors import ClassRequirementNotMet
from adventurer_nft.models.adventurer import AdventurerClass
from adventurer_nft.models.rules import ProgressionRules
from adventurer_nft.models.stats import ClassMultipliers

# Baseline attribute weights (STR, AGI, VIT, DEX, INT, LUK) each class starts from
CLASS_BASELINES: dict[AdventurerClass, ClassMultipliers] = {
    AdventurerClass.ADVENTURER: ClassMultipliers.from_list([10, 10, 10, 10, 10, 10]),
    AdventurerClass.SQUIRE: ClassMultipliers.from_list([15, 12, 12, 11, 10, 10]),
    AdventurerClass.MAGICIAN: ClassMultipliers.from_list([10, 10, 11, 12, 15, 12]),
    AdventurerClass.THIEF: ClassMultipliers.from_list([11, 15, 10, 12, 10, 12]),
    AdventurerClass.CLERIC: ClassMultipliers.from_list([10, 10, 14, 10, 14, 12]),
}

TIER_ONE_CLASSES = frozenset(
    {
        AdventurerClass.SQUIRE,
        AdventurerClass.MAGICIAN,
        AdventurerClass.THIEF,
        AdventurerClass.CLERIC,
    }
)


class ProgressionCalculator:
    """Pure functions of the progression engine. No state is held or changed."""

    @staticmethod
    def experience_at(start_block: int, current_block: int, rules: ProgressionRules) -> int:
        """
        Experience accrued by an adventure between two blocks.

        Args:
            start_block: Block the adventure started in
            current_block: Block the experience is evaluated at
            rules: Progression constants

        Returns:
            Experience, non-decreasing in ``current_block``
        """
        return BlockClock.elapsed(start_block, current_block) * rules.exp_per_block

    @staticmethod
    def exp_to_next_level(level: int, rules: ProgressionRules) -> int:
        """Experience a level-up from ``level`` consumes."""
        return level * rules.level_exp_base

    @staticmethod
    def status_points_for_level(new_level: int, rules: ProgressionRules) -> int:
        """Status points granted on reaching ``new_level``."""
        return new_level * rules.status_points_per_level

    @staticmethod
    def class_requirement(adventurer_class: AdventurerClass, rules: ProgressionRules) -> Optional[int]:
        """Level required to change into ``adventurer_class``, None if it cannot be chosen."""
        if adventurer_class in TIER_ONE_CLASSES:
            return rules.class_change_level
        return None

    @staticmethod
    def resolve_class_change(
        level: int,
        current_class: AdventurerClass,
        requested_class: AdventurerClass,
        rules: ProgressionRules,
    ) -> AdventurerClass:
        """
        Check a class change and return the class to adopt.

        Args:
            level: Current adventurer level
            current_class: Class the adventurer has now
            requested_class: Class asked for
            rules: Progression constants

        Returns:
            The requested class

        Raises:
            ClassRequirementNotMet: If the class is not selectable or the level is too low
        """
        if requested_class == current_class:
            raise ClassRequirementNotMet(f"Adventurer is already a {requested_class.name.title()}")

        required_level = ProgressionCalculator.class_requirement(requested_class, rules)
        if required_level is None:
            raise ClassRequirementNotMet(f"Class {requested_class.name.title()} cannot be selected")
        if level < required_level:
            raise ClassRequirementNotMet(
                f"Level {required_level} required for {requested_class.name.title()}, adventurer is level {level}"
            )
        return requested_class

    @staticmethod
    def baseline_multipliers(adventurer_class: AdventurerClass) -> ClassMultipliers:
        """Default attribute weights of a class."""
        return CLASS_BASELINES[adventurer_class]
