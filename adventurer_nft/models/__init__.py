"""Data models module for AdventurerNFT."""

# Stats
from adventurer_nft.models.stats import ATTRIBUTE_ALIASES, ATTRIBUTE_FIELDS, ClassMultipliers, Stats

# Adventurer
from adventurer_nft.models.adventurer import Adventurer, AdventurerClass

# Ownership
from adventurer_nft.models.ownership import TokenOwnership

# Events
from adventurer_nft.models.events import Event, EventType

# Rules
from adventurer_nft.models.rules import ProgressionRules

# State
from adventurer_nft.models.state import ContractState, StateSnapshot

__all__ = [
    # Stats
    "ATTRIBUTE_ALIASES",
    "ATTRIBUTE_FIELDS",
    "ClassMultipliers",
    "Stats",
    # Adventurer
    "Adventurer",
    "AdventurerClass",
    # Ownership
    "TokenOwnership",
    # Events
    "Event",
    "EventType",
    # Rules
    "ProgressionRules",
    # State
    "ContractState",
    "StateSnapshot",
]
