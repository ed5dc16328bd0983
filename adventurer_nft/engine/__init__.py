"""Contract engine package."""

from adventurer_nft.engine.block_clock import BlockClock
from adventurer_nft.engine.contract import AdventurerNFT
from adventurer_nft.engine.errors import (
    AlreadyAdventuring,
    ClassRequirementNotMet,
    ContractRevert,
    InsufficientExp,
    InsufficientFunds,
    InsufficientStatusPoints,
    InvalidArgument,
    NotAdventuring,
    StatCapExceeded,
    TokenNotFound,
    Unauthorized,
)
from adventurer_nft.engine.history import StateHistory
from adventurer_nft.engine.ownership import OwnershipLedger
from adventurer_nft.engine.progression import ProgressionCalculator

__all__ = [
    "AdventurerNFT",
    "BlockClock",
    "OwnershipLedger",
    "ProgressionCalculator",
    "StateHistory",
    # Errors
    "ContractRevert",
    "AlreadyAdventuring",
    "ClassRequirementNotMet",
    "InsufficientExp",
    "InsufficientFunds",
    "InsufficientStatusPoints",
    "InvalidArgument",
    "NotAdventuring",
    "StatCapExceeded",
    "TokenNotFound",
    "Unauthorized",
]
