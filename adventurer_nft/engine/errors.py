"""Contract revert errors."""


class ContractRevert(ValueError):
    """A transaction was rejected; no state was changed."""

    default_reason = "Transaction reverted"

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class InsufficientFunds(ContractRevert):
    default_reason = "Insufficient funds"


class StatCapExceeded(ContractRevert):
    default_reason = "Total status points exceed the limit"


class Unauthorized(ContractRevert):
    default_reason = "Caller is not owner nor approved"


class TokenNotFound(ContractRevert):
    default_reason = "Nonexistent token"


class AlreadyAdventuring(ContractRevert):
    default_reason = "Adventurer is already on an adventure"


class NotAdventuring(ContractRevert):
    default_reason = "Adventurer is not on an adventure"


class InsufficientExp(ContractRevert):
    default_reason = "Not enough experience to level up"


class InsufficientStatusPoints(ContractRevert):
    default_reason = "Not enough status points"


class ClassRequirementNotMet(ContractRevert):
    default_reason = "Class requirement not met"


class InvalidArgument(ContractRevert):
    default_reason = "Invalid argument"
