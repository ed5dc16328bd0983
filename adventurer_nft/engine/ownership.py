"""Token ownership ledger."""

from adventurer_nft.config import ZERO_ADDRESS
from adventurer_nft.engine.errors import InvalidArgument, TokenNotFound, Unauthorized
from adventurer_nft.models.ownership import TokenOwnership


class OwnershipLedger:
    """Assigns token ids, tracks holders and authorizes callers."""

    @staticmethod
    def create(ledger: TokenOwnership, owner: str) -> tuple[TokenOwnership, int]:
        """
        Register a new token to ``owner``.

        Args:
            ledger: Current ownership records
            owner: Initial holder address

        Returns:
            Tuple of (new ledger, assigned token id)
        """
        if not owner or owner == ZERO_ADDRESS:
            raise InvalidArgument("Cannot mint to the zero address")

        token_id = ledger.next_token_id
        new_ledger = ledger.model_copy(
            update={
                "owners": {**ledger.owners, token_id: owner},
                "balances": {**ledger.balances, owner: ledger.balances.get(owner, 0) + 1},
                "next_token_id": token_id + 1,
            }
        )
        return new_ledger, token_id

    @staticmethod
    def owner_of(ledger: TokenOwnership, token_id: int) -> str:
        """Holder of ``token_id``."""
        owner = ledger.owners.get(token_id)
        if owner is None:
            raise TokenNotFound(f"Token {token_id} does not exist")
        return owner

    @staticmethod
    def balance_of(ledger: TokenOwnership, owner: str) -> int:
        return ledger.balances.get(owner, 0)

    @staticmethod
    def is_authorized(ledger: TokenOwnership, caller: str, token_id: int) -> bool:
        """Whether ``caller`` holds, is approved for, or operates ``token_id``."""
        owner = OwnershipLedger.owner_of(ledger, token_id)
        if caller == owner:
            return True
        if ledger.token_approvals.get(token_id) == caller:
            return True
        return caller in ledger.operator_approvals.get(owner, [])

    @staticmethod
    def require_authorized(ledger: TokenOwnership, caller: str, token_id: int) -> None:
        """Raise Unauthorized unless ``caller`` may act on ``token_id``."""
        if not OwnershipLedger.is_authorized(ledger, caller, token_id):
            raise Unauthorized(f"{caller} is not owner nor approved for token {token_id}")

    @staticmethod
    def approve(ledger: TokenOwnership, caller: str, to: str, token_id: int) -> TokenOwnership:
        """
        Approve ``to`` for a single token.

        Only the holder or one of its operators may approve.
        """
        owner = OwnershipLedger.owner_of(ledger, token_id)
        if to == owner:
            raise InvalidArgument("Approval to current owner")
        if caller != owner and caller not in ledger.operator_approvals.get(owner, []):
            raise Unauthorized(f"{caller} is not owner nor approved for all")
        return ledger.model_copy(update={"token_approvals": {**ledger.token_approvals, token_id: to}})

    @staticmethod
    def set_approval_for_all(
        ledger: TokenOwnership, owner: str, operator: str, approved: bool
    ) -> TokenOwnership:
        """Grant or revoke ``operator`` over every token of ``owner``."""
        if owner == operator:
            raise InvalidArgument("Approve to caller")
        operators = [op for op in ledger.operator_approvals.get(owner, []) if op != operator]
        if approved:
            operators.append(operator)
        return ledger.model_copy(
            update={"operator_approvals": {**ledger.operator_approvals, owner: operators}}
        )

    @staticmethod
    def transfer(
        ledger: TokenOwnership, caller: str, from_address: str, to_address: str, token_id: int
    ) -> TokenOwnership:
        """
        Move ``token_id`` from ``from_address`` to ``to_address``.

        Clears the single-token approval.
        """
        OwnershipLedger.require_authorized(ledger, caller, token_id)
        owner = ledger.owners[token_id]
        if owner != from_address:
            raise InvalidArgument(f"Token {token_id} is not held by {from_address}")
        if not to_address or to_address == ZERO_ADDRESS:
            raise InvalidArgument("Transfer to the zero address")

        balances = dict(ledger.balances)
        balances[from_address] -= 1
        balances[to_address] = balances.get(to_address, 0) + 1
        token_approvals = {tid: addr for tid, addr in ledger.token_approvals.items() if tid != token_id}

        return ledger.model_copy(
            update={
                "owners": {**ledger.owners, token_id: to_address},
                "balances": balances,
                "token_approvals": token_approvals,
            }
        )

    @staticmethod
    def resolve_uri(ledger: TokenOwnership, base_uri: str, token_id: int) -> str:
        """Token URI: ``base_uri`` followed by the decimal token id."""
        OwnershipLedger.owner_of(ledger, token_id)
        return f"{base_uri}{token_id}"
