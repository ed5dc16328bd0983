"""AdventurerNFT contract engine: minting, adventures, leveling and classes."""

import functools
import logging
import threading
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import ValidationError

from adventurer_nft.config import ZERO_ADDRESS
from adventurer_nft.engine.block_clock import BlockClock
from adventurer_nft.engine.errors import (
    AlreadyAdventuring,
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
from adventurer_nft.helpers.debug import log_call
from adventurer_nft.models.adventurer import Adventurer, AdventurerClass
from adventurer_nft.models.events import Event, EventType
from adventurer_nft.models.rules import ProgressionRules
from adventurer_nft.models.state import ContractState
from adventurer_nft.models.stats import ClassMultipliers, Stats

logger = logging.getLogger(__name__.split(".")[-1])


def _atomic(fn):
    """Run a contract operation under the contract lock."""
    @functools.wraps(fn)
    def __wrapped(self, *args, **kwargs):
        with self._lock:
            return fn(self, *args, **kwargs)
    return __wrapped


class AdventurerNFT:
    """
    Single sequential state machine holding every adventurer.

    Each mutating operation validates against the current state, builds a
    complete new ContractState and swaps it in one assignment. A revert
    raises before the swap, so it leaves no partial state and mines no block.
    """

    def __init__(
        self,
        base_uri: str = "",
        mint_price: int = 0,
        owner: str = "",
        rules: Optional[ProgressionRules] = None,
        initial_state: Optional[ContractState] = None,
        contract_id: Optional[str] = None,
    ) -> None:
        """
        Deploy the contract, or restore it from a saved state.

        Args:
            base_uri: Prefix of every token URI
            mint_price: Mint price in wei
            owner: Deployer address
            rules: Optional progression constants
            initial_state: Optional saved state; other arguments are ignored when given
            contract_id: Optional identifier for a fresh deployment
        """
        if initial_state:
            self._state = initial_state
        else:
            if not owner or owner == ZERO_ADDRESS:
                raise InvalidArgument("Contract owner must be a non-zero address")
            if mint_price < 0:
                raise InvalidArgument("Mint price must not be negative")
            self._state = ContractState(
                contract_id=contract_id or str(uuid.uuid4()),
                state_version=0,
                created_at=datetime.now(),
                owner=owner,
                base_uri=base_uri,
                mint_price=mint_price,
                rules=rules or ProgressionRules(),
            )
        self._lock = threading.RLock()
        self._history = StateHistory()
        self._history.record(self._state, "deploy" if initial_state is None else "restore")

    @property
    def state(self) -> ContractState:
        """Get current contract state."""
        return self._state

    @property
    def history(self) -> StateHistory:
        return self._history

    @property
    def owner(self) -> str:
        return self._state.owner

    @property
    def rules(self) -> ProgressionRules:
        return self._state.rules

    @property
    def block_number(self) -> int:
        """Latest mined block."""
        return self._state.block_number

    @property
    def treasury_balance(self) -> int:
        return self._state.treasury_balance

    # ------------------------------------------------------------------
    # Transaction plumbing
    # ------------------------------------------------------------------

    def _pending_block(self) -> int:
        return BlockClock.pending_block(self._state.block_number)

    def _commit(self, reason: str, updates: dict[str, Any], events: list[Event], **metadata) -> ContractState:
        """Mine one block holding ``updates`` and ``events``."""
        new_state = self._state.model_copy(
            update={
                **updates,
                "state_version": self._state.state_version + 1,
                "block_number": self._pending_block(),
                "events": [*self._state.events, *events],
            }
        )
        self._history.record(new_state, reason, **metadata)
        self._state = new_state
        logger.info(f"Committed {reason} in block {new_state.block_number} (v{new_state.state_version})")
        return new_state

    def _event(self, event_type: EventType, **args) -> Event:
        return Event(event_type=event_type, block_number=self._pending_block(), args=args)

    def _get_adventurer(self, token_id: int) -> Adventurer:
        adventurer = self._state.adventurers.get(token_id)
        if adventurer is None:
            raise TokenNotFound(f"Token {token_id} does not exist")
        return adventurer

    def _authorized_adventurer(self, caller: str, token_id: int) -> Adventurer:
        adventurer = self._get_adventurer(token_id)
        OwnershipLedger.require_authorized(self._state.ownership, caller, token_id)
        return adventurer

    def _replace_adventurer(self, adventurer: Adventurer) -> dict[int, Adventurer]:
        return {**self._state.adventurers, adventurer.token_id: adventurer}

    def _require_contract_owner(self, caller: str) -> None:
        if caller != self._state.owner:
            raise Unauthorized(f"{caller} is not the contract owner")

    # ------------------------------------------------------------------
    # Chain control
    # ------------------------------------------------------------------

    @_atomic
    def mine(self, blocks: int = 1) -> int:
        """
        Mine empty blocks.

        Args:
            blocks: Number of blocks to mine

        Returns:
            New latest block number
        """
        new_block = BlockClock.advance(self._state.block_number, blocks)
        self._state = self._state.model_copy(update={"block_number": new_block})
        return new_block

    @_atomic
    def revert_to(self, snapshot_index: int) -> tuple[bool, str]:
        """
        Revert contract state to a committed snapshot.

        Args:
            snapshot_index: Index of snapshot to revert to

        Returns:
            Tuple of (success, error_message)
        """
        snapshot = self._history.rewind(snapshot_index)
        if snapshot is None:
            return False, f"Snapshot {snapshot_index} not found"
        self._state = snapshot.state
        logger.info(f"Reverted to snapshot {snapshot_index} (block {snapshot.state.block_number})")
        return True, ""

    # ------------------------------------------------------------------
    # Ownership surface
    # ------------------------------------------------------------------

    def owner_of(self, token_id: int) -> str:
        return OwnershipLedger.owner_of(self._state.ownership, token_id)

    def balance_of(self, owner: str) -> int:
        return OwnershipLedger.balance_of(self._state.ownership, owner)

    def token_uri(self, token_id: int) -> str:
        return OwnershipLedger.resolve_uri(self._state.ownership, self._state.base_uri, token_id)

    def total_supply(self) -> int:
        return len(self._state.adventurers)

    def get_approved(self, token_id: int) -> str:
        OwnershipLedger.owner_of(self._state.ownership, token_id)
        return self._state.ownership.token_approvals.get(token_id, ZERO_ADDRESS)

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return operator in self._state.ownership.operator_approvals.get(owner, [])

    @_atomic
    @log_call
    def approve(self, caller: str, to_address: str, token_id: int) -> None:
        """Approve ``to_address`` to act on ``token_id``."""
        ledger = OwnershipLedger.approve(self._state.ownership, caller, to_address, token_id)
        owner = ledger.owners[token_id]
        self._commit(
            "approve",
            {"ownership": ledger},
            [self._event(EventType.APPROVAL, owner=owner, approved=to_address, tokenId=token_id)],
            token_id=token_id,
        )

    @_atomic
    @log_call
    def set_approval_for_all(self, caller: str, operator: str, approved: bool) -> None:
        """Grant or revoke ``operator`` over every token ``caller`` holds."""
        ledger = OwnershipLedger.set_approval_for_all(self._state.ownership, caller, operator, approved)
        self._commit(
            "set_approval_for_all",
            {"ownership": ledger},
            [self._event(EventType.APPROVAL_FOR_ALL, owner=caller, operator=operator, approved=approved)],
        )

    @_atomic
    @log_call
    def transfer_from(self, caller: str, from_address: str, to_address: str, token_id: int) -> None:
        """
        Transfer a token. Game state travels with the token unchanged.

        Args:
            caller: Transaction sender (holder, approved address or operator)
            from_address: Current holder
            to_address: New holder
            token_id: Token to move
        """
        ledger = OwnershipLedger.transfer(self._state.ownership, caller, from_address, to_address, token_id)
        self._commit(
            "transfer",
            {"ownership": ledger},
            [self._event(EventType.TRANSFER, **{"from": from_address, "to": to_address, "tokenId": token_id})],
            token_id=token_id,
        )

    # ------------------------------------------------------------------
    # Minting
    # ------------------------------------------------------------------

    @_atomic
    @log_call
    def mint(self, caller: str, name: str, stats: Union[Stats, Sequence[int]], value: int) -> int:
        """
        Mint a new adventurer to ``caller``.

        Args:
            caller: Transaction sender, becomes the holder
            name: Adventurer name
            stats: Six initial stats (STR, AGI, VIT, DEX, INT, LUK)
            value: Payment in wei

        Returns:
            The new token id

        Raises:
            InsufficientFunds: If ``value`` is below the mint price
            StatCapExceeded: If the stats sum to more than the initial cap
        """
        if value < 0:
            raise InvalidArgument("Payment must not be negative")
        if value < self._state.mint_price:
            raise InsufficientFunds()
        if not isinstance(name, str):
            raise InvalidArgument(f"Name must be a string, got {type(name).__name__}")

        if not isinstance(stats, Stats):
            try:
                stats = Stats.from_list(list(stats))
            except (ValueError, TypeError) as e:
                raise InvalidArgument(f"Invalid stats: {e}") from e

        if stats.total() > self._state.rules.initial_stat_cap:
            raise StatCapExceeded()

        ledger, token_id = OwnershipLedger.create(self._state.ownership, caller)
        adventurer = Adventurer(
            token_id=token_id,
            name=name,
            stats=stats,
            current_class=AdventurerClass.ADVENTURER,
            class_multipliers=ProgressionCalculator.baseline_multipliers(AdventurerClass.ADVENTURER),
        )

        self._commit(
            "mint",
            {
                "ownership": ledger,
                "adventurers": self._replace_adventurer(adventurer),
                "treasury_balance": self._state.treasury_balance + value,
            },
            [
                self._event(EventType.TRANSFER, **{"from": ZERO_ADDRESS, "to": caller, "tokenId": token_id}),
                self._event(EventType.ADVENTURER_MINTED, tokenId=token_id, owner=caller, name=name),
            ],
            token_id=token_id,
        )
        return token_id

    # ------------------------------------------------------------------
    # Adventures
    # ------------------------------------------------------------------

    @_atomic
    @log_call
    def adventure(self, caller: str, token_id: int) -> None:
        """
        Send an idle adventurer on an adventure starting in this transaction's block.

        Raises:
            Unauthorized: If caller may not act on the token
            AlreadyAdventuring: If an adventure is already in progress
        """
        adventurer = self._authorized_adventurer(caller, token_id)
        if adventurer.on_adventure:
            raise AlreadyAdventuring()

        start_block = self._pending_block()
        updated = adventurer.model_copy(update={"on_adventure": True, "adventure_start_block": start_block})
        self._commit(
            "adventure",
            {"adventurers": self._replace_adventurer(updated)},
            [self._event(EventType.ADVENTURE_STARTED, tokenId=token_id, startBlock=start_block)],
            token_id=token_id,
        )

    def view_exp(self, token_id: int) -> int:
        """
        Experience a claim would bank if it executed in the latest block.

        A real claim executes in the next block, so it always yields more.
        """
        adventurer = self._get_adventurer(token_id)
        if not adventurer.on_adventure:
            raise NotAdventuring()
        return ProgressionCalculator.experience_at(
            adventurer.adventure_start_block, self._state.block_number, self._state.rules
        )

    @_atomic
    @log_call
    def claim_exp(self, caller: str, token_id: int) -> int:
        """
        End the adventure and bank the experience it accrued.

        Returns:
            Experience accrued by this adventure

        Raises:
            Unauthorized: If caller may not act on the token
            NotAdventuring: If no adventure is in progress
        """
        adventurer = self._authorized_adventurer(caller, token_id)
        if not adventurer.on_adventure:
            raise NotAdventuring()

        accrued = ProgressionCalculator.experience_at(
            adventurer.adventure_start_block, self._pending_block(), self._state.rules
        )
        updated = adventurer.model_copy(
            update={
                "accrued_exp": adventurer.accrued_exp + accrued,
                "on_adventure": False,
                "adventure_start_block": None,
            }
        )
        self._commit(
            "claim_exp",
            {"adventurers": self._replace_adventurer(updated)},
            [self._event(EventType.EXP_CLAIMED, tokenId=token_id, accruedExp=accrued)],
            token_id=token_id,
        )
        return accrued

    # ------------------------------------------------------------------
    # Leveling and stats
    # ------------------------------------------------------------------

    @_atomic
    @log_call
    def level_up(self, caller: str, token_id: int) -> int:
        """
        Spend banked experience to gain exactly one level.

        Returns:
            The new level

        Raises:
            InsufficientExp: If banked experience is below the next level's cost
        """
        adventurer = self._authorized_adventurer(caller, token_id)
        rules = self._state.rules

        cost = ProgressionCalculator.exp_to_next_level(adventurer.level, rules)
        if adventurer.accrued_exp < cost:
            raise InsufficientExp(
                f"Level {adventurer.level + 1} costs {cost} exp, adventurer has {adventurer.accrued_exp}"
            )

        new_level = adventurer.level + 1
        granted = ProgressionCalculator.status_points_for_level(new_level, rules)
        updated = adventurer.model_copy(
            update={
                "level": new_level,
                "accrued_exp": adventurer.accrued_exp - cost,
                "status_points": adventurer.status_points + granted,
            }
        )
        self._commit(
            "level_up",
            {"adventurers": self._replace_adventurer(updated)},
            [
                self._event(
                    EventType.LEVEL_UP, tokenId=token_id, newLevel=new_level, expSpent=cost, statusPoints=granted
                )
            ],
            token_id=token_id,
        )
        return new_level

    @_atomic
    @log_call
    def upgrade_statuses(
        self,
        caller: str,
        token_id: int,
        str_: int = 0,
        agi: int = 0,
        vit: int = 0,
        dex: int = 0,
        intel: int = 0,
        luk: int = 0,
    ) -> Stats:
        """
        Spend status points on stats.

        Returns:
            The upgraded stats

        Raises:
            InvalidArgument: If a delta is negative
            InsufficientStatusPoints: If the deltas sum to more than the available points
        """
        adventurer = self._authorized_adventurer(caller, token_id)
        try:
            deltas = Stats.from_list([str_, agi, vit, dex, intel, luk])
        except ValidationError as e:
            raise InvalidArgument(f"Stat deltas must be non-negative integers: {e}") from e

        spent = deltas.total()
        if spent > adventurer.status_points:
            raise InsufficientStatusPoints(
                f"Upgrade costs {spent} status points, adventurer has {adventurer.status_points}"
            )

        new_stats = adventurer.stats.add(deltas)
        updated = adventurer.model_copy(
            update={"stats": new_stats, "status_points": adventurer.status_points - spent}
        )
        self._commit(
            "upgrade_statuses",
            {"adventurers": self._replace_adventurer(updated)},
            [self._event(EventType.STATUSES_UPGRADED, tokenId=token_id, deltas=deltas.as_list(), spent=spent)],
            token_id=token_id,
        )
        return new_stats

    # ------------------------------------------------------------------
    # Classes
    # ------------------------------------------------------------------

    @_atomic
    @log_call
    def set_class_multiplier(
        self, caller: str, token_id: int, multipliers: Union[ClassMultipliers, Mapping[str, int]]
    ) -> ClassMultipliers:
        """Overwrite the adventurer's attribute weights."""
        adventurer = self._authorized_adventurer(caller, token_id)
        if not isinstance(multipliers, ClassMultipliers):
            try:
                multipliers = ClassMultipliers.from_mapping(multipliers)
            except (ValueError, TypeError) as e:
                raise InvalidArgument(f"Invalid class multipliers: {e}") from e

        updated = adventurer.model_copy(update={"class_multipliers": multipliers})
        self._commit(
            "set_class_multiplier",
            {"adventurers": self._replace_adventurer(updated)},
            [self._event(EventType.CLASS_MULTIPLIER_SET, tokenId=token_id, **multipliers.as_aliased_dict())],
            token_id=token_id,
        )
        return multipliers

    def class_multipliers(self, token_id: int) -> ClassMultipliers:
        return self._get_adventurer(token_id).class_multipliers

    @_atomic
    @log_call
    def change_class(
        self, caller: str, token_id: int, new_class: Union[AdventurerClass, int]
    ) -> AdventurerClass:
        """
        Change the adventurer's class. Stats, level and points are kept.

        Raises:
            InvalidArgument: If ``new_class`` is not a known class
            ClassRequirementNotMet: If the class is not selectable at the current level
        """
        adventurer = self._authorized_adventurer(caller, token_id)
        if isinstance(new_class, bool):
            raise InvalidArgument(f"Unknown class: {new_class!r}")
        try:
            requested = AdventurerClass(new_class)
        except ValueError as e:
            raise InvalidArgument(f"Unknown class: {new_class!r}") from e

        adopted = ProgressionCalculator.resolve_class_change(
            adventurer.level, adventurer.current_class, requested, self._state.rules
        )
        updated = adventurer.model_copy(update={"current_class": adopted})
        self._commit(
            "change_class",
            {"adventurers": self._replace_adventurer(updated)},
            [
                self._event(
                    EventType.CLASS_CHANGED,
                    tokenId=token_id,
                    previousClass=int(adventurer.current_class),
                    newClass=int(adopted),
                )
            ],
            token_id=token_id,
        )
        return adopted

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_adventurer_info(self, token_id: int) -> Adventurer:
        """Snapshot of the adventurer record."""
        return self._get_adventurer(token_id)

    def query_events(
        self, event_type: Optional[EventType] = None, token_id: Optional[int] = None
    ) -> list[Event]:
        """
        Filter the event log.

        Args:
            event_type: Optional event name to keep
            token_id: Optional token id to keep (matched against the ``tokenId`` argument)

        Returns:
            Matching events, oldest first
        """
        events = self._state.events
        if event_type is not None:
            events = [e for e in events if e.event_type == event_type]
        if token_id is not None:
            events = [e for e in events if e.args.get("tokenId") == token_id]
        return list(events)

    # ------------------------------------------------------------------
    # Contract administration
    # ------------------------------------------------------------------

    @_atomic
    @log_call
    def withdraw(self, caller: str) -> int:
        """
        Pay the treasury out to the contract owner.

        Returns:
            Amount withdrawn in wei
        """
        self._require_contract_owner(caller)
        amount = self._state.treasury_balance
        self._commit(
            "withdraw",
            {"treasury_balance": 0},
            [self._event(EventType.WITHDRAWAL, to=caller, amount=amount)],
        )
        return amount

    @_atomic
    @log_call
    def set_base_uri(self, caller: str, base_uri: str) -> None:
        self._require_contract_owner(caller)
        self._commit("set_base_uri", {"base_uri": base_uri}, [])
