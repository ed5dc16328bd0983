"""Committed-transaction history for the contract."""

from bisect import bisect_right
from datetime import datetime
from typing import Optional

from adventurer_nft.models.state import ContractState, StateSnapshot


class StateHistory:
    """One snapshot per committed transaction, ordered by block."""

    def __init__(self) -> None:
        self._snapshots: list[StateSnapshot] = []

    def __len__(self) -> int:
        return len(self._snapshots)

    def record(self, state: ContractState, reason: str, **metadata) -> StateSnapshot:
        """
        Append the state a transaction committed.

        Args:
            state: Committed contract state
            reason: Operation that produced the state (``mint``, ``claim_exp``...)
            **metadata: Extra snapshot metadata (token id, caller...)

        Returns:
            Created StateSnapshot
        """
        snapshot = StateSnapshot(
            index=len(self._snapshots),
            timestamp=datetime.now(),
            state=state,
            metadata={"reason": reason, "block_number": state.block_number, **metadata},
        )
        self._snapshots.append(snapshot)
        return snapshot

    def get_snapshot(self, index: int) -> Optional[StateSnapshot]:
        """Snapshot by index, None if out of range."""
        if 0 <= index < len(self._snapshots):
            return self._snapshots[index]
        return None

    def at_block(self, block_number: int) -> Optional[StateSnapshot]:
        """Latest snapshot committed at or before ``block_number``."""
        blocks = [snapshot.state.block_number for snapshot in self._snapshots]
        position = bisect_right(blocks, block_number)
        if position == 0:
            return None
        return self._snapshots[position - 1]

    def list_snapshots(self) -> list[StateSnapshot]:
        return self._snapshots.copy()

    def rewind(self, index: int) -> Optional[StateSnapshot]:
        """
        Drop every snapshot after ``index``.

        Returns:
            The snapshot now at the head, None if ``index`` is unknown
        """
        snapshot = self.get_snapshot(index)
        if snapshot is not None:
            del self._snapshots[index + 1 :]
        return snapshot

    def get_latest(self) -> Optional[StateSnapshot]:
        if self._snapshots:
            return self._snapshots[-1]
        return None
