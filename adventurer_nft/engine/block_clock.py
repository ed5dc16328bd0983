"""Block number arithmetic for the simulated chain."""

from adventurer_nft.engine.errors import InvalidArgument


class BlockClock:
    """Manages chain head progression."""

    @staticmethod
    def advance(current_block: int, blocks: int = 1) -> int:
        """
        Advance the chain head by mining empty blocks.

        Args:
            current_block: Latest mined block
            blocks: Number of blocks to mine

        Returns:
            New latest block number
        """
        if blocks < 1:
            raise InvalidArgument(f"Must mine at least one block, got {blocks}")
        return current_block + blocks

    @staticmethod
    def pending_block(current_block: int) -> int:
        """Block the next transaction will be mined in."""
        return current_block + 1

    @staticmethod
    def elapsed(start_block: int, current_block: int) -> int:
        """Blocks between ``start_block`` and ``current_block``."""
        if current_block < start_block:
            raise InvalidArgument(f"Block {current_block} precedes start block {start_block}")
        return current_block - start_block
