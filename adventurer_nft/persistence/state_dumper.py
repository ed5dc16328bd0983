"""State dumper for saving contract state to disk."""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from adventurer_nft.models.state import ContractState

logger = logging.getLogger(__name__.split(".")[-1])

_VERSION_FILE = re.compile(r"^v(\d+)\.json$")


class StateDumper:
    """Dumps contract states to disk and loads them back."""

    def __init__(self, dump_directory: str = "/var/adventurer_nft"):
        """
        Initialize state dumper.

        Args:
            dump_directory: Directory where contract states will be saved
        """
        self.dump_directory = Path(dump_directory)
        try:
            self.dump_directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"State dump directory ready: {self.dump_directory}")
        except OSError as e:
            logger.error(f"Error creating directory {self.dump_directory}: {e}")
            raise

    def contract_directory(self, contract_id: str) -> Path:
        return self.dump_directory / contract_id

    def dump_state(self, state: ContractState) -> str:
        """
        Dump contract state to ``{contract_id}/v{version}.json``.

        Args:
            state: ContractState to dump

        Returns:
            Path to the dumped file
        """
        contract_dir = self.contract_directory(state.contract_id)
        contract_dir.mkdir(parents=True, exist_ok=True)
        file_path = contract_dir / f"v{state.state_version}.json"

        try:
            temp_path = file_path.with_suffix(".tmp")
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(state.model_dump_json(indent=2))
            temp_path.replace(file_path)
        except OSError as e:
            logger.error(f"Error dumping state {state.contract_id} v{state.state_version}: {e}", exc_info=True)
            raise

        logger.debug(f"Dumped contract state {state.contract_id} v{state.state_version} to {file_path}")
        return str(file_path)

    def load_state(self, contract_id: str, version: Optional[int] = None) -> Optional[ContractState]:
        """
        Load contract state from disk.

        Args:
            contract_id: Contract ID to load
            version: Optional version number. If None, loads the latest version.

        Returns:
            ContractState if found, None otherwise
        """
        contract_dir = self.contract_directory(contract_id)
        if not contract_dir.exists():
            logger.warning(f"Contract directory not found: {contract_dir}")
            return None

        if version is None:
            versions = self.list_versions(contract_id)
            if not versions:
                logger.warning(f"No state files found in {contract_dir}")
                return None
            version = versions[-1]

        file_path = contract_dir / f"v{version}.json"
        if not file_path.exists():
            logger.warning(f"State file not found: {file_path}")
            return None

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                state = ContractState.model_validate(json.load(f))
        except (OSError, ValueError) as e:
            logger.error(f"Error loading state from {file_path}: {e}", exc_info=True)
            return None

        logger.debug(f"Loaded contract state from {file_path}")
        return state

    def list_versions(self, contract_id: str) -> list[int]:
        """Saved versions of a contract, ascending."""
        contract_dir = self.contract_directory(contract_id)
        if not contract_dir.exists():
            return []
        versions = []
        for file_path in contract_dir.iterdir():
            match = _VERSION_FILE.match(file_path.name)
            if match and file_path.is_file():
                versions.append(int(match.group(1)))
        return sorted(versions)

    def list_contracts(self) -> list[str]:
        """Contract IDs that have at least one saved state."""
        return sorted(
            item.name for item in self.dump_directory.iterdir() if item.is_dir() and any(item.glob("v*.json"))
        )

    def delete_versions_after(self, contract_id: str, version: int) -> int:
        """
        Delete saved versions newer than ``version``.

        Args:
            contract_id: Contract ID whose dumps are pruned
            version: Last version to keep

        Returns:
            Number of files deleted
        """
        deleted = 0
        for newer in self.list_versions(contract_id):
            if newer <= version:
                continue
            file_path = self.contract_directory(contract_id) / f"v{newer}.json"
            try:
                file_path.unlink()
            except OSError as e:
                logger.error(f"Error deleting state file {file_path}: {e}", exc_info=True)
                raise
            deleted += 1
        logger.debug(f"Deleted {deleted} state file(s) of {contract_id} after v{version}")
        return deleted
