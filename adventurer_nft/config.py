"""Central configuration defaults and constants for AdventurerNFT."""

import os

# Deployment Defaults
DEFAULT_BASE_URI = os.getenv("ADVENTURER_NFT_BASE_URI", "BaseTokenURI")
DEFAULT_MINT_PRICE_ETHER = os.getenv("ADVENTURER_NFT_MINT_PRICE_ETHER", "0.05")  # Parsed to wei at deploy time
DEFAULT_DEPLOYER_ADDRESS = os.getenv(
    "ADVENTURER_NFT_DEPLOYER_ADDRESS", "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
)
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Progression Rules Defaults
DEFAULT_INITIAL_STAT_CAP = int(os.getenv("ADVENTURER_NFT_INITIAL_STAT_CAP", "20"))  # Max sum of stats at mint
DEFAULT_EXP_PER_BLOCK = int(os.getenv("ADVENTURER_NFT_EXP_PER_BLOCK", "10"))
DEFAULT_LEVEL_EXP_BASE = int(os.getenv("ADVENTURER_NFT_LEVEL_EXP_BASE", "100"))  # Cost of next level = level * base
DEFAULT_STATUS_POINTS_PER_LEVEL = int(os.getenv("ADVENTURER_NFT_STATUS_POINTS_PER_LEVEL", "3"))  # Grant = new level * this
DEFAULT_CLASS_CHANGE_LEVEL = int(os.getenv("ADVENTURER_NFT_CLASS_CHANGE_LEVEL", "10"))

# Name Sanitizer Defaults
DEFAULT_MAX_NAME_LENGTH = int(os.getenv("ADVENTURER_NFT_MAX_NAME_LENGTH", "64"))

# Persistence Defaults
DEFAULT_DUMP_DIR = os.getenv("ADVENTURER_NFT_DUMP_DIR", "/var/adventurer_nft")
DEFAULT_DUMP_ENABLED = os.getenv("ADVENTURER_NFT_DUMP_ENABLED", "false").lower() in ("true", "1", "yes", "on")
DEFAULT_CONTRACT_ID = os.getenv("ADVENTURER_NFT_CONTRACT_ID", "adventurer-nft")
