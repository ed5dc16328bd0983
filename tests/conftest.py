"""Pytest configuration and fixtures."""

import pytest

from adventurer_nft.engine.contract import AdventurerNFT
from adventurer_nft.helpers.units import parse_ether

OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ADDR1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
ADDR2 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"


@pytest.fixture
def owner():
    """Deployer and first minter."""
    return OWNER


@pytest.fixture
def addr1():
    """Second signer."""
    return ADDR1


@pytest.fixture
def addr2():
    """Third signer."""
    return ADDR2


@pytest.fixture
def contract(owner):
    """Contract deployed with base URI "baseURI/" and a mint price of 1 ether."""
    return AdventurerNFT(base_uri="baseURI/", mint_price=parse_ether("1"), owner=owner)


@pytest.fixture
def hero(contract, owner):
    """Token id of a freshly minted [20, 0, 0, 0, 0, 0] adventurer held by owner."""
    return contract.mint(owner, "Hero", [20, 0, 0, 0, 0, 0], value=parse_ether("1"))
