"""On-chain adventurer progression game, simulated in-process."""

__version__ = "0.1.0"
