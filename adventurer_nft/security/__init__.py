"""Input checks for the HTTP boundary."""

from adventurer_nft.security.name_sanitizer import NameSanitizer

__all__ = ["NameSanitizer"]
