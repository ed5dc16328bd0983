"""Sanitization of adventurer names submitted through the API."""

import re
import unicodedata
from typing import Optional

from adventurer_nft.config import DEFAULT_MAX_NAME_LENGTH

# Control characters, including newlines and tabs: a name is a single line
_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")


class NameSanitizer:
    """Normalizes names and rejects ones that cannot be stored."""

    def __init__(self, max_length: int = DEFAULT_MAX_NAME_LENGTH) -> None:
        self.max_length = max_length

    def sanitize(self, name: str) -> str:
        """
        Sanitize a name by:
        1. Normalizing unicode (NFKC)
        2. Removing control characters
        3. Collapsing runs of whitespace
        4. Truncating to max length
        """
        if not isinstance(name, str):
            raise TypeError(f"Name must be a string, got {type(name)}")

        normalized = unicodedata.normalize("NFKC", name)
        sanitized = _CONTROL_CHARS.sub(" ", normalized)
        sanitized = " ".join(sanitized.split())
        return sanitized[: self.max_length].strip()

    def is_valid(self, name: str) -> tuple[bool, Optional[str]]:
        """
        Check a raw name.
        Returns (is_valid, error_message).
        """
        if not isinstance(name, str) or not name.strip():
            return False, "Name is empty"

        if len(name) > self.max_length:
            return False, f"Name exceeds maximum length of {self.max_length} characters"

        if _CONTROL_CHARS.search(name):
            return False, "Name contains control characters"

        return True, None
