"""Adventurer attribute models."""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Attribute order used on the wire: STR, AGI, VIT, DEX, INT, LUK
ATTRIBUTE_FIELDS = ("strength", "agility", "vitality", "dexterity", "intelligence", "luck")
ATTRIBUTE_ALIASES = ("str", "agi", "vit", "dex", "intel", "luk")


class _AttributeVector(BaseModel):
    """Six attribute values in STR, AGI, VIT, DEX, INT, LUK order."""

    def as_list(self) -> list[int]:
        return [getattr(self, name) for name in ATTRIBUTE_FIELDS]

    def as_aliased_dict(self) -> dict[str, int]:
        return dict(zip(ATTRIBUTE_ALIASES, self.as_list()))

    def total(self) -> int:
        return sum(self.as_list())

    @classmethod
    def from_list(cls, values: Sequence[int]):
        """
        Build from an ordered sequence of six values.

        Raises:
            ValueError: If the sequence does not hold exactly six values
        """
        if len(values) != len(ATTRIBUTE_FIELDS):
            raise ValueError(f"Expected {len(ATTRIBUTE_FIELDS)} attribute values, got {len(values)}")
        return cls(**dict(zip(ATTRIBUTE_FIELDS, values)))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]):
        """Build from a mapping keyed by full names or short aliases."""
        return cls.model_validate(dict(values))


class Stats(_AttributeVector):
    """Adventurer base stats."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)  # Immutable model

    strength: int = Field(default=0, ge=0, alias="str", description="STR")
    agility: int = Field(default=0, ge=0, alias="agi", description="AGI")
    vitality: int = Field(default=0, ge=0, alias="vit", description="VIT")
    dexterity: int = Field(default=0, ge=0, alias="dex", description="DEX")
    intelligence: int = Field(default=0, ge=0, alias="intel", description="INT")
    luck: int = Field(default=0, ge=0, alias="luk", description="LUK")

    def add(self, other: "Stats") -> "Stats":
        """Return new stats with each attribute of ``other`` added."""
        return Stats.from_list([a + b for a, b in zip(self.as_list(), other.as_list())])


class ClassMultipliers(_AttributeVector):
    """Per-adventurer attribute weights. Stored verbatim, every weight positive."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)  # Immutable model

    strength: int = Field(default=10, ge=1, alias="str", description="STR weight")
    agility: int = Field(default=10, ge=1, alias="agi", description="AGI weight")
    vitality: int = Field(default=10, ge=1, alias="vit", description="VIT weight")
    dexterity: int = Field(default=10, ge=1, alias="dex", description="DEX weight")
    intelligence: int = Field(default=10, ge=1, alias="intel", description="INT weight")
    luck: int = Field(default=10, ge=1, alias="luk", description="LUK weight")
