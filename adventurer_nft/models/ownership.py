"""Token ownership records."""

from pydantic import BaseModel, ConfigDict, Field


class TokenOwnership(BaseModel):
    """Holder and approval records for every minted token."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    owners: dict[int, str] = Field(default_factory=dict, description="Holder address per token id")
    balances: dict[str, int] = Field(default_factory=dict, description="Token count per holder address")
    token_approvals: dict[int, str] = Field(
        default_factory=dict, description="Single approved address per token id"
    )
    operator_approvals: dict[str, list[str]] = Field(
        default_factory=dict, description="Operators approved for all tokens of a holder"
    )
    next_token_id: int = Field(ge=1, default=1, description="Identifier the next mint receives")
