"""Wei / ether fixed-point conversions."""

from decimal import Decimal, InvalidOperation

WEI_PER_ETHER = 10**18


def parse_ether(amount: str | int | Decimal) -> int:
    """
    Convert an ether amount to wei.

    Args:
        amount: Ether amount, e.g. ``"1"`` or ``"0.05"``

    Returns:
        Integer wei amount

    Raises:
        ValueError: If the amount is malformed, negative or finer than one wei
    """
    try:
        value = Decimal(str(amount)) * WEI_PER_ETHER
    except InvalidOperation as e:
        raise ValueError(f"Invalid ether amount: {amount!r}") from e
    if value < 0:
        raise ValueError(f"Ether amount must not be negative: {amount!r}")
    if value != value.to_integral_value():
        raise ValueError(f"Ether amount has more than 18 decimals: {amount!r}")
    return int(value)


def format_ether(wei: int) -> str:
    """Render a wei amount as an ether string without trailing zeros."""
    text = format(Decimal(wei) / WEI_PER_ETHER, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
