"""Range helpers shared by the rules."""


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    """Pin value into [low, high]."""
    return max(low, min(high, value))


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
