"""
Core Utilities

Shared helpers used across the plugin.
"""
from decimal import Decimal, ROUND_CEILING


def mask_secret(value: str, keep: int = 4) -> str:
    """Mask secrets (API keys) for logs."""
    if not value:
        return ""
    if len(value) <= keep:
        return "*" * len(value)
    return value[:keep] + "*" * (len(value) - keep)


def ceil_to_int(value: Decimal) -> int:
    """Round a measurement up to the next whole unit."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.to_integral_value(rounding=ROUND_CEILING))
