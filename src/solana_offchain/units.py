"""
Unit Conversion

Converts between human amounts (SOL, tokens) and integer minor units
(lamports, raw token units). Decimal arithmetic only: `scaleb` shifts the
exponent without touching the coefficient, so no rounding happens until the
explicit truncation in `to_minor_units`. Both conversions run in a local
context wide enough to hold every digit of the input.

Round-trip is lossy only below the asset precision:
to_human_units(to_minor_units(a, d), d) == a truncated to d places.
"""

from decimal import ROUND_DOWN, Decimal, localcontext

from .errors import ValidationError


LAMPORTS_DECIMALS = 9  # 1 SOL = 1_000_000_000 lamports
LAMPORTS_PER_SOL = 10**LAMPORTS_DECIMALS


def _as_decimal(amount) -> Decimal:
    if isinstance(amount, float):
        raise ValidationError("Amounts must be Decimal, int or str, not float")
    if isinstance(amount, Decimal):
        return amount
    try:
        return Decimal(amount)
    except (ArithmeticError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid amount: {amount!r}") from e


def _check_decimals(decimals: int) -> None:
    if decimals < 0:
        raise ValidationError(f"Decimal precision must be non-negative, got {decimals}")


def to_minor_units(amount, decimals: int) -> int:
    """
    Convert a human amount into integer minor units

    Args:
        amount: Decimal (or int/str) amount, e.g. Decimal("1.5")
        decimals: Asset decimal precision

    Returns:
        Amount multiplied by 10**decimals, truncated toward zero
    """
    _check_decimals(decimals)
    value = _as_decimal(amount)
    if not value.is_finite():
        raise ValidationError(f"Amount must be finite, got {value}")
    with localcontext() as ctx:
        ctx.prec = len(value.as_tuple().digits) + decimals + 1
        ctx.rounding = ROUND_DOWN
        return int(value.scaleb(decimals).to_integral_value())


def to_human_units(raw: int, decimals: int) -> Decimal:
    """
    Convert integer minor units into a human amount

    Args:
        raw: Amount in minor units
        decimals: Asset decimal precision

    Returns:
        Exact Decimal value of raw / 10**decimals
    """
    _check_decimals(decimals)
    value = Decimal(int(raw))
    with localcontext() as ctx:
        ctx.prec = len(value.as_tuple().digits) + 1
        return value.scaleb(-decimals)


def lamports_to_sol(lamports: int) -> Decimal:
    return to_human_units(lamports, LAMPORTS_DECIMALS)


def sol_to_lamports(amount) -> int:
    return to_minor_units(amount, LAMPORTS_DECIMALS)
