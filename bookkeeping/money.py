"""
Exact money handling.

Every monetary value in the ledger is a decimal.Decimal. Binary floats
are rejected outright: 0.1 as a float is not 0.1, and a ledger that
accepts it will eventually fail to balance.

For storage, amounts are scaled to integer minor units (four fractional
digits, the same precision as NUMERIC(19, 4)). Integers survive every
database round trip unchanged, and SUM() over them is exact. Any value
that cannot be represented at that scale is refused, never rounded.
"""

from decimal import Decimal, Inexact, InvalidOperation, localcontext

from sqlalchemy import BigInteger, func, type_coerce
from sqlalchemy.types import TypeDecorator

SCALE = 4
ZERO = Decimal("0")

# Enough digits for any BigInteger-sized amount at SCALE.
_PRECISION = 38

# Signed 64-bit range of the BIGINT storage column
MIN_UNITS = -(2 ** 63)
MAX_UNITS = 2 ** 63 - 1


def to_decimal(value) -> Decimal:
    """Coerce an int, str or Decimal to Decimal. Floats are refused."""
    if isinstance(value, bool):
        raise TypeError("Boolean is not a monetary amount")
    if isinstance(value, float):
        raise TypeError(
            f"Float amount {value!r} refused; use Decimal or a string"
        )
    try:
        result = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Invalid monetary amount: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Monetary amount must be finite, got {value!r}")
    return result


def to_minor_units(value) -> int:
    """
    Convert an amount to its integer storage form.

    Raises ValueError if the amount has more than SCALE
    fractional digits or falls outside the BIGINT range.
    """
    amount = to_decimal(value)
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        ctx.traps[Inexact] = True
        try:
            scaled = amount.scaleb(SCALE)
        except Inexact as e:
            raise ValueError(f"Amount {amount} is too large to store") from e
    if scaled != scaled.to_integral_value():
        raise ValueError(
            f"Amount {amount} has more than {SCALE} decimal places"
        )
    units = int(scaled)
    if not MIN_UNITS <= units <= MAX_UNITS:
        raise ValueError(f"Amount {amount} is too large to store")
    return units


def from_minor_units(units: int) -> Decimal:
    """Inverse of to_minor_units."""
    return Decimal(int(units)).scaleb(-SCALE)


class MoneyType(TypeDecorator):
    """Decimal in Python, scaled BigInteger in the database."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return to_minor_units(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return from_minor_units(value)


def sum_of(column):
    """SUM(column) read back as an exact Decimal, 0 over no rows."""
    return type_coerce(func.coalesce(func.sum(column), 0), MoneyType)
