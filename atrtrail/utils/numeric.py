"""Numeric utilities for consistent Decimal and float handling."""

import math
from decimal import Decimal, getcontext
from typing import Callable, Dict, Union

from ..errors import ConfigurationError

# Set precision for financial calculations
getcontext().prec = 28

Num = Union[Decimal, float]
NumFactory = Callable[[object], Num]


def D(x) -> Decimal:
    """
    Robust Decimal conversion for ints/floats/strings/Decimals.
    
    Single source of truth for decimal-backed series.
    Avoids binary floating-point artifacts by converting floats to strings first.
    
    Args:
        x: Value to convert (int, float, str, or Decimal)
    
    Returns:
        Decimal: Converted value
    
    Raises:
        TypeError: If type is not supported
    """
    if isinstance(x, Decimal):
        return x
    if isinstance(x, bool):
        raise TypeError(f"Unsupported numeric type: {type(x)}")
    if isinstance(x, int):
        return Decimal(x)
    if isinstance(x, str):
        return Decimal(x)
    if isinstance(x, float):
        return Decimal(str(x))
    raise TypeError(f"Unsupported numeric type: {type(x)}")


def F(x) -> float:
    """Float conversion counterpart of D() for double-backed series."""
    if isinstance(x, bool):
        raise TypeError(f"Unsupported numeric type: {type(x)}")
    if isinstance(x, (int, float, Decimal, str)):
        return float(x)
    raise TypeError(f"Unsupported numeric type: {type(x)}")


NUM_FACTORIES: Dict[str, NumFactory] = {
    "decimal": D,
    "double": F,
}


def num_factory(name: str) -> NumFactory:
    """Resolve a num factory by its configured name ('decimal' or 'double')."""
    try:
        return NUM_FACTORIES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown num type '{name}', expected one of {sorted(NUM_FACTORIES)}"
        ) from None


def is_number(x) -> bool:
    """True for int/float/Decimal values, excluding bools."""
    return isinstance(x, (int, float, Decimal)) and not isinstance(x, bool)


def is_finite(x) -> bool:
    """False for NaN and infinities of either backing."""
    if isinstance(x, Decimal):
        return x.is_finite()
    return math.isfinite(x)
