"""The kinds of number an ErrorValue can hold, and what kind a function result should
be given its input. Values may be integral or floating but never boolean; results of
the function library keep the precision of a floating input (so float32 stays float32)
and promote integral input to double precision."""

import math
from enum import Enum, auto
from numbers import Integral, Real

import numpy as np

from errc.exceptions import DomainError


class NumericKind(Enum):
    INTEGRAL = auto()
    FLOATING = auto()


def isNumber(v) -> bool:
    """true if v can be the value of an ErrorValue (or a literal combined with one)"""
    return isinstance(v, Real) and not isinstance(v, (bool, np.bool_))


def checkValue(v):
    """Make sure v is an acceptable value and return it unchanged. Floating values must
    also be finite; NaN or infinity here means some arithmetic has overflowed or gone
    undefined."""
    if not isNumber(v):
        raise TypeError(f"ErrorValue value must be a real number but not a bool, not {type(v).__name__}")
    if not isinstance(v, Integral) and not math.isfinite(v):
        raise DomainError(f"ErrorValue value must be finite, got {v}")
    return v


def numericKind(v) -> NumericKind:
    if isinstance(v, Integral):
        return NumericKind.INTEGRAL
    return NumericKind.FLOATING


def isIntegral(v) -> bool:
    return numericKind(v) == NumericKind.INTEGRAL


def resultValue(v, n):
    """Convert a function result n to the kind implied by the input value v."""
    if numericKind(v) == NumericKind.FLOATING and isinstance(v, np.floating):
        return type(v)(n)
    # python floats, and anything integral, come out as double precision
    return float(n)
