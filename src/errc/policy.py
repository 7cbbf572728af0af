"""Default error policies. When a bare number is combined with an ErrorValue it has to
be given an error of its own; the policy held by the ErrorValue decides what that is.

There are three kinds:
    ZERO    bare numbers are exact
    HALF    bare numbers get half a unit in their last meaningful decimal place
            (so 100 -> 50, 1 -> 0.5, 1.5 -> 0.05), modelling rounding on input
    FUNC    bare numbers get whatever a user function says

Policies are immutable values, held per-instance by ErrorValue and copied along with it.
"""

import dataclasses
from decimal import Decimal
from enum import IntEnum
from typing import Callable, Optional

from errc.exceptions import InvalidConfiguration
from errc.numeric import checkValue, isIntegral, isNumber


class ErrorMode(IntEnum):
    ZERO = 0
    HALF = 1
    FUNC = 2


def toMode(code) -> ErrorMode:
    """convert an ErrorMode or integer code into an ErrorMode, or fail with InvalidConfiguration"""
    if isinstance(code, bool):
        raise InvalidConfiguration(f"Invalid default error function code: {code}")
    try:
        return ErrorMode(code)
    except ValueError:
        raise InvalidConfiguration(f"Invalid default error function code: {code}")


def _fivePow10(p) -> float:
    # go through Decimal so that 5e-2 comes out as the float nearest 0.05
    return float(Decimal(5).scaleb(p))


def halfUnitError(x) -> float:
    """Half of one unit in the last meaningful decimal place of x.

    If x is integral, c is the number of trailing zeros and the result is 5*10^(c-1).
    Otherwise c is the number of decimal places in the shortest decimal representation
    of x, and the result is 5*10^(-c-1). Zero is treated as having no trailing zeros,
    giving 0.5.
    """
    checkValue(x)
    if isIntegral(x):
        x = int(x)
        if x == 0:
            return _fivePow10(-1)
        c = 0
        while x % 10 == 0:
            c += 1
            x //= 10
        return _fivePow10(c - 1)

    # str() gives the shortest representation which round-trips, for numpy floats too
    exponent = Decimal(str(x)).normalize().as_tuple().exponent
    # for an integral float the exponent is c (trailing zeros), otherwise it is -c
    # (decimal places). Either way the error is 5*10^(exponent-1).
    return _fivePow10(exponent - 1)


@dataclasses.dataclass(frozen=True)
class DefaultErrorPolicy:
    """How bare numbers acquire an error. Use the zero(), half() and custom() constructors
    or build one from a mode and optional function."""
    mode: ErrorMode = ErrorMode.ZERO
    func: Optional[Callable] = None

    def __post_init__(self):
        mode = toMode(self.mode)
        object.__setattr__(self, 'mode', mode)
        if mode == ErrorMode.FUNC:
            if self.func is None:
                raise InvalidConfiguration("custom default error mode requires a function")
            if not callable(self.func):
                raise InvalidConfiguration(f"default error function must be callable, not {type(self.func).__name__}")
        else:
            # the function only means anything in FUNC mode; don't keep a stale one around
            object.__setattr__(self, 'func', None)

    @staticmethod
    def zero():
        return DefaultErrorPolicy(ErrorMode.ZERO)

    @staticmethod
    def half():
        return DefaultErrorPolicy(ErrorMode.HALF)

    @staticmethod
    def custom(fn):
        return DefaultErrorPolicy(ErrorMode.FUNC, fn)

    def errorFor(self, x) -> float:
        """the error a bare number x acquires under this policy"""
        checkValue(x)
        if self.mode == ErrorMode.ZERO:
            return 0.0
        elif self.mode == ErrorMode.HALF:
            return halfUnitError(x)
        else:
            e = self.func(x)
            if not isNumber(e):
                raise TypeError(f"default error function returned {type(e).__name__}, not a number")
            return float(e)

    def __str__(self):
        if self.mode == ErrorMode.FUNC:
            return f"FUNC({getattr(self.func, '__name__', repr(self.func))})"
        return self.mode.name


ZERO_POLICY = DefaultErrorPolicy.zero()
