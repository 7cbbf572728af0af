"""A value with an error (uncertainty) bound, and how arithmetic propagates that error.

Errors here are worst-case linear bounds rather than standard deviations: operands are
assumed independent, and the contributions of each are added rather than combined in
quadrature.

Note that ErrorValues are ordered and compared by their value alone. Two values with the
same value but different errors compare equal; use approxeq() to compare both parts.
"""

import logging
import math

import numpy as np

from errc import config
from errc.exceptions import DivisionByZero, DomainError, IndexOutOfRange, InvalidConfiguration
from errc.numeric import checkValue, isNumber
from errc.policy import DefaultErrorPolicy, ErrorMode, toMode, ZERO_POLICY

logger = logging.getLogger(__name__)


# The propagation rules themselves, kept separate from ErrorValue so they can be
# used on plain numbers.

def add_sub_err(ea, eb):
    """For addition and subtraction, errors add"""
    return ea + eb


def mul_err(a, ea, b, eb):
    """Multiplication: relative errors add, so the error is |ab|(ea/|a| + eb/|b|).
    Multiplying out gives this form, which is the same when neither value is zero and
    is still defined when one is."""
    return ea * abs(b) + eb * abs(a)


def div_err(a, ea, b, eb):
    """Division: again relative errors add, |a/b|(ea/|a| + eb/|b|). As with multiplication
    this is multiplied out so that a zero dividend is fine; a zero divisor is not, and
    must be caught by the caller."""
    return ea / abs(b) + eb * abs(a) / (b * b)


def checkError(e) -> float:
    """Convert an error to float, making sure it is a usable error term"""
    if not isNumber(e):
        raise TypeError(f"ErrorValue error must be a real number, not {type(e).__name__}")
    e = float(e)
    if not math.isfinite(e):
        raise DomainError(f"ErrorValue error must be finite, got {e}")
    if e < 0:
        raise DomainError(f"ErrorValue error must not be negative, got {e}")
    return e


def _formatNumber(x, figs):
    if isinstance(x, (int, np.integer)):
        return str(x)
    return f"{x:.{figs}g}"


class ErrorValue:
    """A value together with a symmetric error bound, and a policy for the errors bare
    numbers acquire when they are combined with it.

    value = the quantity, an int or float (or numpy equivalent) but not a bool
    error = the error bound, a non-negative float
    policy = a DefaultErrorPolicy; the Zero policy if not given
    """

    def __init__(self, value=0, error=0.0, policy: DefaultErrorPolicy = None):
        self._value = checkValue(value)
        self._error = checkError(error)
        if policy is not None and not isinstance(policy, DefaultErrorPolicy):
            raise InvalidConfiguration(f"expected a DefaultErrorPolicy, got {type(policy).__name__}")
        self._policy = ZERO_POLICY if policy is None else policy

    @classmethod
    def fromLiteral(cls, x, policy: DefaultErrorPolicy = None):
        """Promote a bare number to an ErrorValue, with an error given by the policy
        (which is also carried by the result)"""
        policy = ZERO_POLICY if policy is None else policy
        return cls(x, policy.errorFor(x), policy)

    def promote(self, x):
        """Turn a bare number into an ErrorValue using this value's default error policy"""
        return ErrorValue.fromLiteral(x, self._policy)

    def derived(self, value, error):
        """A new value produced from this one, which inherits the policy"""
        return ErrorValue(value, error, self._policy)

    def copy(self):
        return ErrorValue(self._value, self._error, self._policy)

    __copy__ = copy

    def __deepcopy__(self, memo):
        return self.copy()

    # properties; setting either one checks it

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, v):
        self._value = checkValue(v)

    @property
    def error(self) -> float:
        return self._error

    @error.setter
    def error(self, e):
        self._error = checkError(e)

    @property
    def policy(self) -> DefaultErrorPolicy:
        return self._policy

    def set(self, value, error):
        """Set both value and error. Nothing is changed if either is invalid."""
        value = checkValue(value)
        error = checkError(error)
        self._value, self._error = value, error

    def _coerce(self, other):
        """Convert the other operand of a binary operation, returning None if we can't"""
        if isinstance(other, ErrorValue):
            return other
        elif isNumber(other):
            return self.promote(other)
        return None

    # Compound assignment. Each of these computes the new value and error from the old
    # values of both operands before changing anything, so that a failure leaves the
    # receiver untouched, and "a *= a" uses the original a on both sides.

    def __iadd__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        self.set(self._value + other._value, add_sub_err(self._error, other._error))
        return self

    def __isub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        self.set(self._value - other._value, add_sub_err(self._error, other._error))
        return self

    def __imul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        a, ea, b, eb = self._value, self._error, other._value, other._error
        self.set(a * b, mul_err(a, ea, b, eb))
        return self

    def __itruediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        a, ea, b, eb = self._value, self._error, other._value, other._error
        if b == 0:
            logger.debug(f"division of {self} by zero-valued {other}")
            raise DivisionByZero()
        self.set(a / b, div_err(a, ea, b, eb))
        return self

    # Binary operations are done by copying and then using the compound operators.

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        res = self.copy()
        res += other
        return res

    def __radd__(self, other):
        if not isNumber(other):
            return NotImplemented
        return self.promote(other) + self

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        res = self.copy()
        res -= other
        return res

    def __rsub__(self, other):
        if not isNumber(other):
            return NotImplemented
        return self.promote(other) - self

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        res = self.copy()
        res *= other
        return res

    def __rmul__(self, other):
        if not isNumber(other):
            return NotImplemented
        return self.promote(other) * self

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        res = self.copy()
        res /= other
        return res

    def __rtruediv__(self, other):
        if not isNumber(other):
            return NotImplemented
        return self.promote(other) / self

    def __pow__(self, power, modulo=None):
        """a**b for an uncertain b, or a**n for a literal n which is taken as exact"""
        if modulo is not None:
            return NotImplemented
        if not isinstance(power, ErrorValue) and not isNumber(power):
            return NotImplemented
        from errc import errmath
        return errmath.pow(self, power)

    def __rpow__(self, other):
        if not isNumber(other):
            return NotImplemented
        from errc import errmath
        return errmath.pow(self.promote(other), self)

    def __pos__(self):
        return self.copy()

    def __neg__(self):
        return self.derived(-self._value, self._error)

    def __abs__(self):
        from errc import errmath
        return errmath.abs(self)

    # Increment and decrement, adding or subtracting a literal 1 which gets its error
    # from the policy

    def inc(self):
        """add one in place, returning self"""
        self += 1
        return self

    def dec(self):
        """subtract one in place, returning self"""
        self -= 1
        return self

    def postInc(self):
        """add one in place, returning a copy of the value from before the increment"""
        tmp = self.copy()
        self.inc()
        return tmp

    def postDec(self):
        """subtract one in place, returning a copy of the value from before the decrement"""
        tmp = self.copy()
        self.dec()
        return tmp

    # Comparison is by value only

    def _cmpvalue(self, other):
        if isinstance(other, ErrorValue):
            return other._value
        elif isNumber(other):
            return other
        return None

    def __eq__(self, other):
        v = self._cmpvalue(other)
        if v is None:
            return NotImplemented
        return self._value == v

    def __lt__(self, other):
        v = self._cmpvalue(other)
        if v is None:
            return NotImplemented
        return self._value < v

    def __le__(self, other):
        v = self._cmpvalue(other)
        if v is None:
            return NotImplemented
        return self._value <= v

    def __gt__(self, other):
        v = self._cmpvalue(other)
        if v is None:
            return NotImplemented
        return self._value > v

    def __ge__(self, other):
        v = self._cmpvalue(other)
        if v is None:
            return NotImplemented
        return self._value >= v

    # mutable, so can't be hashed
    __hash__ = None

    def approxeq(self, other, rel=1e-6, abs_tol=1e-12):
        """Compare both value and error to within a tolerance (used in tests)"""
        return math.isclose(self._value, other.value, rel_tol=rel, abs_tol=abs_tol) and \
            math.isclose(self._error, other.error, rel_tol=rel, abs_tol=abs_tol)

    def __getitem__(self, i):
        """[0] is the value and [1] the error, both as floats"""
        if isinstance(i, (int, np.integer)) and not isinstance(i, bool):
            if i == 0:
                return float(self._value)
            elif i == 1:
                return self._error
        raise IndexOutOfRange(i)

    def __float__(self):
        return float(self._value)

    def __int__(self):
        return int(self._value)

    def min(self) -> float:
        """lower bound, value - error"""
        return self._value - self._error

    def max(self) -> float:
        """upper bound, value + error"""
        return self._value + self._error

    # default error policy

    def setDefaultErrorCalculationMethod(self, mode, fn=None):
        """Set how bare numbers combined with this value get their error.
            ErrorMode.ZERO (0) - they are exact, fn is ignored
            ErrorMode.HALF (1) - half a unit in their last decimal place, fn is ignored
            ErrorMode.FUNC (2) - fn(number), where fn must be given
        Anything else raises InvalidConfiguration, leaving the current policy in place."""
        mode = toMode(mode)
        if mode == ErrorMode.FUNC and fn is None:
            raise InvalidConfiguration("custom default error mode requires a function")
        self._policy = DefaultErrorPolicy(mode, fn if mode == ErrorMode.FUNC else None)
        logger.debug(f"default error policy set to {self._policy}")

    def setPolicy(self, policy: DefaultErrorPolicy):
        if not isinstance(policy, DefaultErrorPolicy):
            raise InvalidConfiguration(f"expected a DefaultErrorPolicy, got {type(policy).__name__}")
        self._policy = policy
        logger.debug(f"default error policy set to {self._policy}")

    def getDefaultErrorCalculationMethod(self) -> ErrorMode:
        return self._policy.mode

    def getDefaultErrorCalcFunction(self):
        """the custom error function, or None if the policy isn't FUNC"""
        if self._policy.mode != ErrorMode.FUNC:
            return None
        return self._policy.func

    # string output

    def sigfigs(self, figs):
        """a string representation to a given number of significant figures"""
        pm = config.getPlusMinus()
        return f"{_formatNumber(self._value, figs)} {pm} {_formatNumber(self._error, figs)}"

    def __str__(self):
        return self.sigfigs(config.getSigFigs())

    def __repr__(self):
        return self.__str__()

    def brief(self):
        """Very brief ASCII-safe representation used in e.g. test names"""
        return f"{self._value}|{self._error}"
