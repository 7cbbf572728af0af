"""
Error-propagating versions of the usual maths functions. Each takes ErrorValues and
returns a new ErrorValue whose error is the first-order (linear) propagation of the
input errors:

    f(x)        -> f(x.value) ± |f'(x.value)| * x.error
    f(x, y, ..) -> sum of |df/d(arg)| * arg.error over the arguments

Arguments outside a function's domain raise DomainError, and so does any result which
would not be finite (e.g. an unbounded derivative at the edge of a domain when the
input has an error). Where an input's error is zero its term is zero, and the
derivative isn't evaluated at all.

Functions are registered with the @errmathfunc decorator, which gets descriptions
from the docstring and promotes bare numbers passed where an ErrorValue is expected.
"""

import builtins
import dataclasses
import functools
import inspect
import logging
from typing import Callable, Dict, List, Tuple

import numpy as np
from scipy import special

from errc.errorvalue import ErrorValue
from errc.exceptions import DivisionByZero, DomainError
from errc.numeric import isNumber, resultValue
from errc.policy import ZERO_POLICY

logger = logging.getLogger(__name__)

PARAMTYPES = ('errorvalue', 'number')


@dataclasses.dataclass
class Parameter:
    name: str
    description: str
    types: Tuple[str, ...]


class errmathfunc:
    """
    Decorate a function to be a registered error propagation function. The function must
    have a docstring which starts with a description of the function, followed by one
    @param line for each parameter in the form
        @param name: types: description
    where "types" is a comma-separated list of "errorvalue" and "number".

    When the function is called, any bare number passed for a parameter which only accepts
    "errorvalue" is promoted to an ErrorValue using the default error policy of the first
    ErrorValue argument (or the Zero policy if there isn't one). Parameters which accept
    "number" get the number unchanged.
    """

    registry: Dict[str, 'errmathfunc'] = {}     # name -> function object

    name: str
    description: str
    params: List[Parameter]

    def __init__(self, func: Callable):
        self.name = func.__name__
        docstring = func.__doc__
        if docstring is None:
            raise ValueError(f"Function {self.name} has no description")

        paramdescs = {}
        paramtypes = {}
        descs = docstring.split("@param")
        # join the description into a single line so it can go into a Markdown table
        self.description = " ".join([x.strip() for x in descs[0].split('\n')]).strip()
        for d in descs[1:]:
            parts = d.strip().split(":", 2)
            if len(parts) != 3:
                raise ValueError(f"Function {self.name} has a malformed parameter description")
            paramname = parts[0].strip()
            types = tuple([x.strip() for x in parts[1].split(",")])
            for t in types:
                if t not in PARAMTYPES:
                    raise ValueError(f"Function {self.name} has a parameter {paramname} with an unknown type {t}")
            paramtypes[paramname] = types
            paramdescs[paramname] = " ".join(parts[2].split())

        self.signature = inspect.signature(func)
        self.params = []
        for k in self.signature.parameters:
            if k not in paramdescs:
                raise ValueError(f"Function {self.name} has a parameter {k} with no description")
            self.params.append(Parameter(k, paramdescs[k], paramtypes[k]))

        self.func = func
        functools.update_wrapper(self, func)
        logger.debug(f"registering error propagation function {self.name}")
        errmathfunc.registry[self.name] = self

    def __call__(self, *args, **kwargs):
        bound = self.signature.bind(*args, **kwargs)
        # the policy used to promote bare numbers comes from the first ErrorValue argument
        policy = next((v.policy for v in bound.arguments.values() if isinstance(v, ErrorValue)), ZERO_POLICY)

        for p in self.params:
            v = bound.arguments[p.name]
            if isinstance(v, ErrorValue):
                if 'errorvalue' not in p.types:
                    raise TypeError(f"{self.name}: parameter {p.name} cannot be an ErrorValue")
            elif isNumber(v):
                if 'number' not in p.types:
                    bound.arguments[p.name] = ErrorValue.fromLiteral(v, policy)
            else:
                raise TypeError(f"{self.name}: parameter {p.name} must be a number or ErrorValue, "
                                f"not {type(v).__name__}")
        return self.func(*bound.args, **bound.kwargs)

    def __repr__(self):
        return f"<errmath function {self.name}>"


def lookup(name) -> errmathfunc:
    """find a registered function by name"""
    try:
        return errmathfunc.registry[name]
    except KeyError:
        raise KeyError(f"no error propagation function called {name}")


def functionTable() -> str:
    """Markdown table of the registered functions, for documentation"""
    out = "| function | description |\n|---|---|\n"
    for name in sorted(errmathfunc.registry.keys()):
        f = errmathfunc.registry[name]
        args = ", ".join([p.name for p in f.params])
        desc = f.description.replace("|", "\\|")
        out += f"| {name}({args}) | {desc} |\n"
    return out


def _fail(name, msg):
    logger.debug(f"{name}: {msg}")
    raise DomainError(f"{name}: {msg}")


def _result(name, x: ErrorValue, n, e) -> ErrorValue:
    """Build the result of a function whose first argument was x; the result inherits
    x's policy and numeric kind"""
    if not np.isfinite(n) or not np.isfinite(e):
        _fail(name, f"result is not finite for argument {x.brief()}")
    return x.derived(resultValue(x.value, n), float(e))


def propagate(name, x: ErrorValue, fn: Callable, deriv: Callable) -> ErrorValue:
    """The generic single-argument rule: fn(x) ± |deriv(x)| * error"""
    v = np.float64(x.value)
    with np.errstate(all='ignore'):
        n = fn(v)
        e = builtins.abs(deriv(v)) * x.error if x.error != 0 else 0.0
    return _result(name, x, n, e)


# Trigonometric functions

@errmathfunc
def sin(x):
    """sine of an angle in radians
    @param x: errorvalue: the angle"""
    return propagate('sin', x, np.sin, np.cos)


@errmathfunc
def cos(x):
    """cosine of an angle in radians
    @param x: errorvalue: the angle"""
    return propagate('cos', x, np.cos, np.sin)


@errmathfunc
def tan(x):
    """tangent of an angle in radians
    @param x: errorvalue: the angle"""
    return propagate('tan', x, np.tan, lambda v: 1.0 / np.cos(v) ** 2)


@errmathfunc
def asin(x):
    """arcsine, result in radians
    @param x: errorvalue: a value in [-1, 1]"""
    if builtins.abs(x.value) > 1:
        _fail('asin', f"argument {x.value} is outside [-1, 1]")
    return propagate('asin', x, np.arcsin, lambda v: 1.0 / np.sqrt(1 - v * v))


@errmathfunc
def acos(x):
    """arccosine, result in radians
    @param x: errorvalue: a value in [-1, 1]"""
    if builtins.abs(x.value) > 1:
        _fail('acos', f"argument {x.value} is outside [-1, 1]")
    return propagate('acos', x, np.arccos, lambda v: 1.0 / np.sqrt(1 - v * v))


@errmathfunc
def atan(x):
    """arctangent, result in radians
    @param x: errorvalue: the tangent"""
    return propagate('atan', x, np.arctan, lambda v: 1.0 / (1 + v * v))


@errmathfunc
def atan2(y, x):
    """Two-argument arctangent, taken as atan(y/x) in radians, so the division rule and then
    the atan rule give the error. The result is in (-pi/2, pi/2) whatever the signs.
    @param y: errorvalue: the y coordinate
    @param x: errorvalue: the x coordinate"""
    if x.value == 0:
        logger.debug(f"atan2: x is zero in atan2({y.brief()}, {x.brief()})")
        raise DivisionByZero("atan2: x value is zero")
    q = atan(y / x)
    return _result('atan2', y, q.value, q.error)


# Hyperbolic functions

@errmathfunc
def sinh(x):
    """hyperbolic sine
    @param x: errorvalue: the argument"""
    return propagate('sinh', x, np.sinh, np.cosh)


@errmathfunc
def cosh(x):
    """hyperbolic cosine
    @param x: errorvalue: the argument"""
    return propagate('cosh', x, np.cosh, np.sinh)


@errmathfunc
def tanh(x):
    """hyperbolic tangent
    @param x: errorvalue: the argument"""
    return propagate('tanh', x, np.tanh, lambda v: 1.0 / np.cosh(v) ** 2)


@errmathfunc
def asinh(x):
    """inverse hyperbolic sine
    @param x: errorvalue: the argument"""
    return propagate('asinh', x, np.arcsinh, lambda v: 1.0 / np.sqrt(1 + v * v))


@errmathfunc
def acosh(x):
    """inverse hyperbolic cosine
    @param x: errorvalue: a value of at least 1"""
    if x.value < 1:
        _fail('acosh', f"argument {x.value} is less than 1")
    return propagate('acosh', x, np.arccosh, lambda v: 1.0 / np.sqrt(v * v - 1))


@errmathfunc
def atanh(x):
    """inverse hyperbolic tangent
    @param x: errorvalue: a value in (-1, 1)"""
    if builtins.abs(x.value) >= 1:
        _fail('atanh', f"argument {x.value} is outside (-1, 1)")
    return propagate('atanh', x, np.arctanh, lambda v: 1.0 / (1 - v * v))


# Exponentials and logarithms

@errmathfunc
def exp(x):
    """e to the power x
    @param x: errorvalue: the exponent"""
    return propagate('exp', x, np.exp, np.exp)


@errmathfunc
def expm1(x):
    """e to the power x, minus one
    @param x: errorvalue: the exponent"""
    return propagate('expm1', x, np.expm1, np.exp)


@errmathfunc
def exp2(x):
    """2 to the power x
    @param x: errorvalue: the exponent"""
    return propagate('exp2', x, np.exp2, lambda v: np.exp2(v) * np.log(2.0))


@errmathfunc
def log(x):
    """natural logarithm
    @param x: errorvalue: a positive value"""
    if x.value <= 0:
        _fail('log', f"argument {x.value} is not positive")
    return propagate('log', x, np.log, lambda v: 1.0 / v)


@errmathfunc
def log1p(x):
    """natural logarithm of 1+x. The error multiplier is 1/log(1+x), so an uncertain
    argument of zero has no finite result.
    @param x: errorvalue: a value greater than -1"""
    if x.value <= -1:
        _fail('log1p', f"argument {x.value} is not greater than -1")
    return propagate('log1p', x, np.log1p, lambda v: 1.0 / np.log1p(v))


@errmathfunc
def log10(x):
    """base 10 logarithm
    @param x: errorvalue: a positive value"""
    if x.value <= 0:
        _fail('log10', f"argument {x.value} is not positive")
    return propagate('log10', x, np.log10, lambda v: 1.0 / (v * np.log(10.0)))


@errmathfunc
def log2(x):
    """base 2 logarithm
    @param x: errorvalue: a positive value"""
    if x.value <= 0:
        _fail('log2', f"argument {x.value} is not positive")
    return propagate('log2', x, np.log2, lambda v: 1.0 / (v * np.log(2.0)))


@errmathfunc
def logn(x, n):
    """Logarithm to base n. The result keeps the precision of a floating argument; an
    integral argument gives a double precision result.
    @param x: errorvalue: a positive value
    @param n: number: the base, positive and not 1"""
    if n <= 0 or n == 1:
        _fail('logn', f"base {n} must be positive and not 1")
    if x.value <= 0:
        _fail('logn', f"argument {x.value} is not positive")
    lnn = np.log(np.float64(n))
    return propagate('logn', x, lambda v: np.log(v) / lnn, lambda v: 1.0 / (v * lnn))


# Powers and roots

@errmathfunc
def sqrt(x):
    """square root
    @param x: errorvalue: a non-negative value"""
    if x.value < 0:
        _fail('sqrt', f"argument {x.value} is negative")
    return propagate('sqrt', x, np.sqrt, lambda v: 1.0 / (2 * np.sqrt(v)))


@errmathfunc
def cbrt(x):
    """cube root; the error is error/(3*cbrt(x))
    @param x: errorvalue: the argument"""
    return propagate('cbrt', x, np.cbrt, lambda v: 1.0 / (3 * np.cbrt(v)))


@errmathfunc
def pow(base, exponent):
    """Raise base to a power. If the exponent is an ErrorValue both errors contribute:
        |y*x^(y-1)|*dx + |x^y*ln(x)|*dy
    while a bare number exponent is taken as exact and only the first term is used.
    @param base: errorvalue: the base
    @param exponent: errorvalue,number: the exponent"""
    x, dx = np.float64(base.value), base.error
    if isinstance(exponent, ErrorValue):
        y, dy = np.float64(exponent.value), exponent.error
    else:
        y, dy = np.float64(exponent), 0.0

    if x == 0 and y < 0:
        _fail('pow', "zero cannot be raised to a negative power")
    if x < 0 and not float(y).is_integer():
        _fail('pow', f"negative base {x} with non-integral exponent {y} gives a complex result")

    with np.errstate(all='ignore'):
        n = np.power(x, y)
        e = 0.0
        if dx != 0 and y != 0:
            e += builtins.abs(y * np.power(x, y - 1)) * dx
        if dy != 0:
            if x > 0:
                e += builtins.abs(n * np.log(x)) * dy
            elif x < 0:
                _fail('pow', f"negative base {x} cannot have an uncertain exponent")
            elif y == 0:
                # 0^y jumps from 1 to 0 at y=0, so there is no derivative there
                _fail('pow', "zero base with an uncertain exponent of zero")
            # otherwise x=0 and y>0: x^y*ln(x) tends to zero
    return _result('pow', base, n, e)


@errmathfunc
def hypot(x, y):
    """Length of the hypotenuse, sqrt(x^2+y^2). The error is (|x|dx + |y|dy)/sqrt(x^2+y^2).
    @param x: errorvalue: first side
    @param y: errorvalue: second side"""
    xv, yv = np.float64(x.value), np.float64(y.value)
    r = np.hypot(xv, yv)
    if r == 0:
        if x.error != 0 or y.error != 0:
            _fail('hypot', "no derivative at the origin")
        e = 0.0
    else:
        e = (builtins.abs(xv) * x.error + builtins.abs(yv) * y.error) / r
    return _result('hypot', x, r, e)


# Functions which the original library only declared. The derivatives used are
# given in each docstring.

@errmathfunc
def erf(x):
    """error function; d/dx erf(x) = 2/sqrt(pi) * exp(-x^2)
    @param x: errorvalue: the argument"""
    return propagate('erf', x, special.erf, lambda v: 2.0 / np.sqrt(np.pi) * np.exp(-v * v))


@errmathfunc
def erfc(x):
    """complementary error function; |d/dx erfc(x)| = 2/sqrt(pi) * exp(-x^2)
    @param x: errorvalue: the argument"""
    return propagate('erfc', x, special.erfc, lambda v: 2.0 / np.sqrt(np.pi) * np.exp(-v * v))


def _checkGammaPole(name, x):
    if x.value <= 0 and float(x.value).is_integer():
        _fail(name, f"gamma function has a pole at {x.value}")


@errmathfunc
def tgamma(x):
    """gamma function; d/dx gamma(x) = gamma(x) * digamma(x)
    @param x: errorvalue: any value except zero and the negative integers"""
    _checkGammaPole('tgamma', x)
    return propagate('tgamma', x, special.gamma, lambda v: special.gamma(v) * special.digamma(v))


@errmathfunc
def lgamma(x):
    """natural log of the absolute value of the gamma function; d/dx lgamma(x) = digamma(x)
    @param x: errorvalue: any value except zero and the negative integers"""
    _checkGammaPole('lgamma', x)
    return propagate('lgamma', x, special.gammaln, special.digamma)


@errmathfunc
def abs(x):
    """absolute value; |d/dx |x|| = 1 so the error passes through unchanged
    @param x: errorvalue: the argument"""
    return propagate('abs', x, np.abs, lambda v: 1.0)


@errmathfunc
def fma(x, y, z):
    """fused multiply-add x*y+z; the error is |y|dx + |x|dy + dz
    @param x: errorvalue: first factor
    @param y: errorvalue: second factor
    @param z: errorvalue: the addend"""
    xv, yv, zv = np.float64(x.value), np.float64(y.value), np.float64(z.value)
    with np.errstate(all='ignore'):
        n = xv * yv + zv
        e = builtins.abs(yv) * x.error + builtins.abs(xv) * y.error + z.error
    return _result('fma', x, n, e)
