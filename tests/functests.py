"""
A table of error propagation function tests, used by uncertainty/test_funcs.py.
Expected results are written as expressions in the derivative so it's obvious where
they come from; a few are worked by hand (see the comments).
"""

import dataclasses
import math
from typing import Tuple, Any

from errc import ErrorValue


@dataclasses.dataclass
class FuncTest:
    """A test of a function. Arguments are (value, error) tuples, which become ErrorValues,
    or bare numbers which are passed unchanged."""
    func: str  # name of function in errmath
    args: Tuple[Any, ...]  # arguments
    exp: Tuple[float, float]  # expected value and error

    def makeArgs(self):
        return [ErrorValue(*a) if isinstance(a, tuple) else a for a in self.args]

    def __str__(self):
        """ASCII-safe string used for test names"""
        args = ",".join([f"{a[0]}|{a[1]}" if isinstance(a, tuple) else str(a) for a in self.args])
        return f"{self.func}({args})"


LN2 = math.log(2)
LN10 = math.log(10)

func_tests = [
    # |cos(0)| = 1, so the error passes straight through
    FuncTest("sin", ((0, 0.1),), (0, 0.1)),
    FuncTest("sin", ((2, 0.1),), (math.sin(2), abs(math.cos(2)) * 0.1)),
    FuncTest("sin", ((-1.2, 0.2),), (math.sin(-1.2), abs(math.cos(-1.2)) * 0.2)),
    FuncTest("cos", ((0, 0.1),), (1, 0)),
    FuncTest("cos", ((2, 0.1),), (math.cos(2), abs(math.sin(2)) * 0.1)),
    FuncTest("tan", ((2, 0.1),), (math.tan(2), 0.1 / math.cos(2) ** 2)),
    FuncTest("tan", ((-2, 0.1),), (math.tan(-2), 0.1 / math.cos(-2) ** 2)),
    FuncTest("asin", ((0.5, 0.01),), (math.asin(0.5), 0.01 / math.sqrt(0.75))),
    FuncTest("asin", ((1, 0),), (math.pi / 2, 0)),
    FuncTest("acos", ((-0.5, 0.01),), (math.acos(-0.5), 0.01 / math.sqrt(0.75))),
    FuncTest("atan", ((1, 0.1),), (math.pi / 4, 0.05)),
    FuncTest("atan", ((-3, 0.2),), (math.atan(-3), 0.2 / 10)),
    # atan(1/1): division gives 1 ± 0.2, then atan gives 0.2/2
    FuncTest("atan2", ((1, 0.1), (1, 0.1)), (math.pi / 4, 0.1)),
    # no quadrant correction: atan(1/-1)
    FuncTest("atan2", ((1, 0.1), (-1, 0.1)), (-math.pi / 4, 0.1)),

    FuncTest("sinh", ((1, 0.1),), (math.sinh(1), math.cosh(1) * 0.1)),
    FuncTest("cosh", ((-1, 0.1),), (math.cosh(-1), math.sinh(1) * 0.1)),
    FuncTest("tanh", ((0.5, 0.1),), (math.tanh(0.5), 0.1 / math.cosh(0.5) ** 2)),
    FuncTest("asinh", ((2, 0.1),), (math.asinh(2), 0.1 / math.sqrt(5))),
    FuncTest("acosh", ((2, 0.1),), (math.acosh(2), 0.1 / math.sqrt(3))),
    FuncTest("atanh", ((0.5, 0.1),), (math.atanh(0.5), 0.1 / 0.75)),

    FuncTest("exp", ((0, 0.1),), (1, 0.1)),
    FuncTest("exp", ((2, 0.1),), (math.exp(2), math.exp(2) * 0.1)),
    FuncTest("expm1", ((1, 0.1),), (math.expm1(1), math.exp(1) * 0.1)),
    FuncTest("exp2", ((3, 0.1),), (8, 8 * LN2 * 0.1)),
    FuncTest("log", ((2, 0.1),), (math.log(2), 0.05)),
    FuncTest("log", ((math.e, 0),), (1, 0)),
    FuncTest("log1p", ((1, 0.1),), (math.log(2), 0.1 / LN2)),
    FuncTest("log10", ((100, 1),), (2, 1 / (100 * LN10))),
    FuncTest("log2", ((8, 0.5),), (3, 0.5 / (8 * LN2))),
    FuncTest("logn", ((9.0, 0.3), 3), (2, 0.3 / (9 * math.log(3)))),
    FuncTest("logn", ((8, 0.5), 2), (3, 0.5 / (8 * LN2))),

    FuncTest("sqrt", ((4, 0.1),), (2, 0.025)),
    FuncTest("sqrt", ((2, 0.1),), (math.sqrt(2), 0.1 / (2 * math.sqrt(2)))),
    FuncTest("sqrt", ((0, 0),), (0, 0)),
    FuncTest("cbrt", ((8, 0.3),), (2, 0.05)),
    FuncTest("cbrt", ((-27, 0.9),), (-3, 0.1)),

    # |3 * 2^2| * 0.1 = 1.2
    FuncTest("pow", ((2.0, 0.1), 3), (8.0, 1.2)),
    FuncTest("pow", ((-2.0, 0.1), 3), (-8.0, 1.2)),
    FuncTest("pow", ((4.0, 0.2), 0.5), (2.0, 0.05)),
    FuncTest("pow", ((2.0, 0.1), 0), (1.0, 0)),
    FuncTest("pow", ((0.0, 0.1), 1), (0.0, 0.1)),
    FuncTest("pow", ((0.0, 0.1), 2), (0.0, 0.0)),
    # |3 * 2^2| * 0.3 + |8 * ln 2| * 0.2
    FuncTest("pow", ((2.0, 0.3), (3.0, 0.2)), (8.0, 3.6 + 8 * LN2 * 0.2)),
    FuncTest("pow", ((2.0, 0.2), (3.0, 0.3)), (8.0, 2.4 + 8 * LN2 * 0.3)),
    FuncTest("pow", ((0.0, 0.0), (2.0, 0.5)), (0.0, 0.0)),

    # (3*0.1 + 4*0.2)/5
    FuncTest("hypot", ((3, 0.1), (4, 0.2)), (5, 0.22)),
    FuncTest("hypot", ((-3, 0.1), (4, 0.2)), (5, 0.22)),
    FuncTest("hypot", ((0, 0), (0, 0)), (0, 0)),

    FuncTest("erf", ((0, 0.1),), (0, 0.2 / math.sqrt(math.pi))),
    FuncTest("erf", ((1, 0.1),), (math.erf(1), 0.2 / math.sqrt(math.pi) * math.exp(-1))),
    FuncTest("erfc", ((1, 0.1),), (math.erfc(1), 0.2 / math.sqrt(math.pi) * math.exp(-1))),
    # digamma(1) is minus the Euler-Mascheroni constant
    FuncTest("tgamma", ((1, 0.1),), (1, 0.0577215664901533)),
    FuncTest("tgamma", ((5, 0.1),), (24, 24 * (25 / 12 - 0.5772156649015329) * 0.1)),
    FuncTest("lgamma", ((1, 0.1),), (0, 0.0577215664901533)),
    FuncTest("lgamma", ((5, 0.1),), (math.lgamma(5), (25 / 12 - 0.5772156649015329) * 0.1)),
    FuncTest("abs", ((-4.321, 0.12),), (4.321, 0.12)),
    FuncTest("abs", ((4.321, 0.12),), (4.321, 0.12)),
    # 2*3 + 1; |3|*0.1 + |2|*0.2 + 0.3
    FuncTest("fma", ((2, 0.1), (3, 0.2), (1, 0.3)), (7, 1.0)),
    FuncTest("fma", ((-2, 0.1), (3, 0.2), (1, 0.3)), (-5, 1.0)),
]
