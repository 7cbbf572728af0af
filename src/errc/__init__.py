"""errc - values with error bounds, and first-order propagation of those bounds through
arithmetic and the usual maths functions.

    >>> from errc import ErrorValue, errmath
    >>> x = ErrorValue(2.0, 0.1)
    >>> errmath.pow(x, 3)
    8 ± 1.2
"""
import logging
import pkgutil

from errc import config

logger = logging.getLogger(__name__)
logger.setLevel(config.getLogLevel())

# get version data, which consists of something like
#   0.0.0  ISO-DATE CODE NAME
tmp = pkgutil.get_data('errc', 'VERSION.txt')
if tmp is None:
    raise ValueError('cannot find VERSION.txt')

# this string gets turned into errc.__fullversion__, while errc.__version__
# is just the number part.

__fullversion__ = tmp.decode('utf-8').strip()
__version__ = __fullversion__.split(maxsplit=1)[0]

from errc.exceptions import ErrcException, DomainError, DivisionByZero, IndexOutOfRange, InvalidConfiguration  # noqa: E402
from errc.policy import ErrorMode, DefaultErrorPolicy, halfUnitError  # noqa: E402
from errc.errorvalue import ErrorValue  # noqa: E402
from errc import errmath  # noqa: E402

__all__ = ['ErrorValue', 'ErrorMode', 'DefaultErrorPolicy', 'halfUnitError', 'errmath',
           'ErrcException', 'DomainError', 'DivisionByZero', 'IndexOutOfRange', 'InvalidConfiguration']
