class ErrcException(Exception):
    """Base class for all errors raised by errc. Each subclass also derives from the
    matching builtin exception, so plain ValueError/ZeroDivisionError/IndexError handlers
    catch them too."""
    def __init__(self, message):
        super().__init__(message)


class DomainError(ErrcException, ValueError):
    """An argument is outside the mathematical domain of a function, or an error
    term is negative, NaN or otherwise unusable."""
    def __init__(self, message):
        super().__init__(message)


class DivisionByZero(ErrcException, ZeroDivisionError):
    """Thrown when a zero divisor turns up in a division or a relative-error formula"""
    def __init__(self, message="division by a zero-valued ErrorValue"):
        super().__init__(message)


class IndexOutOfRange(ErrcException, IndexError):
    def __init__(self, index):
        super().__init__(f"ErrorValue index must be 0 or 1, not {index!r}")


class InvalidConfiguration(ErrcException, ValueError):
    """Unknown default error mode, or custom mode asked for without a function"""
    def __init__(self, message):
        super().__init__(message)
