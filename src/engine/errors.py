"""Errors raised by the rate & limit engine."""


class RateEngineError(Exception):
    """Base error class for engine errors"""


class Unauthorized(RateEngineError):
    """Caller is not the configured authority"""


class NoOracleBound(RateEngineError):
    """No base rate oracle is bound to the pool"""

    def __init__(self, pool_id) -> None:
        super().__init__(f"No base rate oracle bound for pool {pool_id!r}")
        self.pool_id = pool_id


class CollaboratorUnavailable(RateEngineError):
    """An oracle or pool read failed"""


class Overflow(RateEngineError, ArithmeticError):
    """Arithmetic result does not fit the integer width"""


class InvalidInput(RateEngineError, ValueError):
    """Argument outside its declared domain"""
