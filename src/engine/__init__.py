"""Risk-based rate and borrow limit engine for lending pools."""

from src.engine.config import BorrowLimitConfig, ConfigStore, RateConfig
from src.engine.errors import (
    CollaboratorUnavailable,
    InvalidInput,
    NoOracleBound,
    Overflow,
    RateEngineError,
    Unauthorized,
)
from src.engine.rate_engine import RateEngine

__all__ = [
    "BorrowLimitConfig",
    "CollaboratorUnavailable",
    "ConfigStore",
    "InvalidInput",
    "NoOracleBound",
    "Overflow",
    "RateConfig",
    "RateEngine",
    "RateEngineError",
    "Unauthorized",
]
