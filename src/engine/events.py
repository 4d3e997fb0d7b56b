"""Change notifications emitted after successful configuration updates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

RISK_PREMIUM_CHANGED = "RiskPremiumChanged"
CREDIT_ADJUSTMENT_COEFFICIENT_CHANGED = "CreditAdjustmentCoefficientChanged"
UTILIZATION_ADJUSTMENT_COEFFICIENT_CHANGED = "UtilizationAdjustmentCoefficientChanged"
UTILIZATION_ADJUSTMENT_POWER_CHANGED = "UtilizationAdjustmentPowerChanged"
FIXED_TERM_LOAN_ADJUSTMENT_COEFFICIENT_CHANGED = "FixedTermLoanAdjustmentCoefficientChanged"
BORROW_LIMIT_CONFIG_CHANGED = "BorrowLimitConfigChanged"
BASE_RATE_ORACLE_CHANGED = "BaseRateOracleChanged"
AUTHORITY_TRANSFERRED = "AuthorityTransferred"


@dataclass(frozen=True)
class ConfigChange:
    """A named configuration change and the new value(s)."""

    name: str
    values: tuple[Any, ...]


ConfigObserver = Callable[[ConfigChange], None]


def log_change(change: ConfigChange) -> None:
    """Observer that writes every change to the log."""
    logger.info("%s%r", change.name, change.values)


class ChangeNotifier:
    """Fan-out of change notifications to registered observers.

    Observers run synchronously in registration order. A failing observer is
    logged and does not prevent delivery to the others; the change itself
    has already been applied.
    """

    def __init__(self, observers: list[ConfigObserver] | None = None) -> None:
        self._observers: list[ConfigObserver] = list(observers or [])

    def subscribe(self, observer: ConfigObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: ConfigObserver) -> None:
        self._observers.remove(observer)

    def emit(self, name: str, *values: Any) -> ConfigChange:
        change = ConfigChange(name=name, values=values)
        for observer in list(self._observers):
            try:
                observer(change)
            except Exception:
                logger.warning(
                    "Observer %r failed for %s", observer, name, exc_info=True
                )
        return change
