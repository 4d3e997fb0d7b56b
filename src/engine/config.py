"""Engine configuration and the authority-gated store that owns it.

Field widths (maximum accepted value):

- uint8 (255): utilization_adjustment_power, score_floor
- uint16 (65535): limit_adjustment_power, an exponent of at most 6.5535 that
  keeps the exact score curve cheap to evaluate
- uint32 (4294967295): every other coefficient and cap

No range checks are applied beyond the widths: the authority is trusted.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, fields, replace
from typing import Any, Hashable

from src.engine import events
from src.engine.constants import MAX_RATE_CAP
from src.engine.errors import InvalidInput, NoOracleBound, Unauthorized
from src.engine.events import ChangeNotifier, ConfigObserver
from src.engine.fixed_point import check_uint

logger = logging.getLogger(__name__)

_WIDTHS: dict[str, int] = {
    "risk_premium": 32,
    "credit_adjustment_coefficient": 32,
    "utilization_adjustment_coefficient": 32,
    "utilization_adjustment_power": 8,
    "fixed_term_loan_adjustment_coefficient": 32,
    "max_rate": 32,
    "score_floor": 8,
    "limit_adjustment_power": 16,
    "tvl_limit_coefficient": 32,
    "pool_value_limit_coefficient": 32,
}


def _validate_widths(obj: Any) -> None:
    for f in fields(obj):
        bits = _WIDTHS.get(f.name)
        if bits is not None:
            check_uint(getattr(obj, f.name), bits, f.name)


@dataclass(frozen=True)
class BorrowLimitConfig:
    """Borrow limit parameters.

    Attributes:
        score_floor: Scores strictly below this get a zero limit.
        limit_adjustment_power: Exponent of the score curve in bps (7500 = 0.75).
        tvl_limit_coefficient: Share of protocol TVL a borrower may draw, bps.
        pool_value_limit_coefficient: Share of a single pool's value, bps.
    """

    score_floor: int = 40
    limit_adjustment_power: int = 7500
    tvl_limit_coefficient: int = 1500
    pool_value_limit_coefficient: int = 1500

    def __post_init__(self) -> None:
        _validate_widths(self)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (
            self.score_floor,
            self.limit_adjustment_power,
            self.tvl_limit_coefficient,
            self.pool_value_limit_coefficient,
        )


@dataclass(frozen=True)
class RateConfig:
    """Immutable snapshot of every tunable coefficient."""

    risk_premium: int = 200
    credit_adjustment_coefficient: int = 1000
    utilization_adjustment_coefficient: int = 50
    utilization_adjustment_power: int = 2
    fixed_term_loan_adjustment_coefficient: int = 25
    borrow_limit: BorrowLimitConfig = field(default_factory=BorrowLimitConfig)
    max_rate: int = MAX_RATE_CAP

    def __post_init__(self) -> None:
        _validate_widths(self)
        if not isinstance(self.borrow_limit, BorrowLimitConfig):
            raise InvalidInput("borrow_limit must be a BorrowLimitConfig")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RateConfig":
        """Build a config from a plain mapping; missing keys take defaults."""
        data = dict(data)
        borrow_limit = data.pop("borrow_limit", None)
        unknown = set(data) - {f.name for f in fields(cls)}
        if unknown:
            raise InvalidInput(f"Unknown config keys: {sorted(unknown)}")
        if isinstance(borrow_limit, dict):
            borrow_limit = BorrowLimitConfig(**borrow_limit)
        if borrow_limit is not None:
            data["borrow_limit"] = borrow_limit
        return cls(**data)


def require_authority(caller: Hashable, authority: Hashable) -> None:
    """Raise ``Unauthorized`` unless *caller* is the configured authority."""
    if caller != authority:
        raise Unauthorized(f"caller {caller!r} is not the authority")


class ConfigStore:
    """Owns the live ``RateConfig`` and the pool -> oracle bindings.

    Reads return the current immutable snapshot and never block. Writes are
    serialized by a re-entrant lock, validated and installed as a whole new
    snapshot. Observers are notified before the lock is released, so they see
    changes in the order the snapshots were installed.
    """

    def __init__(
        self,
        authority: Hashable,
        config: RateConfig | None = None,
        observers: list[ConfigObserver] | None = None,
    ) -> None:
        self._authority = authority
        self._config = config if config is not None else RateConfig()
        self._oracles: dict[Hashable, Hashable] = {}
        self._lock = threading.RLock()
        self.notifier = ChangeNotifier(observers)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def authority(self) -> Hashable:
        return self._authority

    def snapshot(self) -> RateConfig:
        return self._config

    def base_rate_oracle(self, pool_id: Hashable) -> Hashable | None:
        return self._oracles.get(pool_id)

    def require_oracle(self, pool_id: Hashable) -> Hashable:
        oracle_id = self._oracles.get(pool_id)
        if oracle_id is None:
            raise NoOracleBound(pool_id)
        return oracle_id

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _update(self, caller: Hashable, event: str, **changes: Any) -> None:
        with self._lock:
            require_authority(caller, self._authority)
            self._config = replace(self._config, **changes)
            values = tuple(changes.values())
            logger.info("Config updated: %s -> %s", event, values)
            self.notifier.emit(event, *values)

    def set_risk_premium(self, caller: Hashable, bps: int) -> None:
        self._update(caller, events.RISK_PREMIUM_CHANGED, risk_premium=bps)

    def set_credit_adjustment_coefficient(self, caller: Hashable, coefficient: int) -> None:
        self._update(
            caller,
            events.CREDIT_ADJUSTMENT_COEFFICIENT_CHANGED,
            credit_adjustment_coefficient=coefficient,
        )

    def set_utilization_adjustment_coefficient(self, caller: Hashable, coefficient: int) -> None:
        self._update(
            caller,
            events.UTILIZATION_ADJUSTMENT_COEFFICIENT_CHANGED,
            utilization_adjustment_coefficient=coefficient,
        )

    def set_utilization_adjustment_power(self, caller: Hashable, power: int) -> None:
        self._update(
            caller,
            events.UTILIZATION_ADJUSTMENT_POWER_CHANGED,
            utilization_adjustment_power=power,
        )

    def set_fixed_term_loan_adjustment_coefficient(self, caller: Hashable, bps: int) -> None:
        self._update(
            caller,
            events.FIXED_TERM_LOAN_ADJUSTMENT_COEFFICIENT_CHANGED,
            fixed_term_loan_adjustment_coefficient=bps,
        )

    def set_borrow_limit_config(
        self,
        caller: Hashable,
        score_floor: int,
        limit_adjustment_power: int,
        tvl_limit_coefficient: int,
        pool_value_limit_coefficient: int,
    ) -> None:
        with self._lock:
            require_authority(caller, self._authority)
            limit_config = BorrowLimitConfig(
                score_floor=score_floor,
                limit_adjustment_power=limit_adjustment_power,
                tvl_limit_coefficient=tvl_limit_coefficient,
                pool_value_limit_coefficient=pool_value_limit_coefficient,
            )
            self._config = replace(self._config, borrow_limit=limit_config)
            logger.info("Config updated: %s -> %s", events.BORROW_LIMIT_CONFIG_CHANGED, limit_config)
            self.notifier.emit(events.BORROW_LIMIT_CONFIG_CHANGED, *limit_config.as_tuple())

    def set_base_rate_oracle(
        self, caller: Hashable, pool_id: Hashable, oracle_id: Hashable
    ) -> None:
        with self._lock:
            require_authority(caller, self._authority)
            self._oracles = {**self._oracles, pool_id: oracle_id}
            logger.info("Base rate oracle for %r set to %r", pool_id, oracle_id)
            self.notifier.emit(events.BASE_RATE_ORACLE_CHANGED, pool_id, oracle_id)

    def transfer_authority(self, caller: Hashable, new_authority: Hashable) -> None:
        with self._lock:
            require_authority(caller, self._authority)
            previous, self._authority = self._authority, new_authority
            logger.info("Authority transferred from %r to %r", previous, new_authority)
            self.notifier.emit(events.AUTHORITY_TRANSFERRED, previous, new_authority)
