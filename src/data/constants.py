"""Pool identifiers and representative pool snapshots."""

from src.data.interfaces import PoolValue

# Pool symbols
USDC_POOL = "tfUSDC"
USDT_POOL = "tfUSDT"
TUSD_POOL = "tfTUSD"

# Oracle identifiers
USDC_ORACLE = "usdc-base-rate"
USDT_ORACLE = "usdt-base-rate"
TUSD_ORACLE = "tusd-base-rate"

# Decimals
USDC_DECIMALS = 6
USDT_DECIMALS = 6
TUSD_DECIMALS = 18

POOL_ORACLES: dict[str, str] = {
    USDC_POOL: USDC_ORACLE,
    USDT_POOL: USDT_ORACLE,
    TUSD_POOL: TUSD_ORACLE,
}

# Weekly base rates in bps (representative snapshot)
DEFAULT_WEEKLY_RATES: dict[str, int] = {
    USDC_ORACLE: 300,
    USDT_ORACLE: 350,
    TUSD_ORACLE: 280,
}

# (liquidity ratio bps, pool value)
DEFAULT_POOLS: dict[str, tuple[int, PoolValue]] = {
    USDC_POOL: (4_000, PoolValue(45_000_000 * 10**USDC_DECIMALS, USDC_DECIMALS)),
    USDT_POOL: (3_000, PoolValue(12_000_000 * 10**USDT_DECIMALS, USDT_DECIMALS)),
    TUSD_POOL: (5_500, PoolValue(20_000_000 * 10**TUSD_DECIMALS, TUSD_DECIMALS)),
}
