"""Fixed-point units and protocol-wide constants for the rate engine."""

# Basis points (1e4 scale): 10_000 = 100%
BPS = 10_000

# Global ceiling for any rate or rate component (500%)
MAX_RATE_CAP = 50_000

# Borrower scores are uint8
MAX_CREDIT_SCORE = 255

# Credit lines are quoted in 18-decimal normalized units
NORMALIZED_DECIMALS = 18

# Fixed-term adjustment bucket
DAY = 24 * 60 * 60
TERM_BUCKET_SECONDS = 30 * DAY

# Integer widths
UINT8_MAX = 2**8 - 1
UINT16_MAX = 2**16 - 1
UINT32_MAX = 2**32 - 1
UINT256_MAX = 2**256 - 1
