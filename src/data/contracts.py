"""Minimal ABIs for reading lending pools and base rate oracles on-chain."""

# ---------------------------------------------------------------------------
# Minimal ABIs: only the view functions we call
# ---------------------------------------------------------------------------

POOL_ABI = [
    {
        "inputs": [],
        "name": "liquidRatio",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "poolValue",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
]

BASE_RATE_ORACLE_ABI = [
    {
        "inputs": [],
        "name": "getWeeklyAPY",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]
