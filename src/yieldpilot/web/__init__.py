"""Web boundary layer.

All on-chain operations in this layer are read-only or prepare data for
client-side signing (non-custodial). The server never holds a private key.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
