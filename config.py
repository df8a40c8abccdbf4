"""
Configuration settings for the GameFactory client.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


DEFAULT_RPC_URL = "https://spicy-rpc.chiliz.com/"  # Chiliz Spicy testnet
DEFAULT_FACTORY_ADDRESS = "0x85E433c027F2438375ce9eBA1C42A8CFFDC2CA5c"
DEFAULT_GAS_LIMIT = 3_000_000


@dataclass
class FactoryConfig:
    """Client configuration settings."""

    # Signing key, never printed
    private_key: str = field(repr=False)

    # Blockchain settings
    rpc_url: str = DEFAULT_RPC_URL
    factory_address: str = DEFAULT_FACTORY_ADDRESS
    abi_path: Optional[str] = None  # Plain ABI list or Foundry artifact; bundled ABI when unset
    use_poa_middleware: bool = True

    # Transaction settings
    gas_limit: int = DEFAULT_GAS_LIMIT  # Fixed, padded well above typical estimates
    receipt_timeout_seconds: int = 120

    # Display settings
    currency_symbol: str = "CHZ"

    @classmethod
    def from_env(cls) -> "FactoryConfig":
        """Create config from environment variables."""
        # Normalize private key to ensure it has 0x prefix
        private_key = os.environ["PRIVATE_KEY"].strip()
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key

        poa_flag = os.getenv("GAME_FACTORY_POA", "1").strip().lower()

        return cls(
            private_key=private_key,
            rpc_url=os.getenv("GAME_FACTORY_RPC_URL", DEFAULT_RPC_URL),
            factory_address=os.getenv("GAME_FACTORY_ADDRESS", DEFAULT_FACTORY_ADDRESS),
            abi_path=os.getenv("GAME_FACTORY_ABI_PATH") or None,
            use_poa_middleware=poa_flag in ("1", "true", "yes", "on"),
            gas_limit=int(os.getenv("GAME_FACTORY_GAS_LIMIT", str(DEFAULT_GAS_LIMIT))),
            receipt_timeout_seconds=int(os.getenv("GAME_FACTORY_RECEIPT_TIMEOUT", "120")),
            currency_symbol=os.getenv("GAME_FACTORY_CURRENCY", "CHZ"),
        )
