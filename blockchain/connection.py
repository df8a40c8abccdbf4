"""
Web3 connection utilities.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from web3 import Web3
from web3.contract import Contract
from web3.middleware import ExtraDataToPOAMiddleware

from factory_abi import GAME_FACTORY_ABI


logger = logging.getLogger(__name__)


def get_web3_connection(rpc_url: str, poa: bool = True) -> Web3:
    """Create Web3 connection."""
    web3 = Web3(Web3.HTTPProvider(rpc_url))

    # Chiliz blocks carry a long extraData field, same as other PoA chains
    if poa:
        web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    if not web3.is_connected():
        raise ConnectionError(f"Failed to connect to {rpc_url}")

    logger.info(f"Connected to blockchain at {rpc_url}")
    return web3


def load_abi(abi_path: Optional[str] = None) -> List[Dict[str, Any]]:
    """Load the factory ABI.

    Accepts either a plain ABI list or a compiler artifact (Foundry's
    ``out/GameFactory.sol/GameFactory.json``) with the ABI under ``abi``.
    Falls back to the bundled ABI when no path is given.
    """
    if not abi_path:
        return GAME_FACTORY_ABI

    with open(abi_path, "r") as f:
        data = json.load(f)

    if isinstance(data, dict):
        if "abi" not in data:
            raise ValueError(f"No 'abi' key in artifact {abi_path}")
        data = data["abi"]

    if not isinstance(data, list):
        raise ValueError(f"Unexpected ABI format in {abi_path}")

    logger.info(f"Loaded ABI from {abi_path}")
    return data


def get_contract(web3: Web3, contract_address: str, abi_path: Optional[str] = None) -> Contract:
    """Get contract instance using the bundled ABI or one from file."""
    contract = web3.eth.contract(
        address=Web3.to_checksum_address(contract_address),
        abi=load_abi(abi_path)
    )

    logger.info(f"Loaded contract at {contract_address}")
    return contract
