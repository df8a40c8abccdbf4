"""
Pytest fixtures for the GameFactory client tests.
"""
from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes
from web3 import Web3

from config import FactoryConfig, DEFAULT_FACTORY_ADDRESS
from factory_abi import GAME_FACTORY_ABI
from tests.helpers import TEST_PRIV_KEY, TEST_GAME_ADDRESS, make_receipt


@pytest.fixture
def config():
    return FactoryConfig(private_key=TEST_PRIV_KEY)


@pytest.fixture
def contract():
    """Offline contract instance; encoding needs no provider."""
    return Web3().eth.contract(
        address=Web3.to_checksum_address(DEFAULT_FACTORY_ADDRESS),
        abi=GAME_FACTORY_ABI,
    )


@pytest.fixture
def mock_w3():
    """Chain double where every step succeeds."""
    w3 = MagicMock()
    w3.eth.get_code.return_value = HexBytes("0x6080604052")
    w3.eth.get_balance.return_value = 5 * 10**18
    w3.eth.call.return_value = HexBytes(b"\x00" * 12 + HexBytes(TEST_GAME_ADDRESS))
    w3.eth.estimate_gas.return_value = 250000
    w3.eth.wait_for_transaction_receipt.return_value = make_receipt()
    return w3
