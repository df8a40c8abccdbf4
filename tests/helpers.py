"""
Shared constants and builders for the tests.
"""
from hexbytes import HexBytes

from config import DEFAULT_FACTORY_ADDRESS
from blockchain.factory import GAME_CREATED_TOPIC

TEST_PRIV_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_GAME_ADDRESS = "0x1111111111111111111111111111111111111111"
TEST_TX_HASH = "0x" + "ab" * 32


def game_created_log(game_address=TEST_GAME_ADDRESS):
    """A GameCreated log entry as a node would return it."""
    return {
        "address": DEFAULT_FACTORY_ADDRESS,
        "topics": [GAME_CREATED_TOPIC],
        "data": HexBytes(b"\x00" * 12 + HexBytes(game_address)),
    }


def make_receipt(logs=None, status=1):
    return {
        "transactionHash": HexBytes(TEST_TX_HASH),
        "blockNumber": 12345,
        "status": status,
        "gasUsed": 210000,
        "logs": logs if logs is not None else [game_created_log()],
    }
