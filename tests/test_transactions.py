"""
Tests for transaction signing and broadcasting.
"""
from unittest.mock import MagicMock

import pytest
from eth_account import Account
from hexbytes import HexBytes
from web3 import Web3

from blockchain.transactions import sign_and_send_transaction, wait_for_receipt
from tests.helpers import TEST_PRIV_KEY, TEST_GAME_ADDRESS

SENDER = Account.from_key(TEST_PRIV_KEY).address


@pytest.fixture
def tx_w3():
    w3 = MagicMock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.chain_id = 88882
    w3.eth.get_block.return_value = {"baseFeePerGas": 2500000000}
    w3.eth.gas_price = 3000000000
    w3.eth.send_raw_transaction.return_value = HexBytes(b"\x12" * 32)
    return w3


@pytest.fixture
def transaction():
    return {
        "to": Web3.to_checksum_address(TEST_GAME_ADDRESS),
        "from": SENDER,
        "data": "0xabcdef01" + "00" * 32,
        "gas": 3000000,
    }


def test_sign_and_send_eip1559(tx_w3, transaction):
    tx_hash = sign_and_send_transaction(tx_w3, transaction, TEST_PRIV_KEY)

    assert tx_hash == "0x" + "12" * 32
    tx_w3.eth.get_transaction_count.assert_called_once_with(SENDER, "pending")
    raw = tx_w3.eth.send_raw_transaction.call_args[0][0]
    assert raw[0] == 2  # typed EIP-1559 envelope


def test_sign_and_send_legacy_fallback(tx_w3, transaction):
    tx_w3.eth.get_block.return_value = {}

    sign_and_send_transaction(tx_w3, transaction, TEST_PRIV_KEY)

    raw = tx_w3.eth.send_raw_transaction.call_args[0][0]
    assert raw[0] >= 0xc0  # RLP list, untyped legacy transaction


def test_sign_and_send_keeps_caller_fields(tx_w3, transaction, monkeypatch):
    signed = {}
    real_sign = Account.sign_transaction

    def _capture(tx, key):
        signed.update(tx)
        return real_sign(tx, key)

    monkeypatch.setattr(Account, "sign_transaction", staticmethod(_capture))

    sign_and_send_transaction(tx_w3, transaction, TEST_PRIV_KEY)

    assert signed["data"] == transaction["data"]
    assert signed["gas"] == 3000000
    assert signed["to"] == transaction["to"]
    assert signed["nonce"] == 7
    assert signed["chainId"] == 88882
    assert signed["value"] == 0
    # caller's dict untouched
    assert "nonce" not in transaction


def test_wait_for_receipt_passes_timeout():
    w3 = MagicMock()
    w3.eth.wait_for_transaction_receipt.return_value = {"status": 1}

    assert wait_for_receipt(w3, "0xabc", timeout=30) == {"status": 1}
    w3.eth.wait_for_transaction_receipt.assert_called_once_with("0xabc", timeout=30)
