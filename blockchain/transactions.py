"""
Transaction utilities.
"""

import logging
from typing import Any, Dict

from eth_account import Account
from web3 import Web3
from web3.types import TxParams, TxReceipt


logger = logging.getLogger(__name__)

DEFAULT_PRIORITY_FEE_GWEI = 2


def _apply_default_fees(web3: Web3, tx: Dict[str, Any]) -> None:
    """Fill in fees unless the caller already chose a pricing scheme."""
    if 'gasPrice' in tx or 'maxFeePerGas' in tx:
        return
    try:
        base_fee = web3.eth.get_block('latest')['baseFeePerGas']
        max_priority_fee = Web3.to_wei(DEFAULT_PRIORITY_FEE_GWEI, 'gwei')
        tx['maxFeePerGas'] = base_fee * 2 + max_priority_fee
        tx['maxPriorityFeePerGas'] = max_priority_fee
    except KeyError:
        # Pre-London chain, no base fee in blocks
        tx['gasPrice'] = web3.eth.gas_price


def sign_and_send_transaction(web3: Web3, transaction: TxParams, private_key: str) -> str:
    """Sign and broadcast a prepared transaction, returning its hash.

    The caller's ``to``, ``data``, ``gas`` and ``value`` are sent as given;
    only nonce, chain id and fees are filled in.
    """
    account = Account.from_key(private_key)

    tx: Dict[str, Any] = dict(transaction)
    tx['from'] = account.address
    tx.setdefault('value', 0)
    tx.setdefault('nonce', web3.eth.get_transaction_count(account.address, 'pending'))
    tx.setdefault('chainId', web3.eth.chain_id)
    _apply_default_fees(web3, tx)

    signed_txn = Account.sign_transaction(tx, private_key)
    tx_hash = web3.eth.send_raw_transaction(signed_txn.raw_transaction)
    return Web3.to_hex(tx_hash)


def wait_for_receipt(web3: Web3, tx_hash: str, timeout: float = 120) -> TxReceipt:
    """Block until the transaction is mined."""
    logger.debug(f"Waiting up to {timeout}s for {tx_hash}")
    return web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
