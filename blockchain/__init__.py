"""
Blockchain utilities for the GameFactory client.
"""

from .connection import get_web3_connection, get_contract, load_abi
from .factory import (
    GAME_CREATED_TOPIC,
    DecodedError,
    is_contract_deployed,
    generate_salt,
    predict_game_address,
    encode_create_game,
    decode_create_game,
    build_call,
    simulate_call,
    estimate_gas,
    decode_custom_error,
    extract_revert_reason,
    extract_revert_data,
    extract_error_code,
    find_game_created_address,
)
from .transactions import sign_and_send_transaction, wait_for_receipt

__all__ = [
    "get_web3_connection",
    "get_contract",
    "load_abi",
    "GAME_CREATED_TOPIC",
    "DecodedError",
    "is_contract_deployed",
    "generate_salt",
    "predict_game_address",
    "encode_create_game",
    "decode_create_game",
    "build_call",
    "simulate_call",
    "estimate_gas",
    "decode_custom_error",
    "extract_revert_reason",
    "extract_revert_data",
    "extract_error_code",
    "find_game_created_address",
    "sign_and_send_transaction",
    "wait_for_receipt",
]
