"""
GameFactory contract helpers.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from eth_abi import decode as abi_decode
from eth_utils import collapse_if_tuple, function_signature_to_4byte_selector
from hexbytes import HexBytes
from web3 import Web3
from web3.contract import Contract
from web3.types import TxParams, TxReceipt


logger = logging.getLogger(__name__)


GAME_CREATED_SIGNATURE = "GameCreated(address)"
GAME_CREATED_TOPIC = Web3.keccak(text=GAME_CREATED_SIGNATURE)

SALT_SIZE = 32
ADDRESS_OFFSET = 12  # addresses are left-padded to 32 bytes in event data

# Errors the compiler emits for require/revert strings and assert/overflow
BUILTIN_ERRORS: List[Dict[str, Any]] = [
    {"type": "error", "name": "Error", "inputs": [{"name": "message", "type": "string"}]},
    {"type": "error", "name": "Panic", "inputs": [{"name": "code", "type": "uint256"}]},
]


@dataclass
class DecodedError:
    """A revert payload matched against the contract's custom errors."""
    name: str
    signature: str
    args: Tuple[Any, ...]

    def __str__(self) -> str:
        return f"{self.name}({', '.join(repr(a) for a in self.args)})"


def is_contract_deployed(web3: Web3, contract_address: str) -> bool:
    """Check that there is code at the given address."""
    code = web3.eth.get_code(Web3.to_checksum_address(contract_address))
    return len(code) > 0


def generate_salt() -> bytes:
    """Random 32-byte salt for deterministic game address derivation."""
    return secrets.token_bytes(SALT_SIZE)


def predict_game_address(contract: Contract, salt: bytes) -> str:
    """Ask the factory which address a game with this salt would get."""
    return contract.functions.getGameAddress(salt).call()


def encode_create_game(contract: Contract, salt: bytes) -> str:
    """ABI-encode a createGame(salt) call."""
    if len(salt) != SALT_SIZE:
        raise ValueError(f"Salt must be {SALT_SIZE} bytes, got {len(salt)}")
    return contract.encode_abi("createGame", args=[salt])


def decode_create_game(contract: Contract, data: Union[str, bytes]) -> bytes:
    """Decode createGame calldata back into its salt."""
    func, params = contract.decode_function_input(data)
    if func.fn_name != "createGame":
        raise ValueError(f"Calldata is for {func.fn_name}, not createGame")
    return params["salt"]


def build_call(contract_address: str, sender: str, data: str) -> TxParams:
    """Call object shared by simulation, estimation and submission."""
    return {
        "to": Web3.to_checksum_address(contract_address),
        "from": sender,
        "data": data,
    }


def simulate_call(web3: Web3, call: TxParams) -> HexBytes:
    """Execute the call read-only against the latest state."""
    return web3.eth.call(call)


def estimate_gas(web3: Web3, call: TxParams) -> int:
    """Estimate gas for the call."""
    return web3.eth.estimate_gas(call)


def _error_signature(entry: Dict[str, Any]) -> str:
    types = ",".join(collapse_if_tuple(param) for param in entry.get("inputs", []))
    return f"{entry['name']}({types})"


def decode_custom_error(abi: List[Dict[str, Any]], revert_data: Union[str, bytes, None]) -> Optional[DecodedError]:
    """Decode revert data using the ABI's error entries.

    Returns None when the data is empty or its selector matches no known
    error. Raises if the selector matches but the payload does not decode.
    """
    if not revert_data:
        return None

    data = HexBytes(revert_data)
    if len(data) < 4:
        return None

    selector, payload = bytes(data[:4]), bytes(data[4:])
    for entry in list(abi) + BUILTIN_ERRORS:
        if entry.get("type") != "error":
            continue
        signature = _error_signature(entry)
        if function_signature_to_4byte_selector(signature) != selector:
            continue
        types = [collapse_if_tuple(param) for param in entry.get("inputs", [])]
        args = tuple(abi_decode(types, payload)) if types else ()
        return DecodedError(name=entry["name"], signature=signature, args=args)

    return None


def _error_dict(exc: Exception) -> Dict[str, Any]:
    """Pull the JSON-RPC error object out of a web3 exception, if any."""
    rpc_response = getattr(exc, "rpc_response", None)
    if isinstance(rpc_response, dict) and isinstance(rpc_response.get("error"), dict):
        return rpc_response["error"]
    details = exc.args[0] if exc.args else None
    if isinstance(details, dict):
        return details
    return {}


def extract_revert_reason(exc: Exception) -> str:
    """Human readable reason for a failed call."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    error = _error_dict(exc)
    if error.get("message"):
        return str(error["message"])
    return str(exc)


def extract_revert_data(exc: Exception) -> Optional[str]:
    """Raw revert payload attached to a failed call, if any."""
    data = getattr(exc, "data", None)
    if data is None:
        data = _error_dict(exc).get("data")
    # Some nodes nest the payload one level deeper
    if isinstance(data, dict):
        data = data.get("data")
    if isinstance(data, (bytes, bytearray)):
        return Web3.to_hex(data)
    if isinstance(data, str) and data.startswith("0x"):
        return data
    return None


def extract_error_code(exc: Exception) -> Optional[Any]:
    """Machine error code reported by the node, if any."""
    return _error_dict(exc).get("code")


def find_game_created_address(receipt: TxReceipt) -> Optional[str]:
    """Return the game address from the first GameCreated log in the receipt."""
    for log in receipt["logs"]:
        topics = log.get("topics") or []
        if not topics or HexBytes(topics[0]) != GAME_CREATED_TOPIC:
            continue

        data = HexBytes(log["data"])
        if len(data) < ADDRESS_OFFSET + 20:
            logger.warning(f"GameCreated log has short data ({len(data)} bytes), cannot read address")
            return None

        return Web3.to_checksum_address("0x" + bytes(data[ADDRESS_OFFSET:ADDRESS_OFFSET + 20]).hex())

    return None
