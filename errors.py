"""
Errors raised while creating a game.

Each fatal failure kind has its own exception type carrying only the fields
that make sense for it, so the top-level handler never has to probe for
attributes.
"""

from typing import Any, Dict, Optional


class GameCreationError(Exception):
    """Base class for fatal game creation failures."""

    stage = "unknown"

    def details(self) -> Dict[str, Any]:
        """Structured fields worth logging, without empty values."""
        return {}


class ContractNotDeployedError(GameCreationError):
    """No code at the factory address."""

    stage = "verify_deployed"

    def __init__(self, contract_address: str):
        super().__init__(f"GameFactory contract is not deployed at {contract_address}")
        self.contract_address = contract_address

    def details(self) -> Dict[str, Any]:
        return {"contract_address": self.contract_address}


class EstimationFailedError(GameCreationError):
    """Gas estimation failed; the call would revert on chain."""

    stage = "estimate_gas"

    def __init__(
        self,
        reason: Optional[str],
        code: Optional[Any] = None,
        transaction: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(f"Gas estimation failed: {reason or 'unknown reason'}")
        self.reason = reason
        self.code = code
        self.transaction = transaction

    def details(self) -> Dict[str, Any]:
        fields = {"reason": self.reason, "code": self.code, "transaction": self.transaction}
        return {k: v for k, v in fields.items() if v is not None}


class SubmissionFailedError(GameCreationError):
    """Signing or broadcasting the createGame transaction failed."""

    stage = "submit"

    def __init__(
        self,
        reason: Optional[str],
        code: Optional[Any] = None,
        transaction: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(f"Transaction submission failed: {reason or 'unknown reason'}")
        self.reason = reason
        self.code = code
        self.transaction = transaction

    def details(self) -> Dict[str, Any]:
        fields = {"reason": self.reason, "code": self.code, "transaction": self.transaction}
        return {k: v for k, v in fields.items() if v is not None}


class ConfirmationFailedError(GameCreationError):
    """The transaction was sent but did not confirm successfully."""

    stage = "await_confirmation"

    def __init__(self, tx_hash: str, reason: Optional[str] = None, receipt: Optional[Any] = None):
        super().__init__(f"Transaction {tx_hash} did not confirm: {reason or 'unknown reason'}")
        self.tx_hash = tx_hash
        self.reason = reason
        self.receipt = receipt

    def details(self) -> Dict[str, Any]:
        fields = {"tx_hash": self.tx_hash, "reason": self.reason, "receipt": self.receipt}
        return {k: v for k, v in fields.items() if v is not None}
