"""
Game creation routine: one end-to-end attempt to create a game through the factory.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from eth_account import Account
from web3 import Web3
from web3.contract import Contract

from blockchain import (
    get_web3_connection,
    get_contract,
    is_contract_deployed,
    generate_salt,
    predict_game_address,
    encode_create_game,
    build_call,
    simulate_call,
    estimate_gas,
    decode_custom_error,
    extract_revert_reason,
    extract_revert_data,
    extract_error_code,
    find_game_created_address,
)
from blockchain.transactions import sign_and_send_transaction, wait_for_receipt

from config import FactoryConfig
from errors import (
    GameCreationError,
    ContractNotDeployedError,
    EstimationFailedError,
    SubmissionFailedError,
    ConfirmationFailedError,
)


logger = logging.getLogger(__name__)


class Stage(str, Enum):
    """Steps of a game creation attempt, in order."""
    INIT = "init"
    VERIFY_DEPLOYED = "verify_deployed"
    CHECK_BALANCE = "check_balance"
    GENERATE_SALT = "generate_salt"
    PREDICT_ADDRESS = "predict_address"
    ENCODE_CALL = "encode_call"
    SIMULATE = "simulate"
    ESTIMATE_GAS = "estimate_gas"
    SUBMIT = "submit"
    AWAIT_CONFIRMATION = "await_confirmation"
    SCAN_EVENT = "scan_event"
    DONE = "done"
    ABORTED = "aborted"


class FailurePolicy(Enum):
    """What a failed step does to the attempt."""
    ADVISORY = "advisory"  # log and carry on
    GATING = "gating"      # stop, report Aborted
    FATAL = "fatal"        # propagate to the top-level handler


STAGE_POLICY: Dict[Stage, FailurePolicy] = {
    Stage.VERIFY_DEPLOYED: FailurePolicy.GATING,
    Stage.CHECK_BALANCE: FailurePolicy.ADVISORY,
    Stage.PREDICT_ADDRESS: FailurePolicy.ADVISORY,
    Stage.SIMULATE: FailurePolicy.ADVISORY,
    Stage.ESTIMATE_GAS: FailurePolicy.GATING,
    Stage.SUBMIT: FailurePolicy.FATAL,
    Stage.AWAIT_CONFIRMATION: FailurePolicy.FATAL,
    Stage.SCAN_EVENT: FailurePolicy.ADVISORY,
}


@dataclass
class GameCreationResult:
    """Outcome of one game creation attempt."""
    state: Stage = Stage.INIT
    salt: Optional[bytes] = None
    predicted_address: Optional[str] = None
    calldata: Optional[str] = None
    estimated_gas: Optional[int] = None
    tx_hash: Optional[str] = None
    block_number: Optional[int] = None
    game_address: Optional[str] = None
    error: Optional[GameCreationError] = None

    @property
    def event_found(self) -> bool:
        return self.game_address is not None


class GameCreator:
    """Creates a single game on the GameFactory contract."""

    def __init__(
        self,
        config: FactoryConfig,
        web3: Optional[Web3] = None,
        contract: Optional[Contract] = None,
    ):
        self.config = config
        self.web3 = web3
        self.contract = contract

        self.account = Account.from_key(config.private_key)
        self.address = self.account.address

        self.stage = Stage.INIT

    async def _run(self, func: Callable, *args) -> Any:
        """Run a blocking web3 call in the default executor."""
        return await asyncio.get_event_loop().run_in_executor(None, func, *args)

    async def _step(
        self,
        stage: Stage,
        func: Callable,
        *args,
        on_error: Optional[Callable[[Exception], Optional[GameCreationError]]] = None,
    ) -> Any:
        """Run one step, applying the stage's failure policy.

        Advisory failures are logged and yield None. Otherwise the error
        built by ``on_error`` (or the original exception) is raised.
        """
        self.stage = stage
        try:
            return await self._run(func, *args)
        except Exception as e:
            error = on_error(e) if on_error else None
            if STAGE_POLICY.get(stage) is FailurePolicy.ADVISORY:
                if on_error is None:
                    logger.warning(f"\033[33m⚠️  {stage.value} failed: {e}\033[0m")
                return None
            if error is not None:
                raise error from e
            raise

    async def _connect(self) -> None:
        if self.web3 is None:
            self.web3 = await self._run(
                get_web3_connection, self.config.rpc_url, self.config.use_poa_middleware
            )
        if self.contract is None:
            self.contract = await self._run(
                get_contract, self.web3, self.config.factory_address, self.config.abi_path
            )

    def _verify_deployed(self) -> None:
        if not is_contract_deployed(self.web3, self.config.factory_address):
            raise ContractNotDeployedError(self.config.factory_address)

    def _on_simulation_error(self, exc: Exception) -> None:
        logger.warning(f"\033[33m⚠️  Error simulating transaction: {extract_revert_reason(exc)}\033[0m")
        revert_data = extract_revert_data(exc)
        if not revert_data:
            return None
        try:
            decoded = decode_custom_error(self.contract.abi, revert_data)
        except Exception as e:
            logger.warning(f"Could not decode error data {revert_data}: {e}")
            return None
        if decoded:
            logger.warning(f"\033[33m🔎 Decoded error: {decoded}\033[0m")
        else:
            logger.warning(f"Could not decode error data {revert_data}")
        return None

    def _scan_receipt(self, receipt) -> Optional[str]:
        game_address = find_game_created_address(receipt)
        if game_address is None:
            logger.warning("\033[33m⚠️  GameCreated event not found in the transaction logs\033[0m")
        return game_address

    async def create_game(self) -> GameCreationResult:
        """Attempt to create one game.

        Returns a result in state DONE (with or without the new game's
        address) or ABORTED when a gating check fails. Submission and
        confirmation failures are raised.
        """
        result = GameCreationResult()
        self.stage = Stage.INIT

        await self._connect()
        logger.info(f"\033[94m🚀 Creating game from {self.address} via factory {self.config.factory_address}\033[0m")

        try:
            # Deployment check
            await self._step(Stage.VERIFY_DEPLOYED, self._verify_deployed)
            logger.info("\033[92m✅ Contract is deployed at the specified address\033[0m")

            # Balance, diagnostic only
            balance = await self._step(Stage.CHECK_BALANCE, self.web3.eth.get_balance, self.address)
            if balance is not None:
                logger.info(
                    f"\033[93m💰 Account balance: {Web3.from_wei(balance, 'ether')} "
                    f"{self.config.currency_symbol}\033[0m"
                )

            self.stage = Stage.GENERATE_SALT
            salt = generate_salt()
            result.salt = salt
            logger.info(f"Generated salt: 0x{salt.hex()}")

            predicted = await self._step(
                Stage.PREDICT_ADDRESS,
                predict_game_address,
                self.contract,
                salt,
                on_error=lambda e: logger.warning(f"\033[33m⚠️  Error predicting game address: {e}\033[0m"),
            )
            if predicted is not None:
                result.predicted_address = predicted
                logger.info(f"Predicted game address: {predicted}")

            # One encoded payload for simulation, estimation and submission
            self.stage = Stage.ENCODE_CALL
            calldata = encode_create_game(self.contract, salt)
            result.calldata = calldata
            call = build_call(self.config.factory_address, self.address, calldata)
            logger.info(f"Encoded function call data: {calldata}")

            logger.info("Simulating transaction...")
            simulation = await self._step(
                Stage.SIMULATE, simulate_call, self.web3, call, on_error=self._on_simulation_error
            )
            if simulation is not None:
                logger.info(f"Simulation result: {Web3.to_hex(simulation)}")

            logger.info("Estimating gas...")
            estimated = await self._step(
                Stage.ESTIMATE_GAS,
                estimate_gas,
                self.web3,
                call,
                on_error=lambda e: EstimationFailedError(
                    extract_revert_reason(e), extract_error_code(e), dict(call)
                ),
            )
            result.estimated_gas = estimated
            logger.info(f"Estimated gas: {estimated}")
            if estimated > self.config.gas_limit:
                logger.warning(
                    f"\033[33m⚠️  Estimate {estimated} exceeds gas limit {self.config.gas_limit}\033[0m"
                )

            logger.info("\033[94m🎮 Creating game...\033[0m")
            transaction = dict(call, gas=self.config.gas_limit)
            tx_hash = await self._step(
                Stage.SUBMIT,
                sign_and_send_transaction,
                self.web3,
                transaction,
                self.config.private_key,
                on_error=lambda e: SubmissionFailedError(
                    extract_revert_reason(e), extract_error_code(e), transaction
                ),
            )
            result.tx_hash = tx_hash
            logger.info(f"Transaction hash: {tx_hash}")

            receipt = await self._step(
                Stage.AWAIT_CONFIRMATION,
                wait_for_receipt,
                self.web3,
                tx_hash,
                self.config.receipt_timeout_seconds,
                on_error=lambda e: ConfirmationFailedError(tx_hash, str(e)),
            )
            if receipt["status"] != 1:
                raise ConfirmationFailedError(tx_hash, "transaction reverted", receipt)
            result.block_number = receipt["blockNumber"]
            logger.info(f"\033[92m✅ Transaction confirmed in block: {receipt['blockNumber']}\033[0m")
            logger.info(f"\033[93m📋 Gas used: {receipt['gasUsed']}\033[0m")

            game_address = await self._step(Stage.SCAN_EVENT, self._scan_receipt, receipt)
            if game_address:
                result.game_address = game_address
                logger.info(f"\033[92m🎉 New game created at address: {game_address}\033[0m")

        except GameCreationError as e:
            if STAGE_POLICY.get(self.stage) is not FailurePolicy.GATING:
                raise
            logger.error(f"\033[31m❌ Aborted at {self.stage.value}: {e}\033[0m")
            for key, value in e.details().items():
                logger.error(f"   {key}: {value}")
            self.stage = Stage.ABORTED
            result.state = Stage.ABORTED
            result.error = e
            return result

        self.stage = Stage.DONE
        result.state = Stage.DONE
        return result
