"""
Token Creation Flow

Validates the creation form, reads the factory fees, runs the wrapped-token
approval when the fee variant needs one, submits ``createToken`` and turns the
confirmed receipt into a TokenCreationResult.

A single flow serves both fee variants; the only differences are the value
attached to the call (``FeeSchedule.native_value``) and the approval step of
NativeAndWrappedFees.
"""

import logging
from typing import Optional

from ..adapters.evm.constants import MAX_UINT256
from ..adapters.evm.receipts import extract_token_address
from ..adapters.evm.transactions import create_token
from ..engine.events import (
    BaseEvent,
    EventBus,
    ReceiptParsingFailedEvent,
    TokenCreatedEvent,
)
from ..engine.exceptions import (
    ApprovalError,
    ProviderError,
    ReceiptParsingError,
    TransactionError,
    ValidationError,
)
from ..engine.status import StatusStateMachine
from ..schemas.tokens import (
    MAX_TOKEN_DECIMALS,
    NativeAndWrappedFees,
    TokenCreationRequest,
    TokenCreationResult,
    ValidationOutcome,
)
from .fees import FeeResolver
from .session import NOT_CONNECTED_MESSAGE, WalletSession

logger = logging.getLogger(__name__)


class TokenCreationFlow:
    """
    Create-token operation bound to one WalletSession.

    Attributes:
        form: Current form input; reset to defaults after a successful creation.
        result: Last created token, kept until dismissed.
        status: The flow's status machine; pending doubles as the in-flight flag.
    """

    def __init__(
        self,
        session: WalletSession,
        fees: Optional[FeeResolver] = None,
        bus: Optional[EventBus] = None,
        status: Optional[StatusStateMachine] = None,
    ):
        self.session = session
        self.fees = fees or FeeResolver(session)
        self.status = status or StatusStateMachine("creation", bus)
        self.form = TokenCreationRequest()
        self.result: Optional[TokenCreationResult] = None
        self._bus = bus

    @property
    def in_flight(self) -> bool:
        return self.status.is_pending

    @staticmethod
    def validate(request: TokenCreationRequest) -> ValidationOutcome:
        """
        Check a creation request locally; the first failing check wins.

        Args:
            request: Raw form input.

        Returns:
            ValidationOutcome: VALID or the first failure.
        """
        if not request.name.strip():
            return ValidationOutcome.EMPTY_NAME
        if not request.ticker.strip():
            return ValidationOutcome.EMPTY_TICKER

        decimals = request.decimals_value()
        if decimals is None or not 0 <= decimals <= MAX_TOKEN_DECIMALS:
            return ValidationOutcome.INVALID_DECIMALS

        supply = request.supply_value()
        if supply is None or supply <= 0 or supply * 10 ** decimals > MAX_UINT256:
            return ValidationOutcome.INVALID_SUPPLY

        return ValidationOutcome.VALID

    @classmethod
    def require_valid(cls, request: TokenCreationRequest) -> None:
        """
        Raises:
            ValidationError: Carrying the first failed check.
        """
        outcome = cls.validate(request)
        if outcome != ValidationOutcome.VALID:
            raise ValidationError(outcome)

    async def submit(self, request: Optional[TokenCreationRequest] = None) -> Optional[TokenCreationResult]:
        """
        Run one token creation attempt.

        Args:
            request: Request to submit; the flow's form when omitted.

        Returns:
            The created token, or None when the attempt was ignored, rejected or failed.
            The outcome is always reflected on ``self.status``.
        """
        # Must stay ahead of the first await: the in-flight check is what keeps
        # concurrent triggers from sending a second transaction.
        if self.status.is_pending:
            logger.debug("Token creation already in progress; ignoring submit")
            return None

        request = request if request is not None else self.form

        if not self.session.connected:
            await self.status.reject(NOT_CONNECTED_MESSAGE)
            return None

        try:
            self.require_valid(request)
        except ValidationError as e:
            await self.status.reject(str(e))
            return None

        await self.status.begin("Preparing token creation...")
        try:
            tx_hash, receipt = await self._create(request)
            result = await self._build_result(request, tx_hash, receipt)
        except (TransactionError, ApprovalError, ProviderError) as e:
            logger.error(f"Token creation failed: {e}")
            await self.status.fail(f"Token creation failed: {e}")
            return None
        except Exception as e:
            await self.status.fail(f"Token creation failed: {e}")
            raise

        self.result = result
        await self._publish(TokenCreatedEvent(result=result))
        await self.status.succeed(f'Token "{request.name}" ({request.ticker}) created successfully!')

        try:
            await self.session.refresh_balances(native=True)
        except (TransactionError, ProviderError) as e:
            logger.warning(f"Balance refresh after token creation failed: {e}")

        self.form = TokenCreationRequest()
        return result

    async def dismiss(self) -> None:
        """Forget the last result and return an idle status."""
        self.result = None
        if not self.status.is_pending:
            await self.status.reset()

    async def add_to_wallet(self) -> bool:
        """
        Ask the wallet to track the created token (``wallet_watchAsset``).

        Returns:
            bool: True if the wallet accepted; False when there is nothing to add
            or the wallet refused.
        """
        if self.result is None or not self.result.address or self.session.provider is None:
            return False
        try:
            added = await self.session.provider.watch_asset(
                self.result.address, self.result.symbol, self.result.decimals
            )
        except (TransactionError, ProviderError) as e:
            logger.error(f"Failed to add token to wallet: {e}")
            return False
        logger.info(f"Token {self.result.symbol} added to wallet: {added}")
        return added

    async def _create(self, request: TokenCreationRequest):
        session = self.session
        provider = session.require_connected()
        deployment = session.deployment
        native = session.network.native_currency

        fees = await self.fees.fetch_fee_schedule()
        fee_text = fees.describe(native.symbol, deployment.wrapped_symbol, native.decimals)
        logger.info(f"Creation fee: {fee_text}")

        decimals = request.decimals_value()
        scaled_supply = request.scaled_supply()
        logger.info(f"Initial supply (with decimals): {scaled_supply}")

        if isinstance(fees, NativeAndWrappedFees):
            await session.ensure_factory_allowance(
                on_approve=lambda: self.status.progress(f"Approving {deployment.wrapped_symbol} for the factory...")
            )

        await self.status.progress(f"Creating token ({fee_text})...")
        tx_hash = await create_token(
            provider,
            deployment.factory_address,
            session.address,
            request.name,
            request.ticker,
            decimals,
            scaled_supply,
            fees.native_value,
        )
        logger.info(f"Transaction sent: {tx_hash}")

        await self.status.progress("Transaction sent, waiting for confirmation...")
        receipt = await provider.wait_for_receipt(tx_hash)
        logger.info(f"Transaction confirmed: {tx_hash}")
        return tx_hash, receipt

    async def _build_result(self, request: TokenCreationRequest, tx_hash: str, receipt) -> TokenCreationResult:
        try:
            address, source = extract_token_address(receipt, self.session.deployment.token_created_event)
        except ReceiptParsingError as e:
            logger.warning(f"Token created but its address could not be determined: {e}")
            address, source = "", "missing"
            await self._publish(ReceiptParsingFailedEvent(tx_hash=tx_hash, error_message=str(e)))
        else:
            logger.info(f"Token created! Address: {address} (from {source})")

        return TokenCreationResult(
            address=address,
            name=request.name,
            symbol=request.ticker,
            decimals=request.decimals_value(),
            supply=request.raw_supply.strip(),
            tx_hash=tx_hash,
            address_source=source,
        )

    async def _publish(self, event: BaseEvent) -> None:
        if self._bus is not None:
            await self._bus.emit(event)
