"""
Wrap / Unwrap Flow

Converts native currency into the wrapped token (``deposit()`` with value)
and back (``withdraw(amount)``). Both directions share one in-flight flag and
are independent of token creation.
"""

import logging
from decimal import Decimal
from typing import Optional, Union

from ..adapters.evm.constants import MAX_UINT256, amount_to_value
from ..adapters.evm.transactions import deposit_native, withdraw_wrapped
from ..engine.events import EventBus, WrapSettledEvent
from ..engine.exceptions import ProviderError, TransactionError
from ..engine.status import StatusStateMachine
from ..schemas.tokens import WrapDirection, WrapOperation
from .session import NOT_CONNECTED_MESSAGE, WalletSession

logger = logging.getLogger(__name__)

INVALID_AMOUNT_MESSAGE = "Please enter a valid amount!"
NO_WRAPPED_TOKEN_MESSAGE = "No wrapped token is configured for this network!"


def parse_amount(amount: str, decimals: int) -> Optional[int]:
    """
    Convert a human-readable amount into smallest units.

    Returns:
        The positive integer value, or None when the amount is non-numeric,
        non-finite, not positive, above uint256, or finer than ``decimals`` allows.
    """
    try:
        value = amount_to_value(amount=amount, decimals=decimals)
    except ValueError:
        return None
    return value if 0 < value <= MAX_UINT256 else None


class WrapUnwrapFlow:
    """
    Wrap and unwrap operations bound to one WalletSession.

    Attributes:
        amount: Current amount input; cleared after a settled operation.
        status: The flow's status machine, separate from token creation.
    """

    def __init__(
        self,
        session: WalletSession,
        bus: Optional[EventBus] = None,
        status: Optional[StatusStateMachine] = None,
    ):
        self.session = session
        self.status = status or StatusStateMachine("wrap", bus)
        self.amount = ""
        self._bus = bus

    @property
    def in_flight(self) -> bool:
        return self.status.is_pending

    async def wrap(self, amount: Union[str, Decimal, int, None] = None) -> Optional[str]:
        """Wrap native currency; returns the tx hash on success."""
        return await self._run(WrapDirection.WRAP, amount)

    async def unwrap(self, amount: Union[str, Decimal, int, None] = None) -> Optional[str]:
        """Unwrap into native currency; returns the tx hash on success."""
        return await self._run(WrapDirection.UNWRAP, amount)

    async def _run(self, direction: WrapDirection, amount) -> Optional[str]:
        if self.status.is_pending:
            logger.debug(f"Wrap flow busy; ignoring {direction.value}")
            return None

        amount_text = (self.amount if amount is None else str(amount)).strip()
        session = self.session
        native = session.network.native_currency
        wrapped_symbol = session.deployment.wrapped_symbol
        token = session.deployment.wrapped_token_address

        if not session.connected:
            await self.status.reject(NOT_CONNECTED_MESSAGE)
            return None
        if not token:
            await self.status.reject(NO_WRAPPED_TOKEN_MESSAGE)
            return None

        decimals = native.decimals if direction == WrapDirection.WRAP else session.deployment.wrapped_decimals
        value = parse_amount(amount_text, decimals)
        if value is None:
            await self.status.reject(INVALID_AMOUNT_MESSAGE)
            return None

        operation = WrapOperation(direction=direction, amount=amount_text)
        if direction == WrapDirection.WRAP:
            await self.status.begin(f"Wrapping {amount_text} {native.symbol} to {wrapped_symbol}...")
        else:
            await self.status.begin(f"Unwrapping {amount_text} {wrapped_symbol} to {native.symbol}...")

        label = "Wrap" if direction == WrapDirection.WRAP else "Unwrap"
        try:
            provider = session.require_connected()
            if direction == WrapDirection.WRAP:
                tx_hash = await deposit_native(provider, token, session.address, value)
            else:
                tx_hash = await withdraw_wrapped(provider, token, session.address, value)
            logger.info(f"{label} transaction sent: {tx_hash}")

            await self.status.progress("Transaction sent, waiting for confirmation...")
            await provider.wait_for_receipt(tx_hash)
        except (TransactionError, ProviderError) as e:
            logger.error(f"{label} failed: {e}")
            await self.status.fail(f"{label} failed: {e}")
            return None
        except Exception as e:
            await self.status.fail(f"{label} failed: {e}")
            raise

        if self._bus is not None:
            await self._bus.emit(WrapSettledEvent(operation=operation, tx_hash=tx_hash))

        try:
            await session.refresh_balances(native=True, wrapped=True)
        except (TransactionError, ProviderError) as e:
            logger.warning(f"Balance refresh after {direction.value} failed: {e}")

        self.amount = ""
        if direction == WrapDirection.WRAP:
            await self.status.succeed(f"Successfully wrapped {amount_text} {native.symbol} to {wrapped_symbol}!")
        else:
            await self.status.succeed(f"Successfully unwrapped {amount_text} {wrapped_symbol} to {native.symbol}!")
        return tx_hash
