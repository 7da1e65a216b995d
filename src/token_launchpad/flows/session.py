"""
Wallet Session

Connects to the wallet provider, makes sure the target chain is configured
and active, and tracks the connected address and balances.

Connect sequence:
    1. ``wallet_addEthereumChain`` with the network's chain parameters
    2. ``eth_requestAccounts``; the session is connected from here on
    3. native balance read
    4. fee variant NATIVE_AND_WRAPPED only: wrapped-token allowance check and,
       below the threshold, an unlimited ``approve`` for the factory.
       Failures are logged and published, never raised.
    5. wrapped-token balance read (when a wrapped token is configured)
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from eth_utils import to_checksum_address

from ..adapters.bases import WalletProvider
from ..adapters.evm.constants import (
    DeploymentConfig,
    NetworkConfig,
    LOW_ALLOWANCE_THRESHOLD,
    MAX_UINT256,
)
from ..adapters.evm.queries import query_erc20_allowance, query_erc20_balance
from ..adapters.evm.transactions import approve_erc20
from ..engine.events import (
    ApprovalFailedEvent,
    BalancesRefreshedEvent,
    BaseEvent,
    EventBus,
    SessionConnectedEvent,
    SessionDisconnectedEvent,
)
from ..engine.exceptions import ApprovalError, ProviderError, TransactionError
from ..schemas.session import SessionState

logger = logging.getLogger(__name__)

NOT_CONNECTED_MESSAGE = "Please connect your wallet first!"


class WalletSession:
    """
    Connected-wallet state plus the operations allowed to mutate it.

    Attributes:
        provider: Wallet provider, or None when no wallet is available
        network: Target chain
        deployment: Factory / wrapped-token deployment
        state: Current SessionState (replaced, never mutated in place)
        connecting: True while connect() is running
    """

    def __init__(
        self,
        provider: Optional[WalletProvider],
        network: NetworkConfig,
        deployment: DeploymentConfig,
        bus: Optional[EventBus] = None,
        allowance_threshold: int = LOW_ALLOWANCE_THRESHOLD,
    ):
        self.provider = provider
        self.network = network
        self.deployment = deployment
        self.allowance_threshold = allowance_threshold
        self.state = SessionState()
        self.connecting = False
        self._bus = bus

    @property
    def connected(self) -> bool:
        return self.state.connected

    @property
    def address(self) -> str:
        return self.state.address

    def require_connected(self) -> WalletProvider:
        """
        Return the provider of a connected session.

        Raises:
            ProviderError: If the session is not connected.
        """
        if not self.state.connected or self.provider is None:
            raise ProviderError(NOT_CONNECTED_MESSAGE)
        return self.provider

    async def connect(self) -> SessionState:
        """
        Connect the wallet and load balances.

        Returns:
            SessionState: The connected state.

        Raises:
            ProviderError: No provider, or account access refused. State untouched.
            ChainConfigError: The wallet rejected the chain. State untouched.
            TransactionError: A balance read failed after account access (session stays connected).
        """
        if self.provider is None:
            raise ProviderError("No wallet provider found. Install or configure a wallet first.")
        if self.connecting:
            return self.state

        self.connecting = True
        try:
            await self.provider.add_chain(self.network.to_add_chain_params())

            accounts = await self.provider.request_accounts()
            address = to_checksum_address(accounts[0])
            self.state = SessionState(address=address, connected=True)
            logger.info(f"Connected address: {address}")

            native_balance = await self.provider.get_balance(address)
            self._update(native_balance=native_balance)
            logger.info(f"{self.network.native_currency.symbol} balance: {native_balance}")

            if self.deployment.uses_wrapped_fee:
                await self._approve_on_connect()

            if self.deployment.wrapped_token_address:
                wrapped_balance = await self._read_wrapped_balance()
                self._update(wrapped_balance=wrapped_balance)
                logger.info(f"{self.deployment.wrapped_symbol} balance: {wrapped_balance}")
        finally:
            self.connecting = False

        await self._publish(SessionConnectedEvent(address=self.state.address, chain_id=self.network.chain_id))
        return self.state

    async def disconnect(self) -> None:
        """Clear every session field. No on-chain action."""
        address = self.state.address
        self.state = SessionState()
        logger.info("Wallet disconnected")
        await self._publish(SessionDisconnectedEvent(address=address))

    async def refresh_balances(self, native: bool = True, wrapped: bool = False) -> SessionState:
        """
        Re-read the requested balances of the connected account.

        Raises:
            ProviderError: If the session is not connected.
            TransactionError: If a balance read fails.
        """
        provider = self.require_connected()
        native_balance = wrapped_balance = None

        if native:
            native_balance = await provider.get_balance(self.address)
            self._update(native_balance=native_balance)
        if wrapped and self.deployment.wrapped_token_address:
            wrapped_balance = await self._read_wrapped_balance()
            self._update(wrapped_balance=wrapped_balance)

        logger.info(f"Balances refreshed: native={native_balance}, wrapped={wrapped_balance}")
        await self._publish(BalancesRefreshedEvent(native_balance=native_balance, wrapped_balance=wrapped_balance))
        return self.state

    async def factory_allowance(self) -> int:
        """
        Wrapped-token allowance the connected account granted to the factory.

        Raises:
            ApprovalError: If no wrapped token is configured or the read fails.
        """
        provider = self.require_connected()
        token = self._wrapped_token_or_raise()
        try:
            allowance = await query_erc20_allowance(
                provider, token, self.address, self.deployment.factory_address
            )
        except TransactionError as e:
            raise ApprovalError(str(e)) from e
        logger.info(f"Current {self.deployment.wrapped_symbol} allowance for factory: {allowance}")
        return allowance

    async def approve_factory(self, amount: int = MAX_UINT256) -> str:
        """
        Approve the factory to pull wrapped tokens and wait for confirmation.

        Returns:
            str: Approval transaction hash.

        Raises:
            ApprovalError: If the wallet rejects or the approval reverts.
        """
        provider = self.require_connected()
        token = self._wrapped_token_or_raise()
        logger.info(f"Approving factory {self.deployment.factory_address} to spend {self.deployment.wrapped_symbol}")
        try:
            tx_hash, _ = await approve_erc20(
                provider, token, self.address, self.deployment.factory_address, amount
            )
        except TransactionError as e:
            raise ApprovalError(f"Approval transaction failed: {e}", tx_hash=e.tx_hash) from e
        logger.info(f"Approval confirmed: {tx_hash}")
        return tx_hash

    async def ensure_factory_allowance(
        self, on_approve: Optional[Callable[[], Awaitable[Any]]] = None
    ) -> Optional[str]:
        """
        Approve the factory when the current allowance is below the threshold.

        Args:
            on_approve: Awaited just before the approval is sent, only when one is needed.

        Returns:
            The approval transaction hash, or None when no approval was needed.

        Raises:
            ApprovalError: If the allowance read or the approval fails.
        """
        if await self.factory_allowance() >= self.allowance_threshold:
            return None
        if on_approve is not None:
            await on_approve()
        return await self.approve_factory()

    async def _approve_on_connect(self) -> None:
        # Failure here does not abort connect; it stays visible on the state and the bus.
        try:
            await self.ensure_factory_allowance()
        except ApprovalError as e:
            logger.error(f"{self.deployment.wrapped_symbol} approval failed: {e}")
            self._update(approval_error=str(e))
            await self._publish(ApprovalFailedEvent(error_message=str(e), tx_hash=e.tx_hash))
        else:
            self._update(approval_error=None)

    async def _read_wrapped_balance(self) -> int:
        return await query_erc20_balance(self.provider, self.deployment.wrapped_token_address, self.address)

    def _wrapped_token_or_raise(self) -> str:
        token = self.deployment.wrapped_token_address
        if not token:
            raise ApprovalError("No wrapped token configured for this deployment")
        return token

    def _update(self, **fields) -> None:
        self.state = self.state.model_copy(update=fields)

    async def _publish(self, event: BaseEvent) -> None:
        if self._bus is not None:
            await self._bus.emit(event)
