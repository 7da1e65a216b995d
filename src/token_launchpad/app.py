"""
Launchpad - the application state aggregate.

Wires one WalletSession, the fee resolver, the token creation flow and the
wrap/unwrap flow to a shared EventBus, and exposes the user-level actions a
front end binds to its buttons.

Usage:
    ```python
    launchpad = Launchpad.from_env()
    if await launchpad.connect():
        launchpad.creation.form = TokenCreationRequest(name="My Token", ticker="MTK")
        result = await launchpad.create_token()
    ```
"""

import logging
from typing import Any, Callable, Optional, Sequence

from .adapters.bases import WalletProvider
from .adapters.evm.constants import (
    DeploymentConfig,
    NetworkConfig,
    INJECTIVE_EVM_TESTNET,
    get_deployment_from_env,
    get_wallet_rpc_url_from_env,
)
from .adapters.evm.provider import EVMWalletProvider
from .clients.verify_client import VerificationClient
from .engine.events import BaseEvent, Dependencies, EventBus
from .engine.exceptions import ChainConfigError, ProviderError, TransactionError
from .flows.creation import TokenCreationFlow
from .flows.fees import FeeResolver
from .flows.session import WalletSession
from .flows.wrapping import WrapUnwrapFlow
from .schemas.https import VerificationResponse
from .schemas.tokens import TokenCreationRequest, TokenCreationResult
from .utils import format_balance, shorten_address

logger = logging.getLogger(__name__)


class Launchpad:
    """
    Application state: session, fee resolver, creation and wrap flows.

    Attributes:
        bus: EventBus every component publishes to.
        session: The wallet session.
        fees: Factory fee reader.
        creation: Token creation flow (status flow name ``"creation"``).
        wrapping: Wrap/unwrap flow (status flow name ``"wrap"``).
        connect_error: Message of the last failed connect attempt, if any.
    """

    def __init__(
        self,
        provider: Optional[WalletProvider] = None,
        network: NetworkConfig = INJECTIVE_EVM_TESTNET,
        deployment: Optional[DeploymentConfig] = None,
        bus: Optional[EventBus] = None,
        verification_client: Optional[VerificationClient] = None,
    ):
        deployment = deployment or get_deployment_from_env()
        self.bus = bus or EventBus()
        self.session = WalletSession(provider, network, deployment, bus=self.bus)
        self.bus.deps = Dependencies(session=self.session, network=network, deployment=deployment)

        self.fees = FeeResolver(self.session)
        self.creation = TokenCreationFlow(self.session, self.fees, bus=self.bus)
        self.wrapping = WrapUnwrapFlow(self.session, bus=self.bus)
        self.verification_client = verification_client
        self.connect_error: Optional[str] = None

    @classmethod
    def from_env(cls, **kwargs) -> "Launchpad":
        """Build a launchpad whose wallet and deployment come from the environment."""
        if "provider" not in kwargs:
            rpc_url = get_wallet_rpc_url_from_env()
            kwargs["provider"] = EVMWalletProvider(rpc_url) if rpc_url else None
        return cls(**kwargs)

    def subscribe(self, event_class: type[BaseEvent], handler: Callable) -> None:
        """Register an async ``handler(event, deps)`` for ``event_class``."""
        self.bus.subscribe(event_class, handler)

    def hook(self, event_class: type[BaseEvent]) -> Callable:
        """Decorator for registering event hooks.

        Example:
            @launchpad.hook(TokenCreatedEvent)
            async def on_created(event, deps):
                print(event.result.address)
        """
        def decorator(hook_func: Callable) -> Callable:
            self.bus.hook(event_class, hook_func)
            return hook_func
        return decorator

    # ==================== Wallet ====================

    async def connect(self) -> bool:
        """
        Connect the wallet.

        Returns:
            bool: True on success; on failure the reason is kept in ``connect_error``.
        """
        try:
            await self.session.connect()
        except (ProviderError, ChainConfigError, TransactionError) as e:
            logger.error(f"Error connecting wallet: {e}")
            self.connect_error = str(e)
            return False
        self.connect_error = None
        return True

    async def disconnect(self) -> None:
        await self.session.disconnect()

    async def toggle_connection(self) -> bool:
        """Connect when disconnected, disconnect when connected. Returns the new connected state."""
        if self.session.connected:
            await self.disconnect()
            return False
        return await self.connect()

    def wallet_label(self) -> str:
        """Text of the wallet button: balance and short address, or a connect prompt."""
        if self.session.connecting:
            return "Connecting..."
        state = self.session.state
        if not state.connected:
            return "Connect Wallet"
        native = self.session.network.native_currency
        if state.native_balance is None:
            return shorten_address(state.address)
        balance = format_balance(state.native_balance, native.decimals)
        return f"{balance} {native.symbol} | {shorten_address(state.address)}"

    # ==================== Token creation ====================

    async def create_token(self, request: Optional[TokenCreationRequest] = None) -> Optional[TokenCreationResult]:
        return await self.creation.submit(request)

    async def dismiss_result(self) -> None:
        await self.creation.dismiss()

    async def add_token_to_wallet(self) -> bool:
        return await self.creation.add_to_wallet()

    async def verify_created_token(self, constructor_args: Sequence[Any] = ()) -> Optional[VerificationResponse]:
        """
        Ask the verification service to verify the last created token.

        Returns:
            The service response, or None when there is no client or no token address.

        Raises:
            VerificationError: If the service call fails.
        """
        result = self.creation.result
        if self.verification_client is None or result is None or not result.address:
            return None
        return await self.verification_client.verify(result.address, constructor_args)

    # ==================== Wrap / unwrap ====================

    async def wrap(self, amount=None) -> Optional[str]:
        return await self.wrapping.wrap(amount)

    async def unwrap(self, amount=None) -> Optional[str]:
        return await self.wrapping.unwrap(amount)
