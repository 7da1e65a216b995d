"""
Abstract Base Class for Wallet Providers

Defines the interface the wallet session and the flows use to talk to the
user's wallet. It mirrors the request surface an injected EIP-1193 wallet
offers: chain management and account access requests, reads, and
transactions that the wallet itself signs and broadcasts.

The launchpad never sees a private key; every state-changing call goes
through ``transact`` and is signed on the wallet side.

Concrete implementations:
    - EVMWalletProvider (adapters/evm/provider.py): AsyncWeb3 over a wallet
      or signer JSON-RPC endpoint.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ..engine.exceptions import ChainConfigError, ProviderError, TransactionError


class WalletProvider(ABC):
    """
    Abstract Base Class for Wallet Providers.

    Key Responsibilities:
    1. request: Raw JSON-RPC request to the wallet (``wallet_*``, ``eth_requestAccounts``)
    2. get_balance / call: Read native balances and contract state
    3. transact: Ask the wallet to sign and broadcast a contract call
    4. wait_for_receipt: Await confirmation of a broadcast transaction

    Error contract:
        ``request``, ``call``, ``get_balance``, ``transact`` and
        ``wait_for_receipt`` raise TransactionError carrying the provider's
        message; helper methods convert it to the more specific
        ChainConfigError / ProviderError where the caller needs that.
    """

    @abstractmethod
    async def request(self, method: str, params: Optional[Any] = None) -> Any:
        """
        Send a raw JSON-RPC request to the wallet.

        Args:
            method: RPC method (e.g. ``wallet_addEthereumChain``).
            params: Positional list or parameter object, as the method expects.

        Returns:
            The ``result`` member of the response.

        Raises:
            TransactionError: If the wallet answers with an error or is unreachable.
        """
        pass

    @abstractmethod
    async def get_balance(self, address: str) -> int:
        """Native balance of ``address`` in smallest units."""
        pass

    @abstractmethod
    async def call(self, contract_address: str, abi: List[Dict[str, Any]], function: str, *args: Any) -> Any:
        """
        Execute a read-only contract call.

        Args:
            contract_address: Target contract.
            abi: ABI containing ``function``.
            function: Function name.
            *args: Function arguments.
        """
        pass

    @abstractmethod
    async def transact(
        self,
        contract_address: str,
        abi: List[Dict[str, Any]],
        function: str,
        args: Sequence[Any] = (),
        *,
        sender: str,
        value: int = 0,
    ) -> str:
        """
        Ask the wallet to sign and broadcast a contract call.

        Args:
            contract_address: Target contract.
            abi: ABI containing ``function``.
            function: Function name.
            args: Function arguments.
            sender: Account the wallet signs with.
            value: Native value to attach, in smallest units.

        Returns:
            str: 0x-prefixed transaction hash.
        """
        pass

    @abstractmethod
    async def wait_for_receipt(self, tx_hash: str, timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        Wait until ``tx_hash`` is mined.

        Returns:
            The receipt as a dict (``status``, ``logs``, ``blockNumber``...).

        Raises:
            TransactionError: If the transaction reverted or the wait timed out.
        """
        pass

    async def add_chain(self, chain_params: Dict[str, Any]) -> None:
        """
        Ask the wallet to add (and switch to) the target chain.

        Raises:
            ChainConfigError: If the wallet rejects the request.
        """
        try:
            await self.request("wallet_addEthereumChain", [chain_params])
        except TransactionError as e:
            raise ChainConfigError(f"Failed to add chain {chain_params.get('chainId')}: {e}") from e

    async def request_accounts(self) -> List[str]:
        """
        Ask the wallet for account access.

        Raises:
            ProviderError: If access is refused or no account is exposed.
        """
        try:
            accounts = await self.request("eth_requestAccounts", [])
        except TransactionError as e:
            raise ProviderError(f"Account access denied: {e}") from e
        if not accounts:
            raise ProviderError("Wallet returned no accounts")
        return list(accounts)

    async def watch_asset(self, address: str, symbol: str, decimals: int) -> bool:
        """
        Ask the wallet to track an ERC20 token (EIP-747).

        Returns:
            bool: True when the wallet accepted the token.

        Raises:
            TransactionError: If the wallet rejects the request.
        """
        result = await self.request(
            "wallet_watchAsset",
            {
                "type": "ERC20",
                "options": {"address": address, "symbol": symbol, "decimals": decimals},
            },
        )
        return bool(result)
