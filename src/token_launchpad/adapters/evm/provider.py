"""
EVM Wallet Provider

AsyncWeb3-backed WalletProvider for wallets and signers that expose an
EIP-1193 style JSON-RPC endpoint (account access, ``eth_sendTransaction``,
``wallet_addEthereumChain``, ``wallet_watchAsset``).

Key Features:
    - Raw wallet requests through the provider's ``make_request``
    - Contract reads and wallet-signed contract calls via web3 contract objects
    - Receipt waiting with revert / timeout detection
    - Conversion of web3 exceptions into the launchpad taxonomy

Dependencies:
    - web3.py: For JSON-RPC interaction and ABI encoding
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted, Web3Exception

from ..bases import WalletProvider
from ...engine.exceptions import ProviderError, TransactionError
from .constants import RECEIPT_TIMEOUT, get_wallet_rpc_url_from_env

logger = logging.getLogger(__name__)

_RPC_ERRORS = (Web3Exception, ValueError, OSError, asyncio.TimeoutError)


def provider_error_message(error: BaseException) -> str:
    """
    Extract the provider's own message from a web3 / RPC exception.

    Older web3 releases raise ``ValueError({"code": 4001, "message": "..."})``;
    newer ones carry the message on the exception. Falls back to ``str(error)``.
    """
    if error.args and isinstance(error.args[0], dict):
        message = error.args[0].get("message")
        if message:
            return str(message)
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or type(error).__name__


class EVMWalletProvider(WalletProvider):
    """
    WalletProvider implementation on top of ``web3.AsyncWeb3``.

    Attributes:
        web3: AsyncWeb3 instance bound to the wallet endpoint
        receipt_timeout: Seconds to wait for a receipt before giving up

    Example:
        provider = EVMWalletProvider("http://127.0.0.1:1248")
        accounts = await provider.request_accounts()
        balance = await provider.get_balance(accounts[0])
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        web3: Optional[AsyncWeb3] = None,
        request_timeout: int = 60,
        receipt_timeout: float = RECEIPT_TIMEOUT,
    ):
        """
        Initialize the provider from an explicit AsyncWeb3 instance or a wallet RPC URL.

        Args:
            rpc_url: Wallet / signer JSON-RPC endpoint. Falls back to the
                LAUNCHPAD_WALLET_RPC_URL environment variable.
            web3: Pre-built AsyncWeb3 instance (takes precedence over rpc_url).
            request_timeout: HTTP request timeout in seconds.
            receipt_timeout: Receipt wait timeout in seconds.

        Raises:
            ProviderError: If neither a web3 instance nor an endpoint is available.
        """
        if web3 is None:
            rpc_url = rpc_url or get_wallet_rpc_url_from_env()
            if not rpc_url:
                raise ProviderError(
                    "No wallet provider configured. Pass 'rpc_url' or set "
                    "the 'LAUNCHPAD_WALLET_RPC_URL' environment variable."
                )
            web3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(
                rpc_url,
                request_kwargs={"timeout": request_timeout}
            ))
        self.web3 = web3
        self.receipt_timeout = receipt_timeout

    async def request(self, method: str, params: Optional[Any] = None) -> Any:
        try:
            response = await self.web3.provider.make_request(method, params if params is not None else [])
        except _RPC_ERRORS as e:
            raise TransactionError(provider_error_message(e)) from e

        error = response.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise TransactionError(message or f"{method} failed")
        return response.get("result")

    async def get_balance(self, address: str) -> int:
        try:
            balance = await self.web3.eth.get_balance(AsyncWeb3.to_checksum_address(address))
        except _RPC_ERRORS as e:
            raise TransactionError(f"Failed to read balance of {address}: {provider_error_message(e)}") from e
        return int(balance)

    async def call(self, contract_address: str, abi: List[Dict[str, Any]], function: str, *args: Any) -> Any:
        contract = self.web3.eth.contract(address=AsyncWeb3.to_checksum_address(contract_address), abi=abi)
        try:
            return await getattr(contract.functions, function)(*args).call()
        except _RPC_ERRORS as e:
            raise TransactionError(provider_error_message(e)) from e

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
        contract = self.web3.eth.contract(address=AsyncWeb3.to_checksum_address(contract_address), abi=abi)
        tx_params: Dict[str, Any] = {"from": AsyncWeb3.to_checksum_address(sender)}
        if value:
            tx_params["value"] = value

        try:
            tx_hash = await getattr(contract.functions, function)(*args).transact(tx_params)
        except _RPC_ERRORS as e:
            raise TransactionError(provider_error_message(e)) from e

        tx_hex = AsyncWeb3.to_hex(tx_hash)
        logger.info(f"{function} sent to {contract_address}: {tx_hex} (value={value})")
        return tx_hex

    async def wait_for_receipt(self, tx_hash: str, timeout: Optional[float] = None) -> Dict[str, Any]:
        try:
            receipt = await self.web3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=timeout or self.receipt_timeout
            )
        except TimeExhausted as e:
            raise TransactionError("Transaction confirmation timed out", tx_hash=tx_hash) from e
        except _RPC_ERRORS as e:
            raise TransactionError(provider_error_message(e), tx_hash=tx_hash) from e

        if receipt.get("status") != 1:
            raise TransactionError(f"Transaction reverted on-chain: {tx_hash}", tx_hash=tx_hash)
        return dict(receipt)
