"""
EVM Wallet-Signed Transactions

Helpers that ask the wallet to sign and broadcast the launchpad's
state-changing calls. No key material is handled here; the wallet provider
performs ``eth_sendTransaction``.

Exported helpers
----------------
approve_erc20
    ``approve(spender, amount)`` on an ERC20 token, optionally awaiting the receipt.
create_token
    ``createToken(name, symbol, decimals, initialSupply)`` on the factory with
    the native fee attached as value.
deposit_native / withdraw_wrapped
    WETH9-style wrap (``deposit()`` payable) and unwrap (``withdraw(wad)``).
"""

import logging
from typing import Any, Dict, Optional, Tuple

from ..bases import WalletProvider
from .abis import get_approve_abi, get_create_token_abi, get_deposit_withdraw_abi

logger = logging.getLogger(__name__)


async def approve_erc20(
    provider: WalletProvider,
    token_addr: str,
    owner: str,
    spender: str,
    amount: int,
    wait: bool = True,
) -> Tuple[str, Optional[Dict[str, Any]]]:
    """
    Ask the wallet to sign and broadcast an ERC20 approve transaction.

    Args:
        provider: Wallet provider that signs for ``owner``.
        token_addr: The contract address of the ERC20 token.
        owner: Token holder; the transaction sender.
        spender: The address authorized to spend the tokens.
        amount: The raw amount (in smallest units) to approve.
        wait: If True, waits for the transaction receipt before returning.

    Returns:
        A tuple of (transaction_hash_hex, transaction_receipt).

    Raises:
        TransactionError: If the wallet rejects, the transaction reverts, or the wait times out.
    """
    tx_hash = await provider.transact(
        token_addr, get_approve_abi(), "approve", (spender, amount), sender=owner
    )

    if wait:
        receipt = await provider.wait_for_receipt(tx_hash)
        return tx_hash, receipt

    return tx_hash, None


async def create_token(
    provider: WalletProvider,
    factory_addr: str,
    sender: str,
    name: str,
    symbol: str,
    decimals: int,
    initial_supply: int,
    value: int,
) -> str:
    """
    Submit ``createToken`` to the factory.

    Args:
        initial_supply: Supply already scaled by ``10**decimals``.
        value: Native fee attached to the call, in smallest units.

    Returns:
        str: Transaction hash (not yet confirmed).
    """
    logger.info(
        f"Calling createToken with: name={name}, symbol={symbol}, decimals={decimals}, "
        f"initialSupply={initial_supply}, nativeValue={value}"
    )
    return await provider.transact(
        factory_addr,
        get_create_token_abi(),
        "createToken",
        (name, symbol, decimals, initial_supply),
        sender=sender,
        value=value,
    )


async def deposit_native(provider: WalletProvider, wrapped_addr: str, sender: str, value: int) -> str:
    """Wrap ``value`` native units by calling ``deposit()`` with that value attached."""
    return await provider.transact(
        wrapped_addr, get_deposit_withdraw_abi(), "deposit", (), sender=sender, value=value
    )


async def withdraw_wrapped(provider: WalletProvider, wrapped_addr: str, sender: str, value: int) -> str:
    """Unwrap ``value`` wrapped units by calling ``withdraw(value)``."""
    return await provider.transact(
        wrapped_addr, get_deposit_withdraw_abi(), "withdraw", (value,), sender=sender
    )
