"""
EVM On-Chain State Queries

Read-only helpers used by the session and the fee resolver: ERC20 allowance
and balance of the wrapped token, and the factory's fee constants.
"""

from typing import Dict

from ..bases import WalletProvider
from ...engine.exceptions import TransactionError
from .abis import get_allowance_abi, get_balance_abi, get_fee_accessor_abi


async def query_erc20_allowance(provider: WalletProvider, token_addr: str, owner: str, spender: str) -> int:
    """
    Retrieves the amount of tokens that an owner allowed a spender to withdraw.

    Args:
        provider: Wallet provider used for the ``allowance(address,address)`` call.
        token_addr: The contract address of the ERC20 token.
        owner: The address of the token holder.
        spender: The address authorized to spend the tokens.

    Returns:
        int: The remaining allowance in the token's base units.

    Raises:
        TransactionError: If the contract call fails.
    """
    try:
        allowance = await provider.call(token_addr, get_allowance_abi(), "allowance", owner, spender)
    except TransactionError as e:
        raise TransactionError(
            f"Failed to query allowance for token {token_addr}. "
            f"Owner: {owner}, Spender: {spender}. Error: {e}"
        ) from e
    return int(allowance)


async def query_erc20_balance(provider: WalletProvider, token_addr: str, owner: str) -> int:
    """
    Query the ERC20 ``balanceOf(owner)`` of ``token_addr``.

    Raises:
        TransactionError: If the contract call fails.
    """
    balance = await provider.call(token_addr, get_balance_abi(), "balanceOf", owner)
    return int(balance)


async def query_fee_constants(provider: WalletProvider, factory_addr: str, *accessors: str) -> Dict[str, int]:
    """
    Read the factory's parameterless ``uint256`` fee constants.

    Args:
        provider: Wallet provider used for the calls.
        factory_addr: Token factory address.
        *accessors: Constant names, e.g. ``"TOTAL_FEE"``.

    Returns:
        Dict[str, int]: accessor name -> value in smallest units.

    Raises:
        TransactionError: If any accessor call fails.
    """
    abi = get_fee_accessor_abi(accessors)
    fees: Dict[str, int] = {}
    for accessor in accessors:
        try:
            fees[accessor] = int(await provider.call(factory_addr, abi, accessor))
        except TransactionError as e:
            raise TransactionError(f"Failed to read {accessor}() from factory {factory_addr}: {e}") from e
    return fees
