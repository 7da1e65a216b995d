"""
Token Factory + Wrapped Native Token ABI Module

Minimal ABI fragments for the contracts the launchpad drives:

- the token factory (fee accessors, ``createToken``, ``TokenCreated`` event);
- the wrapped native token (WETH9-style ``deposit`` / ``withdraw`` plus the
  ERC20 ``approve`` / ``allowance`` / ``balanceOf`` surface).

Usage:
    from token_launchpad.adapters.evm.abis import get_fee_accessor_abi

    factory = web3.eth.contract(address=factory_address, abi=get_fee_accessor_abi(["TOTAL_FEE"]))
    fee = await factory.functions.TOTAL_FEE().call()
"""

from typing import Dict, Any, List, Iterable


def _fee_accessor(name: str) -> Dict[str, Any]:
    return {
        "name": name,
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    }


def get_fee_accessor_abi(names: Iterable[str]) -> List[Dict[str, Any]]:
    """
    Get ABI entries for the factory's parameterless ``uint256`` fee constants.

    Args:
        names: Accessor names, e.g. ``["TOTAL_FEE"]`` or
            ``["CREATION_FEE", "BANK_MODULE_FEE"]``.

    Returns:
        List[Dict[str, Any]]: One view-function entry per name.
    """
    return [_fee_accessor(name) for name in names]


def get_create_token_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for ``createToken(name, symbol, decimals, initialSupply)`` (payable).

    Example:
        abi = get_create_token_abi()
        contract = web3.eth.contract(address=factory_address, abi=abi)
        tx_hash = await contract.functions.createToken(
            "My Token", "MTK", 18, 10**24
        ).transact({"from": sender, "value": fee})
    """
    return [
        {
            "name": "createToken",
            "type": "function",
            "stateMutability": "payable",
            "inputs": [
                {"name": "name", "type": "string"},
                {"name": "symbol", "type": "string"},
                {"name": "decimals", "type": "uint8"},
                {"name": "initialSupply", "type": "uint256"},
            ],
            "outputs": [{"name": "", "type": "address"}],
        }
    ]


def get_token_created_event_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for the factory's ``TokenCreated`` event.

    The deployed token is the first indexed argument, so it is carried in
    ``topics[1]`` of the log.
    """
    return [
        {
            "name": "TokenCreated",
            "type": "event",
            "anonymous": False,
            "inputs": [
                {"name": "token", "type": "address", "indexed": True},
                {"name": "creator", "type": "address", "indexed": True},
                {"name": "name", "type": "string", "indexed": False},
                {"name": "symbol", "type": "string", "indexed": False},
                {"name": "decimals", "type": "uint8", "indexed": False},
                {"name": "initialSupply", "type": "uint256", "indexed": False},
            ],
        }
    ]


def get_balance_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for ERC20 ``balanceOf(account)``.

    Example:
        contract = web3.eth.contract(address=token_address, abi=get_balance_abi())
        balance = await contract.functions.balanceOf(address).call()
    """
    return [
        {
            "name": "balanceOf",
            "type": "function",
            "stateMutability": "view",
            "inputs": [{"name": "account", "type": "address"}],
            "outputs": [{"name": "", "type": "uint256"}],
        }
    ]


def get_allowance_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for ERC20 ``allowance(owner, spender)``.

    Example:
        contract = web3.eth.contract(address=token_address, abi=get_allowance_abi())
        allowance = await contract.functions.allowance(owner, spender).call()
    """
    return [
        {
            "name": "allowance",
            "type": "function",
            "stateMutability": "view",
            "inputs": [
                {"name": "owner", "type": "address"},
                {"name": "spender", "type": "address"},
            ],
            "outputs": [{"name": "", "type": "uint256"}],
        }
    ]


def get_approve_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for ERC20 ``approve(spender, amount)``.
    """
    return [
        {
            "name": "approve",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [
                {"name": "spender", "type": "address"},
                {"name": "amount", "type": "uint256"},
            ],
            "outputs": [{"name": "", "type": "bool"}],
        }
    ]


def get_deposit_withdraw_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for the WETH9-style ``deposit()`` (payable) and ``withdraw(wad)``.

    ``deposit`` mints wrapped tokens 1:1 for the native value sent;
    ``withdraw`` burns ``wad`` wrapped tokens and returns native currency.
    """
    return [
        {
            "name": "deposit",
            "type": "function",
            "stateMutability": "payable",
            "inputs": [],
            "outputs": [],
        },
        {
            "name": "withdraw",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [{"name": "wad", "type": "uint256"}],
            "outputs": [],
        },
    ]



def event_signature(abi_entry: Dict[str, Any]) -> str:
    """Canonical ``Name(type,...)`` signature of an event ABI entry."""
    types = ",".join(item["type"] for item in abi_entry["inputs"])
    return f"{abi_entry['name']}({types})"
