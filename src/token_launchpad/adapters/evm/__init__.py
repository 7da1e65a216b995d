from .provider import EVMWalletProvider, provider_error_message
from .constants import (
    FeeVariant,
    NativeCurrency,
    NetworkConfig,
    DeploymentConfig,
    INJECTIVE_EVM_TESTNET,
    LOW_ALLOWANCE_THRESHOLD,
    MAX_UINT256,
    amount_to_value,
    value_to_amount,
    get_deployment_from_env,
    get_wallet_rpc_url_from_env,
)
from .queries import query_erc20_allowance, query_erc20_balance, query_fee_constants
from .transactions import approve_erc20, create_token, deposit_native, withdraw_wrapped
from .receipts import extract_token_address

__all__ = [
    "EVMWalletProvider",
    "provider_error_message",
    "FeeVariant",
    "NativeCurrency",
    "NetworkConfig",
    "DeploymentConfig",
    "INJECTIVE_EVM_TESTNET",
    "LOW_ALLOWANCE_THRESHOLD",
    "MAX_UINT256",
    "amount_to_value",
    "value_to_amount",
    "get_deployment_from_env",
    "get_wallet_rpc_url_from_env",
    "query_erc20_allowance",
    "query_erc20_balance",
    "query_fee_constants",
    "approve_erc20",
    "create_token",
    "deposit_native",
    "withdraw_wrapped",
    "extract_token_address",
]
