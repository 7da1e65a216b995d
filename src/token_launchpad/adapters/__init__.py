from .bases import WalletProvider
from .evm import (
    EVMWalletProvider,
    FeeVariant,
    NetworkConfig,
    DeploymentConfig,
    INJECTIVE_EVM_TESTNET,
)

__all__ = [
    "WalletProvider",
    "EVMWalletProvider",
    "FeeVariant",
    "NetworkConfig",
    "DeploymentConfig",
    "INJECTIVE_EVM_TESTNET",
]
