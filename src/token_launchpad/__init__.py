"""
token_launchpad - wallet orchestration for a token-factory launchpad on Injective EVM.

Connects a browser-style wallet, discovers the factory's creation fees, creates
ERC20 tokens through the factory and wraps/unwraps the native currency.
"""

from .app import Launchpad
from .adapters import (
    WalletProvider,
    EVMWalletProvider,
    FeeVariant,
    NetworkConfig,
    DeploymentConfig,
    INJECTIVE_EVM_TESTNET,
)
from .engine import EventBus, StatusStateMachine
from .engine.exceptions import (
    LaunchpadError,
    ValidationError,
    ProviderError,
    ChainConfigError,
    ApprovalError,
    TransactionError,
    ReceiptParsingError,
    VerificationError,
    InvalidTransition,
)
from .flows import WalletSession, FeeResolver, TokenCreationFlow, WrapUnwrapFlow
from .schemas import (
    SessionState,
    OperationStatus,
    StatusKind,
    TokenCreationRequest,
    TokenCreationResult,
    ValidationOutcome,
    NativeOnlyFees,
    NativeAndWrappedFees,
    FeeSchedule,
    WrapOperation,
    WrapDirection,
)

__version__ = "0.1.0"

__all__ = [
    "Launchpad",
    "WalletProvider",
    "EVMWalletProvider",
    "FeeVariant",
    "NetworkConfig",
    "DeploymentConfig",
    "INJECTIVE_EVM_TESTNET",
    "EventBus",
    "StatusStateMachine",
    "LaunchpadError",
    "ValidationError",
    "ProviderError",
    "ChainConfigError",
    "ApprovalError",
    "TransactionError",
    "ReceiptParsingError",
    "VerificationError",
    "InvalidTransition",
    "WalletSession",
    "FeeResolver",
    "TokenCreationFlow",
    "WrapUnwrapFlow",
    "SessionState",
    "OperationStatus",
    "StatusKind",
    "TokenCreationRequest",
    "TokenCreationResult",
    "ValidationOutcome",
    "NativeOnlyFees",
    "NativeAndWrappedFees",
    "FeeSchedule",
    "WrapOperation",
    "WrapDirection",
]
