"""
EVM Network and Deployment Configuration

Provides the chain parameters handed to the wallet (``wallet_addEthereumChain``),
the factory / wrapped-token deployment description, environment-aware
overrides and the canonical amount conversions.

Environment Variables:
    - LAUNCHPAD_WALLET_RPC_URL: JSON-RPC endpoint of the wallet / signer
      (e.g. a local Frame or Clef instance). Transactions are signed there.
    - LAUNCHPAD_FACTORY_ADDRESS: Token factory contract address.
    - LAUNCHPAD_FEE_VARIANT: ``native_only`` or ``native_and_wrapped``.
    - LAUNCHPAD_WRAPPED_TOKEN_ADDRESS: Wrapped native token (wINJ) address.
"""

import os
from decimal import Decimal, Inexact, InvalidOperation, localcontext
from enum import Enum
from typing import Dict, List, Optional, Any

import dotenv
from pydantic import BaseModel, ConfigDict, Field

from .abis import event_signature, get_token_created_event_abi

dotenv.load_dotenv()


#: Allowance below this value triggers a fresh approval (2**128 ~ 3.4x10^38).
#: Large enough to cover any realistic fee volume while avoiding continuous
#: re-approval transactions.
LOW_ALLOWANCE_THRESHOLD: int = 2**128

#: Maximum uint256, used as the "unlimited" approve amount.
MAX_UINT256: int = 2**256 - 1

#: Receipt wait timeout in seconds for wallet-submitted transactions.
RECEIPT_TIMEOUT: float = 180.0


class FeeVariant(str, Enum):
    """
    Fee-payment variants a factory deployment can charge for token creation.

    Attributes:
        NATIVE_ONLY: The whole fee is sent as native value (``TOTAL_FEE()``).
        NATIVE_AND_WRAPPED: A wrapped-token creation fee pulled through an
            allowance plus a native bank-module fee sent as value.
    """
    NATIVE_ONLY = "native_only"
    NATIVE_AND_WRAPPED = "native_and_wrapped"


class NativeCurrency(BaseModel):
    """Native currency metadata in the shape wallets expect."""
    name: str
    symbol: str
    decimals: int = Field(default=18, ge=0)


class NetworkConfig(BaseModel):
    """EVM blockchain network configuration."""
    model_config = ConfigDict(frozen=True)

    chain_id: int = Field(..., gt=0, description="EIP-155 chain id")
    chain_name: str = Field(..., description="Human-readable network name")
    rpc_urls: List[str] = Field(..., min_length=1, description="Public JSON-RPC endpoints")
    native_currency: NativeCurrency
    explorer_urls: List[str] = Field(default_factory=list, description="Block explorer URLs")

    @property
    def chain_id_hex(self) -> str:
        return hex(self.chain_id)

    def to_add_chain_params(self) -> Dict[str, Any]:
        """
        Build the ``wallet_addEthereumChain`` parameter object (EIP-3085).

        Returns:
            Dict[str, Any]: ``{chainId, chainName, rpcUrls, nativeCurrency, blockExplorerUrls}``
        """
        return {
            "chainId": self.chain_id_hex,
            "chainName": self.chain_name,
            "rpcUrls": list(self.rpc_urls),
            "nativeCurrency": self.native_currency.model_dump(),
            "blockExplorerUrls": list(self.explorer_urls),
        }


class DeploymentConfig(BaseModel):
    """Factory and wrapped-token deployment the launchpad talks to."""
    model_config = ConfigDict(frozen=True)

    factory_address: str = Field(..., description="Token factory contract address")
    fee_variant: FeeVariant = Field(default=FeeVariant.NATIVE_ONLY)
    total_fee_accessor: str = Field(default="TOTAL_FEE")
    creation_fee_accessor: str = Field(default="CREATION_FEE")
    bank_module_fee_accessor: str = Field(default="BANK_MODULE_FEE")
    wrapped_token_address: Optional[str] = Field(default=None, description="Wrapped native token address")
    wrapped_symbol: str = Field(default="wINJ")
    wrapped_decimals: int = Field(default=18, ge=0)
    token_created_event: str = Field(
        default=event_signature(get_token_created_event_abi()[0]),
        description="Canonical signature of the factory's creation event",
    )

    @property
    def uses_wrapped_fee(self) -> bool:
        return self.fee_variant == FeeVariant.NATIVE_AND_WRAPPED


INJECTIVE_EVM_TESTNET = NetworkConfig(
    chain_id=1439,
    chain_name="Injective EVM",
    rpc_urls=["https://k8s.testnet.json-rpc.injective.network/"],
    native_currency=NativeCurrency(name="Injective", symbol="INJ", decimals=18),
    explorer_urls=["https://testnet.blockscout.injective.network/blocks"],
)

#: Factory deployment used by the native-only front end.
DEFAULT_FACTORY_ADDRESS: str = "0x715513b13Aa8118827167Dc5B51E3d6DE492417E"

#: Canonical wINJ contract on Injective EVM.
DEFAULT_WRAPPED_TOKEN_ADDRESS: str = "0x0000000088827d2d103ee2d9A6b781773AE03FfB"


def get_wallet_rpc_url_from_env() -> Optional[str]:
    """
    Load the wallet / signer JSON-RPC endpoint from the environment.

    The endpoint must expose the account-managing methods
    (``eth_requestAccounts``, ``eth_sendTransaction``, ``wallet_*``); the
    launchpad never handles private keys itself.

    Returns:
        str: Endpoint URL, or None when no wallet is configured.
    """
    url = os.getenv("LAUNCHPAD_WALLET_RPC_URL")
    return url.strip() if url and url.strip() else None


def get_deployment_from_env(base: Optional[DeploymentConfig] = None) -> DeploymentConfig:
    """
    Build a DeploymentConfig from defaults overridden by environment variables.

    Raises:
        ValueError: If ``LAUNCHPAD_FEE_VARIANT`` is not a known variant.
    """
    base = base or DeploymentConfig(
        factory_address=DEFAULT_FACTORY_ADDRESS,
        wrapped_token_address=DEFAULT_WRAPPED_TOKEN_ADDRESS,
    )
    overrides: Dict[str, Any] = {}

    factory = os.getenv("LAUNCHPAD_FACTORY_ADDRESS")
    if factory:
        overrides["factory_address"] = factory.strip()

    variant = os.getenv("LAUNCHPAD_FEE_VARIANT")
    if variant:
        try:
            overrides["fee_variant"] = FeeVariant(variant.strip().lower())
        except ValueError as e:
            raise ValueError(
                f"Unsupported fee variant '{variant}'. "
                f"Expected one of: {', '.join(v.value for v in FeeVariant)}"
            ) from e

    wrapped = os.getenv("LAUNCHPAD_WRAPPED_TOKEN_ADDRESS")
    if wrapped:
        overrides["wrapped_token_address"] = wrapped.strip()

    return base.model_copy(update=overrides)


def amount_to_value(*, amount: float | int | str | Decimal, decimals: int) -> int:
    """Convert a human-readable `amount` into a smallest-unit integer `value`.

    Args:
        amount: Human-readable amount (e.g. "1.5" INJ). Accepts float/int/str/Decimal.
        decimals: Currency decimals (18 for INJ).

    Returns:
        int: Smallest-unit integer value.

    Raises:
        ValueError: If inputs are invalid or the amount cannot be represented in smallest units.
    """
    if not isinstance(decimals, int) or decimals < 0:
        raise ValueError("decimals must be a non-negative int")

    try:
        # str() avoids binary-float surprises (0.1 -> 0.100000000000000005...)
        dec_amount = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e

    if not dec_amount.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")

    if dec_amount < 0:
        raise ValueError("amount must be non-negative")

    try:
        with localcontext() as ctx:
            ctx.prec = 100
            ctx.traps[Inexact] = True
            scaled = dec_amount.scaleb(decimals)
            integral = scaled == scaled.to_integral_value()
    except ArithmeticError as e:
        raise ValueError(f"Invalid amount: {amount!r} is out of range") from e

    if not integral:
        raise ValueError(
            f"amount {amount!r} is not representable with decimals={decimals} "
            f"(would create fractional smallest units)"
        )

    return int(scaled)


def value_to_amount(*, value: int | str | Decimal, decimals: int) -> Decimal:
    """Convert a smallest-unit integer `value` into a human-readable Decimal amount.

    Raises:
        ValueError: If inputs are invalid.
    """
    if not isinstance(decimals, int) or decimals < 0:
        raise ValueError("decimals must be a non-negative int")

    try:
        dec_value = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"Invalid value: {value!r}") from e

    if dec_value < 0:
        raise ValueError("value must be non-negative")

    if dec_value != dec_value.to_integral_value():
        raise ValueError("value must be an integer in smallest units")

    with localcontext() as ctx:
        ctx.prec = 100
        return dec_value.scaleb(-decimals)
