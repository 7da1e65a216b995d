"""
Token Creation and Wrap/Unwrap Schema Models

Pydantic models for the requests the user submits and the results the flows
produce.

Request classes:
    - TokenCreationRequest: Raw form input (name, ticker, supply, decimals).
    - WrapOperation: Direction plus human-readable amount.

Fee classes:
    - NativeOnlyFees: ``TOTAL_FEE`` paid entirely as native value.
    - NativeAndWrappedFees: wrapped-token creation fee pulled via allowance
      plus a native bank-module fee sent as value.
    - FeeSchedule: discriminated union of both (``kind`` tag).

Result classes:
    - TokenCreationResult: Deployed token description kept until dismissed.
"""

import re
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import ConfigDict, Field

from ..utils import format_units
from .bases import CanonicalModel

_UNSIGNED_INT = re.compile(r"[0-9]+")
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")


def _parse_int(pattern: re.Pattern, text: str) -> Optional[int]:
    if not pattern.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # past the interpreter's int digit limit
        return None


MAX_TOKEN_DECIMALS = 18


class ValidationOutcome(str, Enum):
    """
    Result of validating a TokenCreationRequest.

    Attributes:
        VALID: All checks passed
        EMPTY_NAME: Name missing or whitespace only
        EMPTY_TICKER: Ticker missing or whitespace only
        INVALID_DECIMALS: Decimals not an integer within [0, 18]
        INVALID_SUPPLY: Supply not a positive integer
    """
    VALID = "valid"
    EMPTY_NAME = "empty_name"
    EMPTY_TICKER = "empty_ticker"
    INVALID_DECIMALS = "invalid_decimals"
    INVALID_SUPPLY = "invalid_supply"

    @property
    def message(self) -> str:
        return _VALIDATION_MESSAGES[self]


_VALIDATION_MESSAGES = {
    ValidationOutcome.VALID: "",
    ValidationOutcome.EMPTY_NAME: "Please enter a token name!",
    ValidationOutcome.EMPTY_TICKER: "Please enter a ticker symbol!",
    ValidationOutcome.INVALID_DECIMALS: "Decimals must be between 0 and 18!",
    ValidationOutcome.INVALID_SUPPLY: "Please enter a valid supply!",
}


class TokenCreationRequest(CanonicalModel):
    """
    Token creation form input.

    Fields hold the raw user input so that invalid values can be represented
    and reported by validation instead of failing at construction time.

    Attributes:
        name: Token name.
        ticker: Token symbol.
        raw_supply: Whole-token supply as typed (positive integer string).
        decimals: Token decimals as typed (integer within [0, 18]).
    """

    name: str = Field(default="", description="Token name")
    ticker: str = Field(default="", description="Token symbol")
    raw_supply: str = Field(default="1000000", description="Supply in whole tokens")
    decimals: Union[int, str] = Field(default="18", description="Token decimals")

    def decimals_value(self) -> Optional[int]:
        """Parsed decimals, or None when the input is not an integer."""
        if isinstance(self.decimals, bool):
            return None
        if isinstance(self.decimals, int):
            return self.decimals
        return _parse_int(_SIGNED_INT, self.decimals.strip())

    def supply_value(self) -> Optional[int]:
        """Parsed whole-token supply, or None when the input is not an unsigned integer."""
        return _parse_int(_UNSIGNED_INT, self.raw_supply.strip())

    def scaled_supply(self) -> int:
        """
        Initial supply in the token's smallest units: ``raw_supply * 10**decimals``.

        Pure integer arithmetic, exact for any supply and decimals.

        Raises:
            ValueError: If supply or decimals do not parse.
        """
        supply = self.supply_value()
        decimals = self.decimals_value()
        if supply is None or decimals is None or decimals < 0:
            raise ValueError("raw_supply and decimals must be valid integers")
        return supply * 10 ** decimals


class TokenCreationResult(CanonicalModel):
    """
    Description of a freshly deployed token.

    Attributes:
        address: Deployed token address ("" when it could not be extracted).
        name: Token name as submitted.
        symbol: Token symbol as submitted.
        decimals: Token decimals.
        supply: Whole-token supply as typed by the user.
        tx_hash: Creation transaction hash.
        address_source: How the address was found: "event", "position" or "missing".
    """
    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Deployed token address")
    name: str
    symbol: str
    decimals: int = Field(..., ge=0, le=MAX_TOKEN_DECIMALS)
    supply: str
    tx_hash: str = Field(default="")
    address_source: Literal["event", "position", "missing"] = Field(default="event")


class NativeOnlyFees(CanonicalModel):
    """Fee schedule of a factory charging ``TOTAL_FEE`` in native currency."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["native_only"] = "native_only"
    total_fee: int = Field(..., ge=0, description="Total fee in native smallest units")

    @property
    def native_value(self) -> int:
        """Value sent with the createToken transaction."""
        return self.total_fee

    def describe(self, native_symbol: str, wrapped_symbol: str = "", decimals: int = 18) -> str:
        return f"{format_units(self.total_fee, decimals)} {native_symbol}"


class NativeAndWrappedFees(CanonicalModel):
    """Fee schedule of a factory charging a wrapped-token fee plus a native bank-module fee."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["native_and_wrapped"] = "native_and_wrapped"
    creation_fee_wrapped: int = Field(..., ge=0, description="Creation fee pulled in wrapped token")
    bank_module_fee_native: int = Field(..., ge=0, description="Bank module fee sent as native value")

    @property
    def native_value(self) -> int:
        """Value sent with the createToken transaction; the wrapped part moves via allowance."""
        return self.bank_module_fee_native

    def describe(self, native_symbol: str, wrapped_symbol: str = "", decimals: int = 18) -> str:
        return (
            f"{format_units(self.creation_fee_wrapped, decimals)} {wrapped_symbol} + "
            f"{format_units(self.bank_module_fee_native, decimals)} {native_symbol}"
        )


FeeSchedule = Annotated[
    Union[NativeOnlyFees, NativeAndWrappedFees],
    Field(discriminator="kind"),
]


class WrapDirection(str, Enum):
    WRAP = "wrap"
    UNWRAP = "unwrap"


class WrapOperation(CanonicalModel):
    """
    A single wrap or unwrap request.

    Attributes:
        direction: wrap (native -> wrapped) or unwrap (wrapped -> native).
        amount: Human-readable amount as typed (positive decimal string).
    """
    model_config = ConfigDict(frozen=True)

    direction: WrapDirection
    amount: str
