"""User-facing operations: wallet session, fee discovery, token creation and wrap/unwrap."""

from .session import WalletSession, NOT_CONNECTED_MESSAGE
from .fees import FeeResolver
from .creation import TokenCreationFlow
from .wrapping import WrapUnwrapFlow, parse_amount, INVALID_AMOUNT_MESSAGE

__all__ = [
    "WalletSession",
    "NOT_CONNECTED_MESSAGE",
    "FeeResolver",
    "TokenCreationFlow",
    "WrapUnwrapFlow",
    "parse_amount",
    "INVALID_AMOUNT_MESSAGE",
]
