"""
Wallet Session State Model

The single mutable record describing the connected wallet. Only
WalletSession operations (connect, disconnect, balance refresh) write to it.
"""

from typing import Optional

from pydantic import Field

from .bases import CanonicalModel


class SessionState(CanonicalModel):
    """
    Connected wallet state.

    Attributes:
        address: Checksummed account address ("" when disconnected).
        native_balance: Native balance in smallest units (None until read).
        wrapped_balance: Wrapped-token balance in smallest units (None until read
            or when no wrapped token is configured).
        connected: True once account access was granted.
        approval_error: Message of the last swallowed approval failure, if any.
    """

    address: str = Field(default="")
    native_balance: Optional[int] = Field(default=None, ge=0)
    wrapped_balance: Optional[int] = Field(default=None, ge=0)
    connected: bool = Field(default=False)
    approval_error: Optional[str] = Field(default=None)
