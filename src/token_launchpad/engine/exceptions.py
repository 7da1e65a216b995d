"""
Exception and Error Definitions Module

Defines the exception hierarchy for wallet connection, fee discovery,
token creation and wrap/unwrap orchestration. All project exceptions inherit
from LaunchpadError for unified handling.

Exception Hierarchy:
    LaunchpadError (root)
    ├── ValidationError
    ├── ProviderError
    ├── ChainConfigError
    ├── ApprovalError
    ├── TransactionError
    ├── ReceiptParsingError
    ├── VerificationError
    └── InvalidTransition
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..schemas.tokens import ValidationOutcome


class LaunchpadError(Exception):
    """
    Root exception class for all project-specific exceptions.
    """
    pass


class ValidationError(LaunchpadError):
    """
    Raised when user input is rejected locally, before any network call.

    Recoverable by correcting the input.

    Attributes:
        outcome: The ValidationOutcome describing the first failed check.
    """

    def __init__(self, outcome: "ValidationOutcome", message: Optional[str] = None):
        self.outcome = outcome
        super().__init__(message or outcome.message)


class ProviderError(LaunchpadError):
    """
    Raised when the wallet provider is unavailable or refuses access.

    This includes scenarios such as:
    - No wallet provider configured
    - Account access request rejected or returning no accounts
    - An operation attempted on a disconnected session
    """
    pass


class ChainConfigError(LaunchpadError):
    """
    Raised when the wallet rejects adding / switching to the target chain.

    Aborts connect; the session stays disconnected.
    """
    pass


class ApprovalError(LaunchpadError):
    """
    Raised when the wrapped-token allowance read or approval transaction fails.

    During connect this error is logged and published as an
    ApprovalFailedEvent but not propagated.

    Attributes:
        tx_hash: Approval transaction hash if one was broadcast
    """

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class TransactionError(LaunchpadError):
    """
    Raised when a read, submission or confirmation fails.

    This includes scenarios such as:
    - Signature request rejected in the wallet
    - Transaction reverted on-chain
    - RPC failure or receipt wait timeout

    The message is the provider's message and is shown to the user verbatim.

    Attributes:
        tx_hash: Transaction hash if the transaction was broadcast
    """

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class ReceiptParsingError(LaunchpadError):
    """
    Raised when the deployed token address cannot be found in a receipt.

    Not propagated by the creation flow: the result keeps an empty address
    and a ReceiptParsingFailedEvent carries this error.

    Attributes:
        tx_hash: Hash of the creation transaction
    """

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class VerificationError(LaunchpadError):
    """
    Raised when the contract verification service cannot be reached or
    answers with an unexpected payload.
    """
    pass


class InvalidTransition(LaunchpadError):
    """
    Raised when an invalid state transition occurs in a status state machine.

    Attributes:
        current_state: Status kind before the attempted transition
        target_state: Status kind the caller tried to enter
    """

    def __init__(self, current_state: str, target_state: str):
        self.current_state = current_state
        self.target_state = target_state
        super().__init__(f"Invalid status transition: {current_state} -> {target_state}")
