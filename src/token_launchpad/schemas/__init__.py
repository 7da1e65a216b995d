from .bases import CanonicalModel, StatusKind, OperationStatus
from .session import SessionState
from .tokens import (
    ValidationOutcome,
    TokenCreationRequest,
    TokenCreationResult,
    NativeOnlyFees,
    NativeAndWrappedFees,
    FeeSchedule,
    WrapDirection,
    WrapOperation,
)
from .https import VerifyRequest, VerificationResponse

__all__ = [
    "CanonicalModel",
    "StatusKind",
    "OperationStatus",
    "SessionState",
    "ValidationOutcome",
    "TokenCreationRequest",
    "TokenCreationResult",
    "NativeOnlyFees",
    "NativeAndWrappedFees",
    "FeeSchedule",
    "WrapDirection",
    "WrapOperation",
    "VerifyRequest",
    "VerificationResponse",
]
