from .apps import VerificationServer, create_verification_app
from .verifier import HardhatVerifier

__all__ = [
    "VerificationServer",
    "create_verification_app",
    "HardhatVerifier",
]
