from .verify_client import VerificationClient

__all__ = [
    "VerificationClient",
]
