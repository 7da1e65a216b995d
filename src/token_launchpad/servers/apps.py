"""
Contract Verification Server - FastAPI wrapper around HardhatVerifier.

Exposes ``POST /verify`` so that a browser front end can request explorer
verification of a freshly created token.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..schemas.https import VerifyRequest
from .verifier import HardhatVerifier

logger = logging.getLogger(__name__)


class VerificationServer(FastAPI):
    """FastAPI server exposing contract verification."""

    def __init__(
        self,
        verifier: Optional[HardhatVerifier] = None,
        verify_endpoint: str = "/verify",
        allow_origins: Optional[list] = None,
        **fastapi_kwargs
    ):
        """Initialize the verification server.

        Args:
            verifier: Verification runner (default: HardhatVerifier from environment)
            verify_endpoint: Endpoint path (default: /verify)
            allow_origins: CORS origins (default: any)
            **fastapi_kwargs: FastAPI arguments (title, version, etc.)
        """
        self.verifier = verifier or HardhatVerifier()

        super().__init__(**fastapi_kwargs)

        self.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins or ["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
        self.verify_endpoint = verify_endpoint
        self._setup_verify_endpoint(verify_endpoint)

    def _setup_verify_endpoint(self, path: str = "/verify") -> None:
        """Setup the verification endpoint.

        Args:
            path: Endpoint path (default: /verify)
        """
        @self.post(path)
        async def verify_contract(request: Request):
            """Verify a deployed contract with hardhat."""
            try:
                payload = await request.json()
                verify_request = VerifyRequest.model_validate(payload)
            except ValueError:
                return JSONResponse(status_code=400, content={"error": "Invalid request body"})

            if not verify_request.contract_address:
                return JSONResponse(status_code=400, content={"error": "contractAddress is required"})

            logger.info(f"Verifying contract: {verify_request.contract_address}")
            result = await self.verifier.verify(
                verify_request.contract_address, verify_request.constructor_args
            )
            return JSONResponse(
                status_code=200 if result.success else 500,
                content=result.model_dump(mode="json", exclude_none=True),
            )


def create_verification_app(verifier: Optional[HardhatVerifier] = None, **fastapi_kwargs) -> VerificationServer:
    """Build the verification app with the default title."""
    fastapi_kwargs.setdefault("title", "Token Launchpad Verification Service")
    return VerificationServer(verifier=verifier, **fastapi_kwargs)
