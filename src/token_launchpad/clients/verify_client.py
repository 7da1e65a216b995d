"""
Verification Service Client

httpx client for the ``POST /verify`` endpoint of the verification server.
"""

import logging
from typing import Any, Sequence

import httpx

from ..engine.exceptions import VerificationError
from ..schemas.https import VerificationResponse, VerifyRequest

logger = logging.getLogger(__name__)

DEFAULT_VERIFY_SERVICE_URL = "http://localhost:3001"


class VerificationClient(httpx.AsyncClient):
    """
    Extended httpx.AsyncClient for the contract verification service.

    Usage:
        ```python
        async with VerificationClient() as client:
            response = await client.verify("0x...", [])
        ```
    """

    def __init__(self, base_url: str = DEFAULT_VERIFY_SERVICE_URL, **kwargs):
        """
        Args:
            base_url: Verification service root URL
            **kwargs: All standard httpx.AsyncClient arguments (timeout, transport, etc.)
        """
        kwargs.setdefault("timeout", httpx.Timeout(330.0))
        super().__init__(base_url=base_url, **kwargs)

    async def verify(self, contract_address: str, constructor_args: Sequence[Any] = ()) -> VerificationResponse:
        """
        Request verification of a deployed contract.

        Returns:
            VerificationResponse: The service's answer; ``success=False`` when
            the verification tool failed.

        Raises:
            VerificationError: If the service is unreachable, rejects the
                request, or answers with an unexpected body.
        """
        body = VerifyRequest(contract_address=contract_address, constructor_args=list(constructor_args))
        try:
            response = await self.post("/verify", json=body.model_dump(by_alias=True))
        except httpx.HTTPError as e:
            raise VerificationError(f"Verification service unreachable: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise VerificationError(f"Invalid verification response (HTTP {response.status_code})") from e

        if response.status_code == 400:
            raise VerificationError(payload.get("error", "Invalid verification request"))

        try:
            result = VerificationResponse.model_validate(payload)
        except ValueError as e:
            raise VerificationError(f"Unexpected verification response: {payload}") from e

        logger.info(f"Verification of {contract_address}: success={result.success}")
        return result
