"""
HTTP Request/Response Schema Models for the Verification Service

The verification microservice exposes a single ``POST /verify`` endpoint that
runs the contract-verification tool against a deployed contract. Field names
follow the service's JSON wire format (camelCase).
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class VerifyRequest(BaseModel):
    """Body of ``POST /verify``.

    Attributes:
        contract_address: Address of the contract to verify (required by the handler).
        constructor_args: Constructor arguments, in declaration order.
    """
    model_config = ConfigDict(populate_by_name=True)

    contract_address: Optional[str] = Field(default=None, alias="contractAddress")
    constructor_args: List[Any] = Field(default_factory=list, alias="constructorArgs")


class VerificationResponse(BaseModel):
    """Body returned by ``POST /verify``.

    Success carries ``message`` and ``output`` (tool stdout); failure carries
    ``error`` and ``details`` (tool stderr or stdout).
    """
    success: bool
    message: Optional[str] = None
    output: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None
