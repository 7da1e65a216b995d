"""
Base Schema Models for the Token Launchpad

This module defines the base model every other schema inherits from, and the
per-flow operation status shown to the user.

Core Classes:
    - CanonicalModel: Pydantic base model with deterministic JSON serialization
    - StatusKind: idle / pending / success / error
    - OperationStatus: Status kind plus the user-facing message

Dependencies:
    - pydantic: For data validation and serialization
"""

import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CanonicalModel(BaseModel):
    """
    Pydantic base model with canonical JSON serialization.

    Features:
        - Automatic conversion of Pydantic objects, enums, and Decimals to standard types
        - Deterministic key sorting in JSON output
        - No extra whitespace, so equal models always serialize identically

    Example:
        class MyModel(CanonicalModel):
            name: str
            value: int

        model = MyModel(name="test", value=123)
        model.to_canonical_json()  # '{"name":"test","value":123}'
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_canonical_json(self) -> str:
        """
        Convert model to a canonical JSON string (sorted keys, compact separators).

        Returns:
            str: JSON string with sorted keys and no extra whitespace.
        """
        data = self.model_dump(mode="json")
        return json.dumps(
            data,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False
        )


class StatusKind(str, Enum):
    """
    Enumeration of operation status kinds.

    Attributes:
        IDLE: Nothing in flight, nothing to report
        PENDING: An operation was submitted and has not settled
        SUCCESS: The last operation settled successfully
        ERROR: The last operation was rejected locally or failed
    """
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class OperationStatus(CanonicalModel):
    """
    Status of one flow together with the message shown to the user.

    Immutable: every transition produces a new instance.
    """
    model_config = ConfigDict(frozen=True)

    kind: StatusKind = Field(default=StatusKind.IDLE, description="Current status kind")
    message: str = Field(default="", description="User-facing status message")

    def is_pending(self) -> bool:
        return self.kind == StatusKind.PENDING
