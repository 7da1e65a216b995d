"""
Per-flow operation status state machine.

    IDLE ──begin──> PENDING ──succeed──> SUCCESS
      ^   <─reset─    │  ^  ──fail─────> ERROR
      │               └──┘ progress
      └──reject──> ERROR (local rejection, nothing was submitted)

Terminal states go back to PENDING when the next operation of the same flow
begins, or to IDLE when the user dismisses the result. The PENDING state
doubles as the flow's in-flight flag.
"""

import logging
from typing import Optional

from ..schemas.bases import OperationStatus, StatusKind
from .events import EventBus, StatusChangedEvent
from .exceptions import InvalidTransition

logger = logging.getLogger(__name__)


class StatusStateMachine:
    """Tracks one flow's OperationStatus and publishes every transition."""

    def __init__(self, flow: str, bus: Optional[EventBus] = None) -> None:
        self.flow = flow
        self._bus = bus
        self._status = OperationStatus()

    @property
    def status(self) -> OperationStatus:
        return self._status

    @property
    def kind(self) -> StatusKind:
        return self._status.kind

    @property
    def message(self) -> str:
        return self._status.message

    @property
    def is_pending(self) -> bool:
        return self._status.is_pending()

    async def begin(self, message: str) -> OperationStatus:
        """Start a new operation: any non-pending state -> PENDING."""
        self._require_not_pending(StatusKind.PENDING)
        return await self._enter(StatusKind.PENDING, message)

    async def progress(self, message: str) -> OperationStatus:
        """Update the message of the in-flight operation."""
        self._require_pending(StatusKind.PENDING)
        return await self._enter(StatusKind.PENDING, message)

    async def succeed(self, message: str) -> OperationStatus:
        self._require_pending(StatusKind.SUCCESS)
        return await self._enter(StatusKind.SUCCESS, message)

    async def fail(self, message: str) -> OperationStatus:
        self._require_pending(StatusKind.ERROR)
        return await self._enter(StatusKind.ERROR, message)

    async def reject(self, message: str) -> OperationStatus:
        """Report a local rejection without entering PENDING."""
        self._require_not_pending(StatusKind.ERROR)
        return await self._enter(StatusKind.ERROR, message)

    async def reset(self) -> OperationStatus:
        self._require_not_pending(StatusKind.IDLE)
        return await self._enter(StatusKind.IDLE, "")

    def _require_pending(self, target: StatusKind) -> None:
        if not self.is_pending:
            raise InvalidTransition(self.kind.value, target.value)

    def _require_not_pending(self, target: StatusKind) -> None:
        if self.is_pending:
            raise InvalidTransition(self.kind.value, target.value)

    async def _enter(self, kind: StatusKind, message: str) -> OperationStatus:
        previous = self._status
        self._status = OperationStatus(kind=kind, message=message)
        logger.debug(f"[{self.flow}] {previous.kind.value} -> {kind.value}: {message}")
        if self._bus is not None:
            await self._bus.emit(StatusChangedEvent(flow=self.flow, previous=previous, status=self._status))
        return self._status
