"""
Event-driven notifications with typed events and clear data flow.

Events carry their own data; hooks observe them and subscribers may return a
follow-up event. Dependencies are injected separately from business data.
The flows publish every status transition and every notable outcome
(including the swallowed approval failure and the missing-address receipt)
through an EventBus, so a front end can render them and tests can observe them.
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Callable, Optional, List, Awaitable, AsyncGenerator

from pydantic import BaseModel

from ..schemas.bases import OperationStatus
from ..schemas.tokens import TokenCreationResult, WrapOperation

logger = logging.getLogger(__name__)

# ==================== Base Event ====================

class BaseEvent(ABC):
    """Base class for all events in the system."""

    @abstractmethod
    def __repr__(self) -> str:
        """String representation of the event."""
        pass


# ==================== Status Events ====================

class StatusChangedEvent(BaseModel, BaseEvent):
    """A flow's status machine entered a new state."""
    flow: str
    previous: OperationStatus
    status: OperationStatus

    def __repr__(self) -> str:
        return f"StatusChangedEvent(flow={self.flow}, {self.previous.kind.value}->{self.status.kind.value})"


# ==================== Session Events ====================

class SessionConnectedEvent(BaseModel, BaseEvent):
    """Wallet access granted and the target chain is active."""
    address: str
    chain_id: int

    def __repr__(self) -> str:
        return f"SessionConnectedEvent(address={self.address}, chain_id={self.chain_id})"


class SessionDisconnectedEvent(BaseModel, BaseEvent):
    """Session fields were cleared."""
    address: str = ""

    def __repr__(self) -> str:
        return f"SessionDisconnectedEvent(address={self.address})"


class BalancesRefreshedEvent(BaseModel, BaseEvent):
    """Balances were re-read; fields are None when not refreshed."""
    native_balance: Optional[int] = None
    wrapped_balance: Optional[int] = None

    def __repr__(self) -> str:
        return f"BalancesRefreshedEvent(native={self.native_balance}, wrapped={self.wrapped_balance})"


class ApprovalFailedEvent(BaseModel, BaseEvent):
    """The wrapped-token approval step failed during connect and was not propagated."""
    error_message: str
    tx_hash: Optional[str] = None

    def __repr__(self) -> str:
        return f"ApprovalFailedEvent(error={self.error_message})"


# ==================== Flow Result Events ====================

class TokenCreatedEvent(BaseModel, BaseEvent):
    """A creation transaction was confirmed."""
    result: TokenCreationResult

    def __repr__(self) -> str:
        return f"TokenCreatedEvent(address={self.result.address}, symbol={self.result.symbol})"


class ReceiptParsingFailedEvent(BaseModel, BaseEvent):
    """The deployed token address was not found in the creation receipt."""
    tx_hash: str
    error_message: str

    def __repr__(self) -> str:
        return f"ReceiptParsingFailedEvent(tx_hash={self.tx_hash})"


class WrapSettledEvent(BaseModel, BaseEvent):
    """A wrap or unwrap transaction was confirmed."""
    operation: WrapOperation
    tx_hash: str

    def __repr__(self) -> str:
        return f"WrapSettledEvent({self.operation.direction.value} {self.operation.amount}, tx_hash={self.tx_hash})"


# ==================== Dependencies Container ====================

@dataclass(frozen=True)
class Dependencies:
    """Container for infrastructure dependencies (read-only)."""
    session: Optional[Any] = None
    network: Optional[Any] = None
    deployment: Optional[Any] = None


# ==================== Event Bus ====================

EventHandlerFunc = Callable[[BaseEvent, Dependencies], Awaitable[Optional[BaseEvent]]]
EventHookFunc = Callable[[BaseEvent, Dependencies], Awaitable[None]]


class EventBus:
    """Event dispatcher for publishing and subscribing to events."""

    def __init__(self, deps: Optional[Dependencies] = None) -> None:
        """Initialize with empty subscribers and hooks."""
        self._subscribers: Dict[type, list[EventHandlerFunc]] = {}
        self._hooks: Dict[type, list[EventHookFunc]] = {}
        self.deps = deps or Dependencies()

    def subscribe(self, event_class: type[BaseEvent], handler: EventHandlerFunc) -> None:
        """
        Register an async handler for the given event class.
        Multiple handlers can be subscribed to the same event type and run in parallel.

        Args:
            event_class: The event class to subscribe to.
            handler: The async handler function to call when the event is published.

        Raises:
            TypeError: If handler is not a coroutine function.
        """
        if not inspect.iscoroutinefunction(handler):
            raise TypeError(f"Handler must be a coroutine function, got {type(handler).__name__}")

        if event_class not in self._subscribers:
            self._subscribers[event_class] = []
        self._subscribers[event_class].append(handler)

    def hook(self, event_class: type[BaseEvent], hook_func: EventHookFunc) -> None:
        """
        Register a hook for the given event class.
        Hooks are executed before subscribers when the event is dispatched.

        Args:
            event_class: The event class to hook into.
            hook_func: The hook function to call when the event is published.
        """
        if not inspect.iscoroutinefunction(hook_func):
            raise TypeError(f"Handler must be a coroutine function, got {type(hook_func).__name__}")

        if event_class not in self._hooks:
            self._hooks[event_class] = []
        self._hooks[event_class].append(hook_func)

    async def dispatch(self, event: BaseEvent, deps: Dependencies) -> AsyncGenerator[Optional[BaseEvent], None]:
        """
        Dispatch an event to all registered hooks and subscribers.
        Hooks run first, then all subscribers run in parallel.

        A hook or subscriber that raises is logged and skipped; the others
        still run and the publisher never sees the exception.

        Args:
            event: The event to dispatch.
            deps: Dependencies container with injected services.

        Yields:
            Results from all subscribers as they complete. Yields nothing if no subscribers are registered.
        """
        hooks = self._hooks.get(type(event), [])
        await asyncio.gather(*(self._guard(hook, event, deps) for hook in hooks))

        handlers = self._subscribers.get(type(event), [])
        if not handlers:
            return

        tasks = [self._guard(handler, event, deps) for handler in handlers]
        for coro in asyncio.as_completed(tasks):
            result = await coro
            yield result

    async def emit(self, event: BaseEvent) -> List[BaseEvent]:
        """
        Publish an event with the bus's own dependencies.

        Follow-up events returned by subscribers are published in turn, depth first.

        Returns:
            Every follow-up event published as a consequence of ``event``.
        """
        published: List[BaseEvent] = []
        async for result in self.dispatch(event, self.deps):
            if result is None:
                continue
            if not isinstance(result, BaseEvent):
                logger.error(f"Handler for {type(event).__name__} returned unsupported type: {type(result).__name__}")
                continue
            published.append(result)
            published.extend(await self.emit(result))
        return published

    @staticmethod
    async def _guard(func: Callable, event: BaseEvent, deps: Dependencies) -> Optional[BaseEvent]:
        try:
            return await func(event, deps)
        except Exception as e:
            logger.error(f"{getattr(func, '__name__', func)} failed on {event!r}: {e}", exc_info=True)
            return None
