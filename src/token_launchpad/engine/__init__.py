from .events import (
    BaseEvent,
    Dependencies,
    EventBus,
    StatusChangedEvent,
    SessionConnectedEvent,
    SessionDisconnectedEvent,
    BalancesRefreshedEvent,
    ApprovalFailedEvent,
    TokenCreatedEvent,
    ReceiptParsingFailedEvent,
    WrapSettledEvent,
)
from .status import StatusStateMachine

__all__ = [
    "BaseEvent",
    "Dependencies",
    "EventBus",
    "StatusChangedEvent",
    "SessionConnectedEvent",
    "SessionDisconnectedEvent",
    "BalancesRefreshedEvent",
    "ApprovalFailedEvent",
    "TokenCreatedEvent",
    "ReceiptParsingFailedEvent",
    "WrapSettledEvent",
    "StatusStateMachine",
]
