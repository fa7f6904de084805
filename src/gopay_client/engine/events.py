"""
Event hooks for the presentation layer.

The payment controller and the session guard publish typed events; views
register async hooks to show feedback (success banner, error text, redirect)
without the core knowing anything about rendering.
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ..schemas.accounts import Account
from ..schemas.https import PaymentRecord
from .exceptions import ErrorKind

logger = logging.getLogger(__name__)


# ==================== Base Event ====================

class BaseEvent(ABC):
    """Base class for all events in the system."""

    @abstractmethod
    def __repr__(self) -> str:
        """String representation of the event."""
        pass


# ==================== Payment Events ====================

class PaymentSucceededEvent(BaseModel, BaseEvent):
    """Payment accepted; ``account`` already reflects the local debit."""
    account: Account
    record: PaymentRecord

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def __repr__(self) -> str:
        return f"PaymentSucceededEvent(order_id={self.record.order_id})"


class PaymentFailedEvent(BaseModel, BaseEvent):
    """Payment rejected or not attempted; local state is unchanged."""
    message: str
    kind: ErrorKind
    status: Optional[int] = None

    def __repr__(self) -> str:
        return f"PaymentFailedEvent(kind={self.kind.value}, status={self.status})"


# ==================== Session Events ====================

class SessionReadyEvent(BaseModel, BaseEvent):
    """Protected view may render: the credential was accepted."""
    account: Account

    def __repr__(self) -> str:
        return f"SessionReadyEvent(user={self.account.display_name})"


class SessionExpiredEvent(BaseModel, BaseEvent):
    """Credential missing or rejected; the view should navigate away."""
    reason: str
    redirect_to: str
    kind: Optional[ErrorKind] = None

    def __repr__(self) -> str:
        return f"SessionExpiredEvent(redirect_to={self.redirect_to})"


# ==================== Event Bus ====================

EventHookFunc = Callable[[BaseEvent], Awaitable[None]]


class EventBus:
    """Event dispatcher for publishing events to registered hooks."""

    def __init__(self) -> None:
        """Initialize with no hooks."""
        self._hooks: Dict[type, List[EventHookFunc]] = {}

    def hook(self, event_class: type, hook_func: EventHookFunc) -> None:
        """
        Register a hook for the given event class.

        Args:
            event_class: The event class to hook into.
            hook_func: Coroutine function called with the event when it is published.

        Raises:
            TypeError: If hook_func is not a coroutine function.
        """
        if not inspect.iscoroutinefunction(hook_func):
            raise TypeError(f"Hook must be a coroutine function, got {type(hook_func).__name__}")

        if event_class not in self._hooks:
            self._hooks[event_class] = []
        self._hooks[event_class].append(hook_func)

    def subscribe(self, event_class: type, handler: EventHookFunc) -> None:
        """
        Register an async handler for the given event class.

        Same registry as ``hook``; multiple handlers can be subscribed to the
        same event type and run in parallel.

        Raises:
            TypeError: If handler is not a coroutine function.
        """
        self.hook(event_class, handler)

    def on(self, event_class: type) -> Callable[[EventHookFunc], EventHookFunc]:
        """Decorator form of ``hook``.

        Example:
            @bus.on(PaymentFailedEvent)
            async def show_error(event):
                banner.text = event.message
        """
        def decorator(hook_func: EventHookFunc) -> EventHookFunc:
            self.hook(event_class, hook_func)
            return hook_func
        return decorator

    async def publish(self, event: BaseEvent) -> None:
        """
        Run every hook registered for the event's type.

        Hooks run concurrently; the first exception raised by a hook
        propagates to the publisher.
        """
        hooks = self._hooks.get(type(event), [])
        logger.debug("Publishing %r to %d hook(s)", event, len(hooks))
        await asyncio.gather(*(hook(event) for hook in hooks))
