"""
Auth Event Bus - session-change subscription

One bus is created per application and kept on `app.state`; handlers run in
the request that changed the session, with that request's database session.
"""
from enum import Enum
from typing import Awaitable, Callable, Dict, List
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tripindo.models.user import User

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


AuthEventHandler = Callable[[AsyncSession, User], Awaitable[None]]


class AuthEventBus:
    def __init__(self):
        self._handlers: Dict[AuthEvent, List[AuthEventHandler]] = {event: [] for event in AuthEvent}

    def subscribe(self, event: AuthEvent, handler: AuthEventHandler) -> Callable[[], None]:
        """Register a handler; returns a callable that unsubscribes it"""
        self._handlers[event].append(handler)

        def unsubscribe():
            if handler in self._handlers[event]:
                self._handlers[event].remove(handler)

        return unsubscribe

    def handlers(self, event: AuthEvent) -> List[AuthEventHandler]:
        return list(self._handlers[event])

    async def publish(self, event: AuthEvent, db: AsyncSession, user: User) -> None:
        """Run every handler for `event`; a failing handler never fails the caller"""
        for handler in self.handlers(event):
            try:
                await handler(db, user)
            except Exception:
                logger.exception(f"Auth event handler {handler.__name__} failed for {event.value}")
