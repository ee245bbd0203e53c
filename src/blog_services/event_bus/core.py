"""Core Event Bus Components.

This module contains the fundamental abstractions for the in-process event
bus that every blog service uses as its dispatch table.

## Key Components

- **EventHandler**: Base class for dependency-injectable event handlers
- **EventBusError**: Base exception for all event bus related errors
- **HandlerRegistrationError**: Raised when handler registration fails
- **EventEmissionError**: Raised when event emission fails

## Usage Example with Dependency Injection

```python
from blog_services.event_bus.core import EventHandler
from blog_services.events.types import CommentModerated
from blog_services.services.comment_service import CommentService

class CommentModeratedHandler(EventHandler[CommentModerated]):
    def __init__(self, comment_service: CommentService):
        self.comment_service = comment_service

    async def handle(self, event: CommentModerated) -> bool:
        return await self.comment_service.apply_moderation(event)

# The EventBus instantiates the handler with the CommentService found in
# the service registry it was created with.
```

"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T_Event = TypeVar("T_Event", bound=BaseModel)


class EventHandler(ABC, Generic[T_Event]):
    """Base class for dependency-injectable event handlers.

    Event handlers inherit from this class and implement the handle method.
    The generic type parameter names the event variant this handler processes.
    """

    @abstractmethod
    async def handle(self, event: T_Event) -> Any:
        """Handle the event.

        Args:
            event: The event to handle. Must be an instance of the generic type.

        Returns:
            Optional result from handling the event.

        Raises:
            Any exception that occurs during handling. Exceptions are caught
            by the event bus and included in the results list.
        """

    def __call__(self, event: T_Event) -> Any:
        """Make the handler callable."""
        return self.handle(event)


class EventBusError(Exception):
    """Base exception for all event bus related errors."""


class HandlerRegistrationError(EventBusError):
    """Raised when handler registration fails.

    This occurs when:
    - The event type is not a Pydantic BaseModel
    - The handler is not callable
    """


class EventEmissionError(EventBusError):
    """Raised when the emitted object is not a Pydantic BaseModel instance."""
