"""Event Bus Implementation.

Each service owns one EventBus. The set of event classes registered on it is
the set of event types the service recognises: an inbound envelope whose
variant has no handler here is ignored.

## Key Features

- **Async Handler Execution**: All handlers for an event execute concurrently
- **Fire-and-forget Emission**: `emit` schedules a tracked task and returns at once
- **ServiceRegistry Integration**: Handler dependencies come from the registry
  the bus was created with, so two services in one process never share state
- **Error Isolation**: Handler failures don't affect other handlers
"""

import asyncio
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel

from blog_services.services.registry import ServiceRegistry

from .core import EventEmissionError, HandlerRegistrationError

T_Event = TypeVar("T_Event", bound=BaseModel)
T_Handler = Callable[..., Any]


class EventBus:
    """In-process dispatch table from event classes to handlers.

    Example:
        ```python
        bus = EventBus(registry)
        bus.on(CommentModerated, CommentModeratedHandler)
        results = await bus.emit_and_wait(event)
        ```
    """

    def __init__(self, registry: ServiceRegistry | None = None, isolate_events: bool = False) -> None:
        """Initialize a new EventBus instance.

        Args:
            registry: Registry used to resolve handler dependencies.
            isolate_events: If True, each handler receives a deep copy of the event.
        """
        self._handlers: dict[type[BaseModel], list[T_Handler]] = {}
        self._registry = registry or ServiceRegistry()
        self._isolate_events = isolate_events
        self._pending: set[asyncio.Task] = set()
        logger.debug(f"EventBus initialized (isolate_events={isolate_events})")

    def on(self, event_type: type[T_Event], handler: T_Handler) -> None:
        """Register a handler for an event type.

        Args:
            event_type: The Pydantic BaseModel class to handle
            handler: The handler function, handler instance or handler class

        Raises:
            HandlerRegistrationError: If event_type is not BaseModel or handler is not callable
        """
        if not (isinstance(event_type, type) and issubclass(event_type, BaseModel)):
            raise HandlerRegistrationError(f"Event type must be a Pydantic BaseModel subclass, got: {event_type}")

        if not callable(handler):
            raise HandlerRegistrationError(f"Handler must be callable: {handler}")

        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"Registered handler for {event_type.__name__}: {handler}")

    def remove_handler(self, event_type: type[T_Event], handler: T_Handler) -> bool:
        """Remove a specific handler for an event type."""
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Removed handler for {event_type.__name__}: {handler}")
                return True
            except ValueError:
                pass
        return False

    def clear_handlers(self, event_type: type[T_Event] | None = None) -> None:
        """Clear handlers for a specific event type or all events."""
        if event_type is None:
            self._handlers.clear()
            logger.debug("Cleared all handlers")
        elif event_type in self._handlers:
            del self._handlers[event_type]
            logger.debug(f"Cleared handlers for {event_type.__name__}")

    def get_handler_count(self, event_type: type[T_Event]) -> int:
        """Get the number of handlers registered for an event type."""
        return len(self._handlers.get(event_type, []))

    def get_registered_events(self) -> list[type[BaseModel]]:
        """Get all event types that have registered handlers."""
        return [event_type for event_type, handlers in self._handlers.items() if handlers]

    def handles(self, event_type: type[BaseModel]) -> bool:
        """Whether at least one handler is registered for the event type."""
        return self.get_handler_count(event_type) > 0

    def emit(self, event: T_Event, isolate: bool | None = None) -> asyncio.Task:
        """Emit an event without waiting for completion (fire-and-forget).

        The task is kept until it finishes, so it is never garbage collected
        mid-flight. A task that fails is logged when it completes.

        Args:
            event: The event to emit
            isolate: Whether to isolate events (deep copy per handler)

        Returns:
            The scheduled task, for callers that want to await it after all

        Raises:
            EventEmissionError: If event is not a BaseModel instance
        """
        if not isinstance(event, BaseModel):
            raise EventEmissionError(f"Event must be a BaseModel instance, got: {type(event).__name__}")

        task = asyncio.create_task(self.emit_and_wait(event, isolate), name=f"emit-{type(event).__name__}")
        self._pending.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning(f"Event task {task.get_name()} was cancelled")
        elif task.exception() is not None:
            logger.error(f"Event task {task.get_name()} failed: {task.exception()}")

    @property
    def pending_count(self) -> int:
        """Number of emitted events whose handlers are still running."""
        return len(self._pending)

    async def wait_for_pending(self) -> None:
        """Wait until every emitted event has been handled.

        Handlers may emit further events while this runs; those are awaited too.
        """
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def emit_and_wait(self, event: T_Event, isolate: bool | None = None) -> list[Any]:
        """Emit an event and wait for all handlers to complete.

        Args:
            event: The event instance to emit
            isolate: If True, each handler receives a deep copy of the event.
                    If None (default), uses the bus-level setting.

        Returns:
            List of results from all handlers (including exceptions)

        Raises:
            EventEmissionError: If event is not a BaseModel instance
        """
        if not isinstance(event, BaseModel):
            raise EventEmissionError(f"Event must be a BaseModel instance, got: {type(event).__name__}")

        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug(f"No handlers registered for {event_type.__name__}")
            return []

        logger.debug(f"Emitting {event_type.__name__} to {len(handlers)} handlers")

        should_isolate = isolate if isolate is not None else self._isolate_events

        tasks = []
        for handler in handlers:
            handler_event = event.model_copy(deep=True) if should_isolate else event
            tasks.append(self._execute_handler(handler, handler_event))

        results = await asyncio.gather(*tasks, return_exceptions=True)

        failed = sum(1 for r in results if isinstance(r, Exception))
        if failed > 0:
            logger.warning(f"Event {event_type.__name__}: {len(results) - failed} successful, {failed} failed handlers")
        logger.trace(f"Event {event_type.__name__} results: {results}")

        return results

    async def _execute_handler(self, handler: T_Handler, event: T_Event) -> Any:
        """Execute a single handler, resolving its dependencies from the registry.

        Args:
            handler: The handler to execute (function, instance or class)
            event: The event to pass to the handler

        Returns:
            The handler's result or any exception raised
        """
        try:
            if inspect.isclass(handler):
                handler_instance = self._instantiate_handler_class(handler)
                handler_method = getattr(handler_instance, "handle", None)
                if handler_method is None:
                    raise AttributeError(f"Handler class {handler.__name__} must have a 'handle' method")
                return await _resolve(handler_method(event))

            parameters = list(inspect.signature(handler).parameters.values())
            if len(parameters) <= 1:
                return await _resolve(handler(event))

            kwargs = self._inject(parameters[1:], str(handler))
            logger.trace(f"Calling handler {handler} with event and {len(kwargs)} dependencies")
            return await _resolve(handler(event, **kwargs))

        except (ValueError, TypeError, KeyError, RuntimeError, AttributeError) as e:
            logger.error(f"Handler {handler} failed: {e}")
            return e

    def _instantiate_handler_class(self, handler_class: type) -> Any:
        """Instantiate a handler class with its constructor dependencies."""
        parameters = list(inspect.signature(handler_class.__init__).parameters.values())[1:]
        parameters = [p for p in parameters if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)]
        if not parameters:
            return handler_class()
        return handler_class(**self._inject(parameters, handler_class.__name__))

    def _inject(self, parameters: list[inspect.Parameter], owner: str) -> dict[str, Any]:
        kwargs = {}
        for param in parameters:
            if param.annotation is inspect.Parameter.empty:
                continue
            try:
                kwargs[param.name] = self._registry.get(param.annotation)
                logger.trace(f"Injected service '{param.annotation.__name__}' into {owner}")
            except (KeyError, AttributeError):
                logger.trace(f"Service '{param.annotation}' not found in registry for {owner}")
        return kwargs


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result
