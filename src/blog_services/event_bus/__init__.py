"""Event Bus System for in-process event dispatch.

Every service parses inbound wire envelopes into typed events and hands them
to its own EventBus. Handlers are registered per event class:

```python
from blog_services.event_bus import EventBus

bus = EventBus(registry)
bus.on(PostCreated, remember_post)
await bus.emit_and_wait(PostCreated(data=PostData(id="1a2b3c4d", title="Hello")))
```

For class-based handlers with dependency injection, see `core.py`.
"""

from .bus import EventBus
from .core import EventHandler

__all__ = [
    "EventBus",
    "EventHandler",
]
