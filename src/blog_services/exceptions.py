"""Common exceptions for the blog services.

This module contains exception classes shared by the content services,
the relay and the event parsing layer.
"""


class ResourceNotFoundError(Exception):
    """Raised when a resource doesn't exist.

    Generic exception for any resource that cannot be found by its identifier.
    """

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class EventParseError(Exception):
    """Raised when a recognised event type carries a payload that cannot be validated."""

    def __init__(self, event_type: str, reason: str):
        self.event_type = event_type
        self.reason = reason
        super().__init__(f"Cannot parse {event_type} event: {reason}")
