"""Service registry for dependency injection.

Each service application owns one registry, created by the app factory and
kept on ``app.state``. Route dependencies and event handlers resolve their
collaborators from it by type.
"""

from collections.abc import Callable
from typing import Any, TypeVar, cast

T = TypeVar("T")
ServiceFactory = Callable[[], T]
ServiceProvider = T | ServiceFactory[T]


class ServiceRegistry:
    """Registry for shared services with support for singletons and factories."""

    def __init__(self):
        """Initialize an empty service registry."""
        self._services: dict[str, ServiceProvider[Any]] = {}

    def register_singleton(self, service_type: type[T], instance: T) -> None:
        """Register a singleton instance by its type.

        Args:
            service_type: The type of the service to register
            instance: The singleton instance to register
        """
        self._services[service_type.__name__] = _Instance(instance)

    def register_factory(self, service_type: type[T], factory: ServiceFactory[T]) -> None:
        """Register a factory function by its type.

        Args:
            service_type: The type of the service to register
            factory: The factory function that creates instances of the service
        """
        self._services[service_type.__name__] = factory

    def get(self, service_type: type[T]) -> T:
        """Get a service instance by type.

        Args:
            service_type: The type of the service to retrieve

        Returns:
            An instance of the requested service

        Raises:
            KeyError: If the requested service is not registered
        """
        service_name = service_type.__name__

        if service_name not in self._services:
            raise KeyError(f"Service {service_name} not registered")

        provider = self._services[service_name]

        if isinstance(provider, _Instance):
            return cast(T, provider.value)

        return cast(T, provider())

    def __contains__(self, service_type: type) -> bool:
        return service_type.__name__ in self._services


class _Instance:
    """Wraps registered singletons so callable instances are never mistaken for factories."""

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value
