from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Type, TypeVar

from grafter.domain.models import ConstructionPlan

T = TypeVar("T")


class IInjector(ABC):
    """Abstract interface for object-graph construction."""

    @abstractmethod
    def map(self, from_type: Type) -> Any:
        """Start an override rule for the given type.

        Args:
            from_type: The type to substitute during resolution.

        Returns:
            A builder whose terminal operation supplies the concrete type.
        """

    @abstractmethod
    def create(self, dependency_type: Type[T]) -> T:
        """Build and return a fully wired instance of the requested type.

        Args:
            dependency_type: The type to build.
        """

    @abstractmethod
    def provider(self, dependency_type: Type[T]) -> Callable[[], T]:
        """Return a deferred handle that builds the type each time it is called.

        Args:
            dependency_type: The type the handle builds.
        """


class IMemberInspector(ABC):
    """Answers marker questions about a type's members."""

    @abstractmethod
    def is_abstract(self, cls: Type) -> bool:
        """Return True when ``cls`` cannot be instantiated without an override."""

    @abstractmethod
    def is_singleton(self, cls: Type) -> bool:
        """Return True when ``cls`` is marked singleton-scoped."""

    @abstractmethod
    def constructors(self, cls: Type) -> List[str]:
        """Return ``__init__`` followed by the classmethods marked as alternate constructors, in declaration order."""

    @abstractmethod
    def injectable_constructors(self, cls: Type) -> List[str]:
        """Return the names of the constructors marked injectable, in declaration order."""

    @abstractmethod
    def injectable_fields(self, cls: Type) -> Dict[str, Any]:
        """Return injectable field names mapped to the type each should receive."""

    @abstractmethod
    def injectable_methods(self, cls: Type) -> List[str]:
        """Return the names of the setter methods marked injectable."""


class IConstructorResolver(ABC):
    """Abstract interface for constructor selection."""

    @abstractmethod
    def select(self, cls: Type) -> ConstructionPlan:
        """Select the constructor to invoke for ``cls``.

        Args:
            cls: The concrete type to build.

        Returns:
            A construction plan whose arguments are still unresolved.

        Raises:
            InstantiationError: If no usable constructor exists.
        """


class ISingletonCache(ABC):
    """Abstract interface for singleton instance storage."""

    @abstractmethod
    def get(self, cls: Type) -> Any:
        """Return the cached instance for ``cls`` or None."""

    @abstractmethod
    def contains(self, cls: Type) -> bool:
        """Return True when an instance of ``cls`` is cached."""

    @abstractmethod
    def get_or_create(self, cls: Type, factory: Callable[[], Any]) -> Any:
        """Return the cached instance for ``cls``, building and caching it if absent.

        Args:
            cls: The singleton-scoped type.
            factory: Builds a fully populated instance.
        """
