import logging
from typing import Optional, Type, TypeVar

from grafter.application.constructor_resolver import ConstructorResolver
from grafter.application.graph_builder import GraphBuilder
from grafter.application.inspector import MarkerInspector
from grafter.application.override_registry import MappingBuilder, OverrideRegistry
from grafter.application.provider import Provider
from grafter.application.singleton_cache import SingletonCache
from grafter.domain import (
    IInjector,
    IMemberInspector,
    InjectorOptions,
    InstantiationError,
    qualified_name,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Injector(IInjector):
    """Main entry point: registers overrides and builds object graphs.

    Owns the override registry and the singleton cache for its whole lifetime;
    nothing is shared between injector instances.

    Attributes:
        _options: Behaviour switches.
        _inspector: Supplies the marker answers.
        _registry: Override rules.
        _singleton_cache: Instances of singleton-scoped types.
        _builder: Recursive graph builder.

    Example:
        >>> injector = Injector()
        >>> injector.map(PaymentProcessor).to(StripeProcessor)
        >>> checkout = injector.create(Checkout)
    """

    def __init__(
        self,
        options: Optional[InjectorOptions] = None,
        inspector: Optional[IMemberInspector] = None,
    ) -> None:
        self._options = options or InjectorOptions()
        self._inspector = inspector or MarkerInspector()
        self._registry = OverrideRegistry()
        self._singleton_cache = SingletonCache()
        self._builder = GraphBuilder(
            injector=self,
            inspector=self._inspector,
            constructor_resolver=ConstructorResolver(self._inspector, strict=self._options.strict_constructors),
            singleton_cache=self._singleton_cache,
            options=self._options,
        )

    @property
    def options(self) -> InjectorOptions:
        return self._options

    def map(self, from_type: Type) -> MappingBuilder:
        """Start an override rule for ``from_type``.

        Args:
            from_type: The type to substitute, usually an abstract base class or protocol.

        Returns:
            Builder whose ``to()`` or ``to_resolver()`` stores the rule. A later
            rule for the same type replaces the earlier one.

        Example:
            >>> injector.map(PaymentProcessor).to(StripeProcessor)
        """
        return self._registry.map(from_type)

    def create(self, dependency_type: Type[T]) -> T:
        """Build and return a fully wired instance of ``dependency_type``.

        The override rule for the type is applied once, then the singleton cache is
        consulted with the concrete type. On a miss the graph is built: constructor
        arguments first, then injectable fields, then injectable setters.

        Args:
            dependency_type: The type to build.

        Returns:
            Instance of the concrete type; the cached one for singleton-scoped types.

        Raises:
            InstantiationError: If no usable constructor exists or a constructor raised.
            FieldInjectionError: If an injectable field cannot be assigned.
            SetterInjectionError: If an injectable setter raised.
            ProviderCreationError: If a Provider annotation has no usable target.
            CyclicDependencyError: If a type depends on itself.

        Example:
            >>> car = injector.create(Car)
        """
        concrete_type = self._registry.resolve(dependency_type)
        if not isinstance(concrete_type, type):
            raise InstantiationError(concrete_type, "Only classes can be created.")

        if self._singleton_cache.contains(concrete_type):
            logger.debug("Returning cached singleton %s", qualified_name(concrete_type))
            return self._singleton_cache.get(concrete_type)

        return self._builder.build(concrete_type)

    def provider(self, dependency_type: Type[T]) -> Provider[T]:
        """Return a deferred handle that calls ``create(dependency_type)`` when invoked."""
        return Provider(dependency_type, self)

    def is_cached(self, dependency_type: Type) -> bool:
        """Return True when a singleton instance of ``dependency_type`` is cached."""
        return self._singleton_cache.contains(dependency_type)
