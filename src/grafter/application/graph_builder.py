import logging
from typing import Any, Type

from grafter.application.member_populator import MemberPopulator
from grafter.application.provider import Provider, provider_target
from grafter.application.resolution_path import ResolutionPath
from grafter.domain import (
    ConstructionPlan,
    IConstructorResolver,
    IInjector,
    IMemberInspector,
    InjectionError,
    InjectorOptions,
    InstantiationError,
    ISingletonCache,
    qualified_name,
)

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Recursively builds a concrete type and everything it depends on.

    Each dependency is requested from the owning injector, so overrides and the
    singleton cache apply at every level of the graph. ``Provider[T]`` parameters
    are answered with a deferred handle instead of a recursive build.

    Attributes:
        _injector: Entry point used to resolve each dependency.
        _inspector: Supplies the marker answers.
        _constructor_resolver: Selects the constructor of each type.
        _singleton_cache: Cache for singleton-scoped types.
        _populator: Fills injectable fields and setters after construction.
        _path: Tracks the chain of types under construction and reports cycles.
    """

    def __init__(
        self,
        injector: IInjector,
        inspector: IMemberInspector,
        constructor_resolver: IConstructorResolver,
        singleton_cache: ISingletonCache,
        options: InjectorOptions,
    ) -> None:
        self._injector = injector
        self._inspector = inspector
        self._constructor_resolver = constructor_resolver
        self._singleton_cache = singleton_cache
        self._populator = MemberPopulator(inspector, self.resolve_value)
        self._path = ResolutionPath(detect_cycles=options.detect_cycles)

    def build(self, cls: Type) -> Any:
        """Build a fully wired instance of the concrete type ``cls``.

        Singleton-scoped types are built through the cache, which stores the
        instance only once construction and member population have succeeded.

        Raises:
            InjectionError: Any failure while building the graph, no instance is kept.
        """
        if self._inspector.is_singleton(cls):
            return self._singleton_cache.get_or_create(cls, lambda: self._build(cls))
        return self._build(cls)

    def resolve_value(self, owner: Type, annotation: Any) -> Any:
        """Resolve the value for one parameter or field declared on ``owner``.

        Args:
            owner: The type declaring the member.
            annotation: The member's type hint.

        Returns:
            A Provider for ``Provider[T]`` hints, otherwise a built instance.
        """
        target = provider_target(annotation, owner)
        if target is not None:
            return Provider(target, self._injector)
        return self._injector.create(annotation)

    def _build(self, cls: Type) -> Any:
        with self._path.enter(cls):
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Building %s", self._path.describe())
            plan = self._constructor_resolver.select(cls)
            plan.arguments = {name: self.resolve_value(cls, hint) for name, hint in plan.parameters.items()}
            instance = self._instantiate(plan)
            self._populator.populate(instance)
            logger.debug("Built instance of %s", qualified_name(cls))
            return instance

    def _instantiate(self, plan: ConstructionPlan) -> Any:
        try:
            return plan.instantiate()
        except InjectionError:
            raise
        except Exception as e:
            raise InstantiationError(
                plan.target,
                f"Constructor {plan.constructor_name} raised {type(e).__name__}: {e}",
            ) from e
