import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Type, get_type_hints

from grafter.application.provider import declared_annotations, is_provider_annotation
from grafter.domain import (
    ConstructionPlan,
    IConstructorResolver,
    IMemberInspector,
    InstantiationError,
    ProviderCreationError,
    qualified_name,
)

logger = logging.getLogger(__name__)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def required_parameters(function: Callable, bound: bool = True) -> List[inspect.Parameter]:
    """Return the parameters of ``function`` that have no default value.

    Args:
        function: The callable to inspect.
        bound: False when ``function`` is an unbound method whose first
            parameter (``self``) must be skipped.
    """
    parameters = list(inspect.signature(function).parameters.values())
    if not bound:
        parameters = parameters[1:]
    return [param for param in parameters if param.kind not in _VARIADIC and param.default is inspect.Parameter.empty]


def dependency_parameters(function: Callable, bound: bool = True, owner: Optional[Type] = None) -> Dict[str, Any]:
    """Map each required parameter of ``function`` to the type hint to resolve for it.

    Parameters with defaults keep their defaults, ``*args``/``**kwargs`` are ignored.
    String hints may refer to ``owner`` by name even when it is not a module global.

    Raises:
        ProviderCreationError: If the hints cannot be evaluated and a required
            parameter asks for a ``Provider``.
        TypeError: If a required parameter is positional-only, lacks a type hint,
            or the hints cannot be evaluated.
    """
    required = required_parameters(function, bound=bound)
    if not required:
        return {}

    function = getattr(function, "__func__", function)
    try:
        localns = {owner.__name__: owner} if owner is not None else None
        type_hints = get_type_hints(function, localns=localns)
    except Exception as e:
        declared = declared_annotations(function)
        for param in required:
            if is_provider_annotation(declared.get(param.name)):
                raise ProviderCreationError(
                    owner if owner is not None else function,
                    f"Provider for parameter '{param.name}' cannot be resolved: {e}",
                ) from e
        raise TypeError(f"Could not evaluate type hints: {e}") from e

    dependencies = {}
    for param in required:
        if param.kind is inspect.Parameter.POSITIONAL_ONLY:
            raise TypeError(f"Parameter '{param.name}' is positional-only and cannot be injected.")
        if param.name not in type_hints:
            raise TypeError(f"Parameter '{param.name}' lacks type hint and has no default value.")
        dependencies[param.name] = type_hints[param.name]
    return dependencies


class ConstructorResolver(IConstructorResolver):
    """Selects the constructor used to build a concrete type.

    Order of preference:
    1. The single constructor marked with ``@inject`` (``__init__`` or a classmethod).
    2. ``__init__`` when it can be called without arguments.

    Attributes:
        _inspector: Supplies the marker answers.
        _strict: Reject types declaring several injectable constructors.
    """

    def __init__(self, inspector: IMemberInspector, strict: bool = True) -> None:
        self._inspector = inspector
        self._strict = strict

    def select(self, cls: Type) -> ConstructionPlan:
        """Select the constructor to invoke for ``cls``.

        Args:
            cls: The concrete type to build.

        Returns:
            A plan listing the parameters still to be resolved.

        Raises:
            InstantiationError: If ``cls`` is abstract, declares several injectable
                constructors in strict mode, or offers no usable constructor.

        Example:
            >>> class Car:
            ...     @inject
            ...     def __init__(self, engine: Engine):
            ...         self.engine = engine
            >>>
            >>> resolver.select(Car).parameters
            {'engine': <class 'Engine'>}
        """
        if self._inspector.is_abstract(cls):
            raise InstantiationError(cls, "No constructor available: type is abstract and no override is registered.")

        injectable = self._inspector.injectable_constructors(cls)
        if len(injectable) > 1 and self._strict:
            raise InstantiationError(cls, f"More than one constructor is marked injectable: {', '.join(injectable)}.")

        if injectable:
            plan = self._plan(cls, injectable[0])
        else:
            plan = self._zero_argument_plan(cls)

        logger.debug("Selected constructor %s", plan.describe())
        return plan

    def _plan(self, cls: Type, constructor_name: str) -> ConstructionPlan:
        if constructor_name == "__init__":
            factory: Callable[..., Any] = cls
            function, bound = cls.__init__, False
        else:
            factory = getattr(cls, constructor_name)
            function, bound = factory, True

        try:
            parameters = dependency_parameters(function, bound=bound, owner=cls)
        except (TypeError, ValueError) as e:
            raise InstantiationError(cls, f"Constructor {constructor_name}: {e}") from e

        return ConstructionPlan(
            target=cls,
            constructor_name=constructor_name,
            factory=factory,
            parameters=parameters,
            injectable=True,
        )

    def _zero_argument_plan(self, cls: Type) -> ConstructionPlan:
        try:
            required = required_parameters(cls.__init__, bound=False)
        except (TypeError, ValueError) as e:
            raise InstantiationError(cls, f"Cannot inspect constructor: {e}") from e

        if required:
            raise InstantiationError(
                cls,
                f"No injectable, or no zero-arguments constructor found for class {qualified_name(cls)}",
            )

        return ConstructionPlan(target=cls, constructor_name="__init__", factory=cls)
