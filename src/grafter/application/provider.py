import inspect
import re
from typing import Any, Dict, Generic, Optional, Type, TypeVar, get_args, get_origin

from grafter.domain import IInjector, ProviderCreationError, qualified_name
from grafter.domain.markers import is_injected_annotation, strip_injected_annotation

T = TypeVar("T")

_PROVIDER_TEXT = re.compile(r"^(?:[\w.]*\.)?Provider\s*(?:\[|$)")
_INJECTED_PROVIDER_TEXT = re.compile(r"^(?:[\w.]*\.)?Injected\s*\[\s*(?:[\w.]*\.)?Provider\s*[\[\]]")


class Provider(Generic[T]):
    """Deferred handle that builds its target type each time it is called.

    ``Provider[T]`` is also the annotation requesting such a handle: a constructor
    or setter parameter annotated ``Provider[Engine]`` receives a handle bound to
    ``Engine`` instead of an eagerly built ``Engine``. Nothing is built until the
    handle is invoked, and every invocation is an independent ``create()`` call,
    so singleton-scoped targets come back identical while transient ones do not.

    Attributes:
        _target: The type built on each call.
        _injector: The injector performing the build.

    Example:
        >>> class Garage:
        ...     @inject
        ...     def __init__(self, cars: Provider[Car]):
        ...         self.cars = cars
        ...
        ...     def park_new(self) -> Car:
        ...         return self.cars()
    """

    __slots__ = ("_target", "_injector")

    def __init__(self, target: Type[T], injector: IInjector) -> None:
        self._target = target
        self._injector = injector

    @property
    def target(self) -> Type[T]:
        """The type this handle builds."""
        return self._target

    def get(self) -> T:
        """Build and return a fully wired instance of the target type."""
        return self._injector.create(self._target)

    def __call__(self) -> T:
        return self.get()

    def __repr__(self) -> str:
        return f"Provider[{qualified_name(self._target)}]"


def provider_target(annotation: Any, owner: Type) -> Optional[Type]:
    """Return ``T`` when ``annotation`` is ``Provider[T]``, or None for any other annotation.

    Args:
        annotation: The parameter or field type hint.
        owner: The type declaring the member, used in error messages.

    Raises:
        ProviderCreationError: If the annotation is a Provider without a usable target class.
    """
    if annotation is Provider:
        raise ProviderCreationError(owner, "Provider annotation has no target type.")
    if get_origin(annotation) is not Provider:
        return None
    target = get_args(annotation)[0]
    if not isinstance(target, type):
        raise ProviderCreationError(owner, f"Provider target {target!r} is not a class.")
    return target


def is_provider_annotation(annotation: Any) -> bool:
    """Return True when ``annotation`` requests a ``Provider``, even if its target cannot be evaluated.

    Accepts both evaluated annotations (``Provider[T]``, ``Provider["T"]``) and
    their unevaluated source text.
    """
    if isinstance(annotation, str):
        return _PROVIDER_TEXT.match(annotation.strip()) is not None
    return annotation is Provider or get_origin(annotation) is Provider


def is_injected_provider_annotation(annotation: Any) -> bool:
    """Return True when ``annotation`` is ``Injected[Provider[...]]``, evaluated or not."""
    if isinstance(annotation, str):
        return _INJECTED_PROVIDER_TEXT.match(annotation.strip()) is not None
    return is_injected_annotation(annotation) and is_provider_annotation(strip_injected_annotation(annotation))


def declared_annotations(obj: Any) -> Dict[str, Any]:
    """Return the annotations ``obj`` declares without evaluating string hints."""
    try:
        return inspect.get_annotations(obj)
    except NameError:
        return {}
