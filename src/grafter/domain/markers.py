"""Markers flagging constructors, fields, setters and types for injection."""

from typing import TYPE_CHECKING, Annotated, Any, Callable, Type, TypeVar, Union, get_args, get_origin

from grafter.domain.enums import Lifetime

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])

INJECT_ATTRIBUTE = "__grafter_inject__"
LIFETIME_ATTRIBUTE = "__grafter_lifetime__"


class InjectedMarker:
    """Metadata placed in ``Annotated`` to flag a class attribute as injectable."""

    def __repr__(self) -> str:
        return "InjectedMarker()"


def inject(member: F) -> F:
    """Mark a constructor, alternate constructor or setter method as injectable.

    Applied to ``__init__`` it flags the constructor; applied to a classmethod
    it flags an alternate constructor; applied to any other method it flags a
    setter called after construction.

    Example:
        >>> class Car:
        ...     @inject
        ...     def __init__(self, engine: Engine):
        ...         self.engine = engine
        ...
        ...     @inject
        ...     def set_radio(self, radio: Radio) -> None:
        ...         self.radio = radio
    """
    target = member.__func__ if isinstance(member, (classmethod, staticmethod)) else member
    setattr(target, INJECT_ATTRIBUTE, True)
    return member


def is_injectable(member: Any) -> bool:
    """Return True when a function (or classmethod wrapping one) carries the inject marker."""
    if isinstance(member, (classmethod, staticmethod)):
        member = member.__func__
    return getattr(member, INJECT_ATTRIBUTE, False) is True


def singleton(cls: Type[T]) -> Type[T]:
    """Mark a class as singleton-scoped.

    The marker is stored on the class itself and is not inherited by subclasses.

    Example:
        >>> @singleton
        ... class Engine:
        ...     pass
    """
    setattr(cls, LIFETIME_ATTRIBUTE, Lifetime.SINGLETON)
    return cls


def lifetime_of(cls: Type) -> Lifetime:
    """Return the lifetime declared directly on ``cls``."""
    return vars(cls).get(LIFETIME_ATTRIBUTE, Lifetime.TRANSIENT)


if TYPE_CHECKING:
    Injected = Union[T, T]  # noqa: PYI016
    """Flag a class attribute for field injection.

    At runtime ``Injected[T]`` becomes ``Annotated[T, InjectedMarker()]``.
    """

else:

    class Injected:
        """Flag a class attribute for field injection.

        At runtime ``Injected[T]`` resolves to ``Annotated[T, InjectedMarker()]``.

        Example:
            >>> class Car:
            ...     radio: Injected[Radio]
        """

        def __class_getitem__(cls, item: T) -> Annotated[T, InjectedMarker]:
            return Annotated[item, InjectedMarker()]


def is_injected_annotation(annotation: Any) -> bool:
    """Return True when annotation is ``Annotated[..., InjectedMarker()]``."""
    if get_origin(annotation) is not Annotated:
        return False
    return any(isinstance(item, InjectedMarker) for item in get_args(annotation)[1:])


def strip_injected_annotation(annotation: Any) -> Any:
    """Return the type wrapped by ``Injected[...]``."""
    if not is_injected_annotation(annotation):
        return annotation
    return get_args(annotation)[0]
