import logging
from typing import Any, Callable, Type

from grafter.application.constructor_resolver import dependency_parameters
from grafter.domain import (
    FieldInjectionError,
    IMemberInspector,
    InjectionError,
    SetterInjectionError,
    qualified_name,
)

logger = logging.getLogger(__name__)


class MemberPopulator:
    """Fills injectable fields, then calls injectable setters, on a constructed instance.

    Fields are assigned with plain ``setattr``; there is no visibility bypass,
    so a field that refuses assignment (read-only property, frozen dataclass,
    missing ``__slots__`` entry) fails the build.

    Attributes:
        _inspector: Supplies the marker answers.
        _resolve_value: Resolves one type hint on behalf of an owning type.
    """

    def __init__(self, inspector: IMemberInspector, resolve_value: Callable[[Type, Any], Any]) -> None:
        self._inspector = inspector
        self._resolve_value = resolve_value

    def populate(self, instance: Any) -> None:
        """Run the field pass, then the setter pass, on ``instance``.

        Raises:
            FieldInjectionError: If a field cannot be assigned.
            SetterInjectionError: If a setter cannot be inspected or raises.
        """
        cls = type(instance)
        self._populate_fields(instance, cls)
        self._call_setters(instance, cls)

    def _populate_fields(self, instance: Any, cls: Type) -> None:
        for field_name, annotation in self._inspector.injectable_fields(cls).items():
            value = self._resolve_value(cls, annotation)
            try:
                setattr(instance, field_name, value)
            except (AttributeError, TypeError, ValueError) as e:
                raise FieldInjectionError(cls, field_name, str(e)) from e
            logger.debug("Injected field %s.%s", qualified_name(cls), field_name)

    def _call_setters(self, instance: Any, cls: Type) -> None:
        for method_name in self._inspector.injectable_methods(cls):
            method = getattr(instance, method_name)
            try:
                parameters = dependency_parameters(method, owner=cls)
            except (TypeError, ValueError) as e:
                raise SetterInjectionError(cls, method_name, str(e)) from e

            arguments = {name: self._resolve_value(cls, hint) for name, hint in parameters.items()}
            try:
                method(**arguments)
            except InjectionError:
                raise
            except Exception as e:
                raise SetterInjectionError(cls, method_name, f"{type(e).__name__}: {e}") from e
            logger.debug("Called injectable setter %s.%s", qualified_name(cls), method_name)
