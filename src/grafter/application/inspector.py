import inspect
from typing import Any, Dict, Iterator, List, Tuple, Type, get_type_hints

from grafter.application.provider import declared_annotations, is_injected_provider_annotation
from grafter.domain import (
    IMemberInspector,
    InstantiationError,
    Lifetime,
    ProviderCreationError,
    is_injectable,
    lifetime_of,
)
from grafter.domain.markers import is_injected_annotation, strip_injected_annotation


class MarkerInspector(IMemberInspector):
    """Answers marker questions by reading the ``inject``/``singleton``/``Injected`` markers.

    Members are looked up the way attribute access finds them: a subclass
    attribute shadows a base attribute of the same name, so an inherited
    ``@inject`` method overridden without the marker is no longer injectable.
    """

    def is_abstract(self, cls: Type) -> bool:
        return inspect.isabstract(cls) or getattr(cls, "_is_protocol", False) is True

    def is_singleton(self, cls: Type) -> bool:
        return lifetime_of(cls) is Lifetime.SINGLETON

    def constructors(self, cls: Type) -> List[str]:
        alternates = [
            name for name, member in self._members(cls) if isinstance(member, classmethod) and is_injectable(member)
        ]
        return ["__init__"] + alternates

    def injectable_constructors(self, cls: Type) -> List[str]:
        names = []
        for name in self.constructors(cls):
            member = inspect.getattr_static(cls, name)
            if is_injectable(member):
                names.append(name)
        return names

    def injectable_fields(self, cls: Type) -> Dict[str, Any]:
        """Return ``Injected[...]`` attributes of ``cls`` and its bases mapped to their inner types.

        Raises:
            ProviderCreationError: If the class annotations cannot be evaluated and
                an ``Injected[Provider[...]]`` field is declared.
            InstantiationError: If the class annotations cannot be evaluated.
        """
        try:
            hints = get_type_hints(cls, include_extras=True)
        except Exception as e:
            for klass in cls.__mro__:
                for name, annotation in declared_annotations(klass).items():
                    if is_injected_provider_annotation(annotation):
                        raise ProviderCreationError(cls, f"Provider for field '{name}' cannot be resolved: {e}") from e
            raise InstantiationError(cls, f"Could not evaluate class annotations: {e}") from e

        return {name: strip_injected_annotation(hint) for name, hint in hints.items() if is_injected_annotation(hint)}

    def injectable_methods(self, cls: Type) -> List[str]:
        return [
            name
            for name, member in self._members(cls)
            if name != "__init__" and inspect.isfunction(member) and is_injectable(member)
        ]

    def _members(self, cls: Type) -> Iterator[Tuple[str, Any]]:
        """Yield each attribute name once, base classes first, with the member attribute lookup finds."""
        seen = set()
        for klass in reversed(cls.__mro__):
            if klass is object:
                continue
            for name in vars(klass):
                if name in seen:
                    continue
                seen.add(name)
                yield name, inspect.getattr_static(cls, name)
