"""
Domain layer - Core rules and models of object-graph construction.

This layer contains the markers, value objects, errors and interfaces of the engine.
It has no dependencies on other layers.
"""

from .enums import Lifetime
from .exceptions import (
    CyclicDependencyError,
    FieldInjectionError,
    InjectionError,
    InstantiationError,
    ProviderCreationError,
    SetterInjectionError,
)
from .interfaces import IConstructorResolver, IInjector, IMemberInspector, ISingletonCache
from .markers import Injected, InjectedMarker, inject, is_injectable, lifetime_of, singleton
from .models import ConstructionPlan, InjectorOptions, OverrideRule
from .naming import qualified_name

__all__ = [
    # Enums
    "Lifetime",
    # Exceptions
    "InjectionError",
    "InstantiationError",
    "FieldInjectionError",
    "SetterInjectionError",
    "ProviderCreationError",
    "CyclicDependencyError",
    # Interfaces
    "IInjector",
    "IMemberInspector",
    "IConstructorResolver",
    "ISingletonCache",
    # Markers
    "inject",
    "singleton",
    "Injected",
    "InjectedMarker",
    "is_injectable",
    "lifetime_of",
    # Models
    "OverrideRule",
    "ConstructionPlan",
    "InjectorOptions",
    # Helpers
    "qualified_name",
]
