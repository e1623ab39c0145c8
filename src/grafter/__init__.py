"""
grafter: Marker-driven object-graph construction with overrides, lazy providers and singletons.

Public API exports for the grafter package.
"""

# Application exports
from grafter.application.injector import Injector
from grafter.application.provider import Provider

# Domain exports
from grafter.domain.enums import Lifetime
from grafter.domain.exceptions import (
    CyclicDependencyError,
    FieldInjectionError,
    InjectionError,
    InstantiationError,
    ProviderCreationError,
    SetterInjectionError,
)
from grafter.domain.markers import Injected, inject, singleton
from grafter.domain.models import InjectorOptions

__version__ = "0.1.0"

__all__ = [
    # Injector
    "Injector",
    "InjectorOptions",
    "Provider",
    # Markers
    "inject",
    "singleton",
    "Injected",
    # Enums
    "Lifetime",
    # Exceptions
    "InjectionError",
    "InstantiationError",
    "FieldInjectionError",
    "SetterInjectionError",
    "ProviderCreationError",
    "CyclicDependencyError",
]
