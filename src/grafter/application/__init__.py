"""
Application layer - The graph construction engine.

This layer builds object graphs from the domain markers, rules and interfaces.
It depends only on the Domain layer.
"""

from .constructor_resolver import ConstructorResolver
from .graph_builder import GraphBuilder
from .injector import Injector
from .inspector import MarkerInspector
from .member_populator import MemberPopulator
from .override_registry import MappingBuilder, OverrideRegistry
from .provider import Provider
from .resolution_path import ResolutionPath
from .singleton_cache import SingletonCache

__all__ = [
    "Injector",
    "GraphBuilder",
    "ConstructorResolver",
    "MemberPopulator",
    "MarkerInspector",
    "OverrideRegistry",
    "MappingBuilder",
    "Provider",
    "SingletonCache",
    "ResolutionPath",
]
