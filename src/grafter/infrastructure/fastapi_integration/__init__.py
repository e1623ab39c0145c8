"""
FastAPI integration module.

Provides helpers for building endpoint dependencies with a grafter injector.
"""

from .integration import create_fastapi_dependency, injected, install_injector

__all__ = [
    "create_fastapi_dependency",
    "install_injector",
    "injected",
]
