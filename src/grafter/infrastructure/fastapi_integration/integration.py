from typing import Callable, Type, TypeVar

from fastapi import FastAPI, Request

from grafter.domain import IInjector

T = TypeVar("T")

STATE_ATTRIBUTE = "grafter_injector"


def create_fastapi_dependency(injector: IInjector, dependency_type: Type[T]) -> Callable[[], T]:
    """Create a FastAPI Depends() callable that builds the type with the given injector.

    Singleton-scoped types come back from the injector's cache, everything else
    is built fresh for each request.

    Args:
        injector: The injector building the dependency.
        dependency_type: The type to build when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> injector = Injector()
        >>> get_user_service = create_fastapi_dependency(injector, UserService)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(service: UserService = Depends(get_user_service)):
        ...     return service.list_all()
    """

    def dependency() -> T:
        """Build the dependency with the injector."""
        return injector.create(dependency_type)

    return dependency


def install_injector(app: FastAPI, injector: IInjector) -> None:
    """Attach an injector to the application state for use by ``injected()``.

    Args:
        app: The FastAPI application.
        injector: The injector serving the application's endpoints.
    """
    setattr(app.state, STATE_ATTRIBUTE, injector)


def injected(dependency_type: Type[T]) -> Callable[[Request], T]:
    """Create a FastAPI dependency that builds the type with the app's installed injector.

    Requires ``install_injector()`` to have been called on the application.

    Args:
        dependency_type: The type to build.

    Returns:
        A callable that resolves from the injector stored on ``request.app.state``.

    Example:
        >>> install_injector(app, injector)
        >>>
        >>> @app.get("/checkout")
        >>> def checkout(service: CheckoutService = Depends(injected(CheckoutService))):
        ...     return service.total()
    """

    def app_dependency(request: Request) -> T:
        """Build from the injector installed on the application."""
        injector = getattr(request.app.state, STATE_ATTRIBUTE, None)
        if injector is None:
            raise RuntimeError("Application does not have an injector. Did you forget to call install_injector()?")
        return injector.create(dependency_type)

    return app_dependency
