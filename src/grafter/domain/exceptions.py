from typing import List, Optional, Type

from grafter.domain.naming import qualified_name


class InjectionError(Exception):
    """Base exception for every failure raised while building an object graph."""


class InstantiationError(InjectionError):
    """Raised when a type cannot be instantiated.

    This occurs when:
    - The type is abstract and no override is registered for it.
    - No injectable constructor and no zero-argument constructor exist.
    - More than one constructor is marked injectable (strict mode).
    - A constructor parameter lacks a type hint and has no default.
    - The selected constructor raised.

    Attributes:
        cls: The type that could not be instantiated.
        reason: Optional reason for the failure.
    """

    def __init__(self, cls: Type, reason: Optional[str] = None) -> None:
        self.cls = cls
        self.reason = reason
        message = f"Could not create instance of {qualified_name(cls)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class FieldInjectionError(InjectionError):
    """Raised when an injectable field cannot be assigned.

    Attributes:
        cls: The type owning the field.
        field_name: Name of the field.
        reason: Optional reason for the failure.
    """

    def __init__(self, cls: Type, field_name: str, reason: Optional[str] = None) -> None:
        self.cls = cls
        self.field_name = field_name
        self.reason = reason
        message = f"Cannot access field: {field_name} in class: {qualified_name(cls)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class SetterInjectionError(InjectionError):
    """Raised when calling an injectable setter method fails.

    Attributes:
        cls: The type owning the method.
        method_name: Name of the method.
        reason: Optional reason for the failure.
    """

    def __init__(self, cls: Type, method_name: str, reason: Optional[str] = None) -> None:
        self.cls = cls
        self.method_name = method_name
        self.reason = reason
        message = f"Could not inject candidate for class {qualified_name(cls)} in method {method_name}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class ProviderCreationError(InjectionError):
    """Raised when a ``Provider`` parameter does not name a usable target type.

    Attributes:
        cls: The type whose member requested the provider.
        reason: Optional reason for the failure.
    """

    def __init__(self, cls: Type, reason: Optional[str] = None) -> None:
        self.cls = cls
        self.reason = reason
        message = f"Could not create provider for {qualified_name(cls)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class CyclicDependencyError(InjectionError):
    """Raised when a type reappears in its own resolution chain.

    Attributes:
        dependency_chain: List of types involved in the cycle.
    """

    def __init__(self, dependency_chain: List[Type]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join([cls.__name__ for cls in dependency_chain])}"
        super().__init__(message)
