from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, model_validator

from grafter.domain.exceptions import InstantiationError
from grafter.domain.naming import qualified_name


class InjectorOptions(BaseModel):
    """Behaviour switches for an injector.

    Attributes:
        detect_cycles: Fail with CyclicDependencyError when a type reappears in its
            own resolution chain instead of recursing until the interpreter gives up.
        strict_constructors: Reject types declaring more than one injectable
            constructor. When disabled the first one in declaration order wins.
    """

    model_config = ConfigDict(frozen=True)

    detect_cycles: bool = Field(default=True, description="Detect circular constructor dependencies.")
    strict_constructors: bool = Field(
        default=True,
        description="Reject types with more than one injectable constructor.",
    )


class OverrideRule(BaseModel):
    """Value object substituting a requested type with a concrete one.

    Exactly one of ``to_type`` or ``resolver`` must be provided.

    Attributes:
        from_type: The requested (usually abstract) type.
        to_type: The concrete type to build instead.
        resolver: Zero-argument callable returning the concrete type at lookup time.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    from_type: Type = Field(..., description="The requested type being overridden.")
    to_type: Optional[Type] = Field(default=None, description="The concrete type to build instead.")
    resolver: Optional[Callable[[], Type]] = Field(
        default=None,
        description="Callable returning the concrete type when the rule is applied.",
    )

    @model_validator(mode="after")
    def _exactly_one_target(self) -> "OverrideRule":
        if (self.to_type is None) == (self.resolver is None):
            raise ValueError("An override rule needs exactly one of 'to_type' or 'resolver'.")
        return self

    def target(self) -> Type:
        """Return the concrete type this rule substitutes.

        Raises:
            InstantiationError: If the resolver function does not return a class.
        """
        if self.to_type is not None:
            return self.to_type
        resolved = self.resolver()
        if not isinstance(resolved, type):
            raise InstantiationError(
                self.from_type,
                f"Override resolver returned {resolved!r}, which is not a class.",
            )
        return resolved


class ConstructionPlan(BaseModel):
    """The constructor chosen for a type plus the arguments resolved for it.

    Transient: exists only while one type is being built.

    Attributes:
        target: The concrete type being built.
        constructor_name: ``__init__`` or the name of an alternate classmethod constructor.
        factory: Callable producing the instance when called with the arguments.
        parameters: Parameter names mapped to the type hints to resolve.
        injectable: Whether the constructor carries the inject marker.
        arguments: Resolved keyword arguments.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    target: Type = Field(..., description="The concrete type being built.")
    constructor_name: str = Field(..., description="Name of the selected constructor.")
    factory: Callable[..., Any] = Field(..., description="Callable invoked with the resolved arguments.")
    parameters: Dict[str, Any] = Field(
        default_factory=dict,
        description="Parameters to resolve, mapped to their type hints.",
    )
    injectable: bool = Field(default=False, description="Whether the constructor is marked injectable.")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Resolved keyword arguments.")

    def instantiate(self) -> Any:
        """Invoke the constructor with the resolved arguments."""
        return self.factory(**self.arguments)

    def describe(self) -> str:
        """Return a short human-readable description of the plan."""
        return f"{qualified_name(self.target)}.{self.constructor_name}({', '.join(self.parameters)})"
