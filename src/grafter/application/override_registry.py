import logging
from typing import Callable, Dict, Type

from grafter.domain import OverrideRule, qualified_name

logger = logging.getLogger(__name__)


class MappingBuilder:
    """Fluent builder for one override rule.

    Returned by ``Injector.map()``. Nothing is registered until a terminal
    operation (``to`` or ``to_resolver``) is called.

    Example:
        >>> injector.map(PaymentProcessor).to(StripeProcessor)
        >>> injector.map(Clock).to_resolver(lambda: FakeClock if testing else SystemClock)
    """

    def __init__(self, registry: "OverrideRegistry", from_type: Type) -> None:
        self._registry = registry
        self._from_type = from_type

    def to(self, to_type: Type) -> OverrideRule:
        """Substitute the mapped type with ``to_type``.

        Raises:
            pydantic.ValidationError: If ``to_type`` is not a class.
        """
        rule = OverrideRule(from_type=self._from_type, to_type=to_type)
        self._registry.register(rule)
        return rule

    def to_resolver(self, resolver: Callable[[], Type]) -> OverrideRule:
        """Substitute the mapped type with whatever class ``resolver`` returns at lookup time."""
        rule = OverrideRule(from_type=self._from_type, resolver=resolver)
        self._registry.register(rule)
        return rule


class OverrideRegistry:
    """Stores override rules keyed by the requested type.

    A later rule for the same type replaces the earlier one. Resolution performs
    exactly one lookup and never follows a rule's target to another rule.

    Attributes:
        _rules: Override rules keyed by requested type.
    """

    def __init__(self) -> None:
        self._rules: Dict[Type, OverrideRule] = {}

    def map(self, from_type: Type) -> MappingBuilder:
        return MappingBuilder(self, from_type)

    def register(self, rule: OverrideRule) -> None:
        if rule.from_type in self._rules:
            logger.debug("Replacing override rule for %s", qualified_name(rule.from_type))
        self._rules[rule.from_type] = rule

    def resolve(self, dependency_type: Type) -> Type:
        """Return the type to build for ``dependency_type``.

        Args:
            dependency_type: The requested type.

        Returns:
            The rule's target when a rule exists, otherwise ``dependency_type`` unchanged.
        """
        rule = self._rules.get(dependency_type)
        if rule is None:
            return dependency_type
        target = rule.target()
        logger.debug("Override %s -> %s", qualified_name(dependency_type), qualified_name(target))
        return target

    def has_rule(self, dependency_type: Type) -> bool:
        return dependency_type in self._rules

    def rules(self) -> Dict[Type, OverrideRule]:
        """Return a copy of the registered rules."""
        return self._rules.copy()
