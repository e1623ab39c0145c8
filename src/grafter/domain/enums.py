from enum import Enum


class Lifetime(str, Enum):
    """Defines how long a constructed instance lives.

    Attributes:
        TRANSIENT: New instance built on each ``create()`` call.
        SINGLETON: Single instance cached for the lifetime of the injector.
    """

    TRANSIENT = "transient"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value
